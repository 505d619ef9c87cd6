"""Source64 adapter over a binary stream."""

from __future__ import annotations

from typing import BinaryIO, Literal

WORD_BYTES = 8


class ReaderSource:
    """Read unsigned 64-bit values from a file-like object.

    No seeding is involved, so this can wrap an entropy device or any recorded byte
    stream. Partial reads are retried until a full 8-byte word arrives; pass a
    buffered reader for speed.
    """

    def __init__(self, stream: BinaryIO, byteorder: Literal["little", "big"] = "little") -> None:
        if byteorder not in ("little", "big"):
            raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}")
        self.stream = stream
        self.byteorder = byteorder

    def seed(self, seed: int) -> None:
        """No-op; a byte stream cannot be reseeded."""

    def next(self) -> int:
        """Read one word, retrying partial reads until 8 bytes arrive or the stream ends."""

        buf = b""
        while len(buf) < WORD_BYTES:
            chunk = self.stream.read(WORD_BYTES - len(buf))
            if chunk is None:
                raise BlockingIOError("stream has no data ready; wrap non-blocking streams before reading")
            if not chunk:
                raise EOFError(f"expected {WORD_BYTES} bytes from stream, got {len(buf)}")
            buf += chunk
        return int.from_bytes(buf, byteorder=self.byteorder, signed=False)

    def int63(self) -> int:
        return self.next() >> 1
