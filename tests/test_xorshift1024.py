from __future__ import annotations

import numpy as np
import pytest

from rand64.seed import SEED1
from rand64.splitmix64 import MASK64, SplitMix64
from rand64.xorshift1024 import JUMP, SCRAMBLE_MUL, STATE_WORDS, Xorshift1024Star

REFERENCE_HIGH32 = [3332849200, 1164738618, 456220800, 3523432244]
REFERENCE_UINT64 = [
    10311270752396438174,
    3766918502733849924,
    15396074446274990069,
    15679784721060022461,
]
REFERENCE_AFTER_JUMP = [
    17611978421349593128,
    17883908500225900349,
    5813023629112120298,
    1166142030667905408,
]


def _synthetic_state() -> list[int]:
    return [((i + 1) * 0x0123456789ABCDEF) & MASK64 for i in range(STATE_WORDS)]


def test_seed_uses_sixteen_splitmix_draws() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    expander = SplitMix64(SEED1)
    assert rng.state == [expander.next() for _ in range(STATE_WORDS)]
    assert rng.p == 0


def test_reference_outputs_for_published_seed() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    assert [rng.next() >> 32 for _ in range(4)] == REFERENCE_HIGH32
    assert [rng.next() for _ in range(4)] == REFERENCE_UINT64


def test_next_rewrites_one_slot_and_rotates_index() -> None:
    rng = Xorshift1024Star(_synthetic_state())
    before = list(rng.state)

    rng.next()

    assert rng.p == 1
    changed = [i for i in range(STATE_WORDS) if rng.state[i] != before[i]]
    assert changed == [1]


def test_index_wraps_after_sixteen_draws() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    for _ in range(STATE_WORDS):
        rng.next()
    assert rng.p == 0


def test_outputs_stay_within_64_bits() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    assert all(0 <= rng.next() <= MASK64 for _ in range(1000))


def test_dice_mapping_stays_in_range() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    rolls = {(rng.next() >> 32) % 6 + 1 for _ in range(10_000)}
    assert rolls == {1, 2, 3, 4, 5, 6}


def test_jump_table_shape() -> None:
    assert len(JUMP) == STATE_WORDS
    assert all(0 <= word <= MASK64 for word in JUMP)


def test_jump_rewrites_every_slot_and_keeps_index() -> None:
    rng = Xorshift1024Star(_synthetic_state())
    for _ in range(5):
        rng.next()
    before = list(rng.state)

    rng.jump()

    assert rng.p == 5
    assert all(after != old for after, old in zip(rng.state, before))


def test_jump_commutes_with_next() -> None:
    base = Xorshift1024Star.from_seed(SEED1)

    a = base.copy()
    a.next()
    a.jump()

    b = base.copy()
    b.jump()
    b.next()

    assert a.getstate() == b.getstate()
    assert [a.next() for _ in range(8)] == [b.next() for _ in range(8)]


def test_jump_of_zero_state_stays_zero() -> None:
    rng = Xorshift1024Star()
    rng.jump()
    assert rng.state == [0] * STATE_WORDS
    assert rng.next() == 0


def test_spawn_returns_successive_jumps_without_touching_parent() -> None:
    parent = Xorshift1024Star.from_seed(SEED1)
    snapshot = parent.getstate()

    first, second = parent.spawn(2)

    assert parent.getstate() == snapshot
    once = parent.copy()
    once.jump()
    twice = once.copy()
    twice.jump()
    assert first == once
    assert second == twice

    heads = [tuple(int(v) for v in stream.fill(4)) for stream in (parent.copy(), first, second)]
    assert len(set(heads)) == 3


def test_copy_is_independent() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    clone = rng.copy()
    rng.next()
    assert clone.p == 0
    assert clone.next() == Xorshift1024Star.from_seed(SEED1).next()


def test_getstate_setstate_round_trip() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    for _ in range(7):
        rng.next()
    snapshot = rng.getstate()
    expected = [rng.next() for _ in range(5)]

    rng.setstate(snapshot)
    assert [rng.next() for _ in range(5)] == expected


def test_setstate_validates_snapshot() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    with pytest.raises(ValueError):
        rng.setstate(([1] * STATE_WORDS, 16))
    with pytest.raises(ValueError):
        rng.setstate(([1] * 15, 0))


def test_explicit_state_is_validated() -> None:
    with pytest.raises(ValueError, match="exactly 16 words"):
        Xorshift1024Star([1, 2, 3])
    with pytest.raises(ValueError, match="p must be"):
        Xorshift1024Star(_synthetic_state(), p=-1)
    assert Xorshift1024Star([-1] * STATE_WORDS).state == [MASK64] * STATE_WORDS


def test_seed_from_slice() -> None:
    words = _synthetic_state()
    rng = Xorshift1024Star.from_seed(SEED1)
    rng.next()

    rng.seed_from_slice(words)

    assert rng.state == words
    assert rng.p == 0
    with pytest.raises(ValueError, match="all zero"):
        rng.seed_from_slice([0] * STATE_WORDS)
    with pytest.raises(ValueError, match="exactly 16 words"):
        rng.seed_from_slice(words[:8])


def test_fill_matches_next() -> None:
    bulk = Xorshift1024Star.from_seed(SEED1)
    values = bulk.fill(8)
    assert values.dtype == np.uint64
    assert [int(v) >> 32 for v in values[:4]] == REFERENCE_HIGH32
    assert [int(v) for v in values[4:]] == REFERENCE_UINT64
    with pytest.raises(ValueError):
        bulk.fill(-1)


def test_int63_is_non_negative_63_bit() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    rng.next()
    rng.next()
    rng.next()
    rng.next()
    assert rng.int63() == REFERENCE_UINT64[0] >> 1


def test_scramble_multiplier() -> None:
    assert SCRAMBLE_MUL == 1181783497276652981
    rng = Xorshift1024Star(_synthetic_state())
    out = rng.next()
    assert out == (rng.state[1] * 1181783497276652981) & MASK64


def test_jump_matches_reference_stream() -> None:
    rng = Xorshift1024Star.from_seed(SEED1)
    for _ in range(8):
        rng.next()

    rng.jump()

    assert rng.p == 8
    assert [rng.next() for _ in range(4)] == REFERENCE_AFTER_JUMP


def test_index_must_be_an_integer() -> None:
    with pytest.raises(TypeError, match="p must be an integer"):
        Xorshift1024Star(_synthetic_state(), p=1.5)  # type: ignore[arg-type]
    rng = Xorshift1024Star(_synthetic_state(), p=np.int64(3))  # type: ignore[arg-type]
    assert type(rng.p) is int
    assert rng.p == 3
    with pytest.raises(TypeError):
        rng.setstate((_synthetic_state(), "2"))
