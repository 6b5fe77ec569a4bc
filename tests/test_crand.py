import pytest

from yabms.crand import RAND_MAX, CRand


def _take(rng, count):
    return [rng.rand() for _ in range(count)]


def test_seed_one_matches_c_library_sequence():
    assert _take(CRand(1), 3) == [1804289383, 846930886, 1681692777]


def test_seed_zero_behaves_like_seed_one():
    assert _take(CRand(0), 20) == _take(CRand(1), 20)


def test_same_seed_gives_same_sequence():
    first = _take(CRand(1), 3)
    second = _take(CRand(1), 3)
    assert first == [1804289383, 846930886, 1681692777]
    assert second == [1804289383, 846930886, 1681692777]
    assert _take(CRand(0xDEADBEEF), 50) == _take(CRand(0xDEADBEEF), 50)


def test_different_seeds_give_different_sequences():
    assert _take(CRand(0xDEADBEEF), 10) != _take(CRand(1), 10)


def test_seed_is_taken_modulo_32_bits():
    assert _take(CRand(-1), 10) == _take(CRand(0xFFFFFFFF), 10)
    assert _take(CRand(1 << 32 | 7), 10) == _take(CRand(7), 10)


@pytest.mark.parametrize("seed", [1, 42, 0xDEADBEEF, 0x7FFFFFFF])
def test_values_stay_within_range(seed):
    values = _take(CRand(seed), 1000)
    assert all(0 <= value <= RAND_MAX for value in values)
    assert CRand.RAND_MAX == RAND_MAX


def test_sequence_is_not_constant():
    values = _take(CRand(0xDEADBEEF), 100)
    assert len(set(values)) > 90