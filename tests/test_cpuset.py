import pytest

from yabms.cpuset import CpuSet


def test_new_set_is_empty():
    cpus = CpuSet()
    assert cpus.mask == 0
    assert not any(cpus.isset(n) for n in range(32))


def test_set_and_isset():
    cpus = CpuSet()
    cpus.set(3)
    cpus.set(5)
    assert cpus.isset(3)
    assert cpus.isset(5)
    assert not cpus.isset(4)
    assert list(cpus) == [3, 5]
    assert len(cpus) == 2


def test_mask_bits():
    cpus = CpuSet()
    cpus.set(0)
    cpus.set(2)
    assert cpus.mask == (1 << 0) | (1 << 2)


def test_zero_clears():
    cpus = CpuSet()
    cpus.set(7)
    cpus.zero()
    assert cpus.mask == 0
    assert not cpus.isset(7)


def test_set_is_idempotent():
    cpus = CpuSet()
    cpus.set(9)
    mask = cpus.mask
    cpus.set(9)
    assert cpus.mask == mask


def test_first_finds_lowest():
    cpus = CpuSet()
    cpus.set(6)
    cpus.set(2)
    assert cpus.first(8) == 2


def test_first_returns_limit_when_none_found():
    cpus = CpuSet()
    assert cpus.first(8) == 8
    cpus.set(10)
    assert cpus.first(8) == 8
    assert cpus.first(32) == 10


@pytest.mark.parametrize("num", [-1, 32, 100])
def test_out_of_range_cpu(num):
    cpus = CpuSet()
    with pytest.raises(ValueError):
        cpus.set(num)
    with pytest.raises(ValueError):
        cpus.isset(num)