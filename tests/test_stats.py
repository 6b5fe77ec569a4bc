from unittest import mock

import pytest

from yabms.stats import Stopwatch, StatsRound, outlier_free_rounds, write_runtimes_csv


def test_uniform_runtimes_need_one_round():
    rounds = outlier_free_rounds([10, 10, 10, 10], 3)
    assert len(rounds) == 1
    only = rounds[0]
    assert only.average == 10
    assert only.stdev == 0
    assert only.masked == 0
    assert only.active == 4


def test_single_outlier_is_dropped():
    runtimes = [100] * 9 + [1000]
    rounds = outlier_free_rounds(runtimes, 2)
    assert len(rounds) == 2
    assert rounds[0].active == 10
    assert rounds[0].masked == 1
    assert rounds[0].maximum == 1000
    assert rounds[1].active == 9
    assert rounds[1].masked == 0
    assert rounds[1].average == 100
    assert rounds[1].maximum == 100


def test_rounds_are_numbered_and_shrink():
    rounds = outlier_free_rounds([5, 5, 5, 5, 6, 50, 500], 1)
    assert [r.number for r in rounds] == list(range(1, len(rounds) + 1))
    for before, after in zip(rounds, rounds[1:]):
        assert after.active == before.active - before.masked
    assert rounds[-1].masked == 0


def test_average_is_integer_division():
    rounds = outlier_free_rounds([1, 2], 5)
    assert rounds[-1].average == 1


def test_returns_stats_round_objects_with_min_max():
    rounds = outlier_free_rounds([3, 7], 10)
    assert rounds == [
        StatsRound(number=1, average=5, stdev=2, active=2, masked=0, minimum=3, maximum=7)
    ]


def test_empty_runtimes_rejected():
    with pytest.raises(ValueError):
        outlier_free_rounds([], 3)


def test_negative_stdevs_rejected():
    with pytest.raises(ValueError):
        outlier_free_rounds([1, 2, 3], -1)


def test_all_masked_raises():
    with pytest.raises(ValueError):
        outlier_free_rounds([1, 4], 0)


def test_stopwatch_measures_with_clock():
    with mock.patch("time.monotonic_ns", side_effect=[100, 250]):
        with Stopwatch() as watch:
            pass
    assert watch.elapsed_ns() == 150


def test_stopwatch_not_started():
    with pytest.raises(RuntimeError):
        Stopwatch().elapsed_ns()


def test_stopwatch_real_clock_non_negative():
    with Stopwatch() as watch:
        sum(range(1000))
    assert watch.elapsed_ns() >= 0


def test_write_runtimes_csv(tmp_path):
    target = tmp_path / "scalar_naive_runtimes.csv"
    written = write_runtimes_csv(target, "scalar_naive", [1, 2, 3], 2)
    assert written == target
    assert target.read_text() == (
        "impl,scalar_naive\nnum_of_runs,3\nruntimes, 1, 2, 3\navg,2"
    )


def test_write_runtimes_csv_no_runs(tmp_path):
    target = tmp_path / "vectorized_runtimes.csv"
    write_runtimes_csv(target, "vectorized", [], 0)
    assert target.read_text() == "impl,vectorized\nnum_of_runs,0\nruntimes\navg,0"