from unittest import mock

import pytest

from yabms.harness import Options, parse_options
from yabms.vvadd_bench import DEFAULTS, run, main


def _options(impl, name, **kw):
    values = dict(impl=impl, impl_name=name, size=64, nruns=2, size_scale=4, wrap_affinity=True)
    values.update(kw)
    return Options(**values)


@pytest.mark.parametrize(
    "impl,name",
    [("naive", "scalar_naive"), ("opt", "scalar_opt"), ("vec", "vectorized"), ("para", "parallelized")],
)
def test_run_matches_reference(impl, name, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    result = run(_options(impl, name, nthreads=2))
    assert result["match"] is True
    assert result["guard"] is True
    assert len(result["runtimes"]) == 2
    assert (tmp_path / f"{name}_runtimes.csv").exists()
    assert "MATCHING" in capsys.readouterr().out


def test_run_odd_element_count(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    result = run(_options("opt", "scalar_opt", size=4 * 13))
    assert result["match"] and result["guard"]


def test_run_rejects_missing_impl():
    with pytest.raises(ValueError):
        run(Options())


def test_defaults_scale_size():
    assert DEFAULTS.size_scale == 4
    assert DEFAULTS.wrap_affinity is True
    opts = parse_options(["-s", "3"], DEFAULTS)
    assert opts.size == 12


def test_main_runs(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    with mock.patch("os.nice", create=True), mock.patch(
        "os.sched_setscheduler", create=True
    ), mock.patch("os.sched_get_priority_max", return_value=1, create=True), mock.patch(
        "os.sched_param", create=True
    ), mock.patch("os.SCHED_FIFO", 1, create=True), mock.patch(
        "os.sched_setaffinity", create=True
    ) as affinity:
        assert main(["-i", "vec", "-s", "16", "--nruns", "3", "-n", "2", "-c", "3"]) == 0
    affinity.assert_called_once_with(0, {0, 1})
    out = capsys.readouterr().out
    assert "MATCHING" in out
    lines = (tmp_path / "vectorized_runtimes.csv").read_text().splitlines()
    assert lines[1] == "num_of_runs,3"


def test_main_unknown(capsys):
    assert main(["-i", "nope"]) == 1
    assert 'Unknown "unknown" implementation' in capsys.readouterr().out


def test_main_help_shows_element_count(capsys):
    assert main(["--help"]) == 0
    out = capsys.readouterr().out
    assert f"(default = {DEFAULTS.size // 4})" in out