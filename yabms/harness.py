"""Command-line harness shared by the benchmarks, and the template benchmark.

The harness parses the common options, raises the process priority, pins it
to the requested CPUs, times an implementation repeatedly, verifies its
output against a reference, reports outlier-free statistics and dumps the
runtimes to ``<impl>_runtimes.csv``.
"""

from __future__ import annotations

import dataclasses
import os
import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .buffers import (
    alloc_data,
    alloc_init_data,
    check_guard,
    check_match,
    match_label,
    set_guard,
)
from .crand import CRand
from .stats import Stopwatch, outlier_free_rounds, write_runtimes_csv

SIZE_DATA = 4 * 1024 * 1024
SEED = 0xDEADBEEF
REPEATS = 16

IMPLEMENTATION_NAMES = {
    "naive": "scalar_naive",
    "opt": "scalar_opt",
    "vec": "vectorized",
    "para": "parallelized",
}
UNKNOWN_IMPL = "unknown"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Options:
    """Settings taken from the command line."""

    impl: Optional[str] = None
    impl_name: Optional[str] = None
    help: bool = False
    nthreads: int = 1
    cpu: int = 0
    size: int = SIZE_DATA
    nruns: int = 10000
    nstdevs: int = 3
    size_scale: int = 1
    wrap_affinity: bool = False


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


_INT_OPTIONS = {
    "--nruns": "nruns",
    "--nstdevs": "nstdevs",
    "-n": "nthreads",
    "--nthreads": "nthreads",
    "-c": "cpu",
    "--cpu": "cpu",
}


def parse_options(argv: Sequence[str], defaults: Options) -> Options:
    """Parse the arguments that follow the program name; unknown ones are ignored."""
    changes: dict[str, Any] = {}
    args = iter(argv)

    def value_of(flag: str) -> str:
        try:
            return next(args)
        except StopIteration:
            raise ValueError(f"option {flag} needs a value") from None

    for arg in args:
        if arg in ("-i", "--impl"):
            key = value_of(arg)
            if key in IMPLEMENTATION_NAMES:
                changes["impl"] = key
                changes["impl_name"] = IMPLEMENTATION_NAMES[key]
            else:
                changes["impl"] = None
                changes["impl_name"] = UNKNOWN_IMPL
        elif arg in ("-s", "--size"):
            changes["size"] = _atoi(value_of(arg)) * defaults.size_scale
        elif arg in _INT_OPTIONS:
            changes[_INT_OPTIONS[arg]] = _atoi(value_of(arg))
        elif arg in ("-h", "--help"):
            changes["help"] = True
    return dataclasses.replace(defaults, **changes)


def usage(prog: str, options: Options) -> str:
    """Return the usage message, showing the current values as defaults."""
    lines = [
        "",
        "Usage:",
        f"  {prog} {{-i | --impl}} impl_str [Options]",
        "  ",
        "  Required:",
        "    -i | --impl      Available implementations = {naive, opt, vec, para}",
        "    ",
        "  Options:",
        "    -h | --help      Print this message",
        f"    -n | --nthreads  Set number of threads available (default = {options.nthreads})",
        f"    -c | --cpu       Set the main CPU for the program (default = {options.cpu})",
        "    -s | --size      Size of input and output data "
        f"(default = {options.size // options.size_scale})",
        f"         --nruns     Number of runs to the implementation (default = {options.nruns})",
        "         --stdevs    Number of standard deviation to exclude outliers "
        f"(default = {options.nstdevs})",
        "",
    ]
    return "\n".join(lines) + "\n"


def _affinity_cpus(options: Options) -> set[int]:
    if options.wrap_affinity:
        if options.nthreads <= 0:
            return set()
        return {(options.cpu + i) % options.nthreads for i in range(options.nthreads)}
    return {options.cpu + i for i in range(options.nthreads)}


def _try_nice(level: int) -> bool:
    try:
        os.nice(level)
    except (OSError, AttributeError):
        return False
    return True


def configure_scheduler(options: Options) -> int:
    """Raise priority, ask for FIFO scheduling and set CPU affinity.

    Returns the niceness level reported as reached.
    """
    print("Setting up schedulers and affinity:")
    print("  * Setting the niceness level:")
    level = -20
    while True:
        print(f"      -> trying niceness level = {level}")
        if _try_nice(level):
            break
        tried = level
        level += 1
        if tried == 0:
            break
    print(f"    + Process has niceness level = {level}")

    if hasattr(os, "sched_setscheduler"):
        print("  * Setting up FIFO scheduling scheme and high priority ... ", end="")
        try:
            policy = os.SCHED_FIFO
            param = os.sched_param(os.sched_get_priority_max(policy))
            os.sched_setscheduler(0, policy, param)
        except (OSError, ValueError, AttributeError):
            print("Failed")
        else:
            print("Succeeded")

        print("  * Setting up scheduling affinity ... ", end="")
        try:
            os.sched_setaffinity(0, _affinity_cpus(options))
        except (OSError, ValueError, AttributeError, OverflowError):
            print("Failed")
        else:
            print("Succeeded")
    print()
    return level


def time_runs(fn: Callable[[Any], Any], args: Any, nruns: int, repeats: int) -> list[int]:
    """Time ``nruns`` batches of ``repeats`` calls; return ns per call for each batch."""
    if nruns < 0:
        raise ValueError(f"number of runs must be >= 0, got {nruns}")
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    runtimes = []
    for _ in range(nruns):
        with Stopwatch() as watch:
            for _ in range(repeats):
                fn(args)
        runtimes.append(watch.elapsed_ns() // repeats)
    return runtimes


def verification_message(match: bool, guard: bool) -> str:
    """Describe the outcome of the result and buffer-overrun checks."""
    if match and guard:
        return "Success"
    if guard:
        return "Fail, but no buffer overruns"
    if match:
        return "Success, but failed buffer overruns check"
    return "Failed, and failed buffer overruns check"


def report_statistics(runtimes: Sequence[int], nstdevs: int) -> int:
    """Print every statistics round and return the outlier-free average."""
    print("  * Running statistics:")
    rounds = outlier_free_rounds(runtimes, nstdevs)
    for stats_round in rounds:
        print(f"    + Starting statistics run number #{stats_round.number}:")
        print(f"      - Standard deviation = {stats_round.stdev}")
        print(f"      - Average = {stats_round.average}")
        print(f"      - Number of active elements = {stats_round.active}")
        print(f"      - Number of masked-off = {stats_round.masked}")
    return rounds[-1].average


def dump_runtimes(impl_name: str, runtimes: Sequence[int], avg: int) -> Optional[Path]:
    """Write ``<impl_name>_runtimes.csv``; return its path, or None on failure."""
    filename = f"{impl_name}_runtimes.csv"
    print("  * Dumping runtime informations:")
    print(f"    - Filename: {filename}")
    print("    - Opening file .... ", end="")
    try:
        path = write_runtimes_csv(filename, impl_name, runtimes, avg)
    except OSError:
        print("Failed")
        return None
    print("Succeeded")
    print("    - Writing runtimes ... Finished")
    print("    - Closing file handle .... Finished")
    return path


@dataclass
class _TemplateArgs:
    input: bytearray
    output: bytearray
    size: int
    cpu: int = 0
    nthreads: int = 1


def _template_impl(args: _TemplateArgs) -> None:
    """The template's implementations have no work to do."""
    return None


def _run_template(options: Options) -> bool:
    rng = CRand(SEED)
    size = options.size
    src = alloc_init_data(rng, size)
    ref = alloc_init_data(rng, size + 4)
    dest = alloc_data(size + 4)
    set_guard(ref, size)
    set_guard(dest, size)

    _template_impl(_TemplateArgs(src, ref, size, options.cpu, options.nthreads))
    args = _TemplateArgs(src, dest, size, options.cpu, options.nthreads)

    print(f'Running "{options.impl_name}" implementation:')
    print(f"  * Invoking the implementation {options.nruns} times .... ", end="")
    runtimes = time_runs(_template_impl, args, options.nruns, REPEATS)
    print("Finished")

    print("  * Verifying results .... ", end="")
    match = check_match(ref, dest, size)
    guard = check_guard(dest, size)
    print(verification_message(match, guard))

    avg = report_statistics(runtimes, options.nstdevs)
    print(f"  * Runtimes ({match_label(match)}):  {avg} ns")
    dump_runtimes(options.impl_name or UNKNOWN_IMPL, runtimes, avg)
    print()
    return match


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the template benchmark; ``argv`` excludes the program name."""
    prog = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "yabms"
    if argv is None:
        argv = sys.argv[1:]
    options = parse_options(argv, Options())
    if options.help or options.impl is None:
        if not options.help:
            print()
            if options.impl_name is not None:
                print(f'ERROR: Unknown "{options.impl_name}" implementation.')
            else:
                print("ERROR: No implementation was chosen.")
        print(usage(prog, options), end="")
        return 0 if options.help else 1

    configure_scheduler(options)
    _run_template(options)
    return 0


if __name__ == "__main__":
    sys.exit(main())