# yabms

A small microbenchmark harness. Each benchmark runs one of several
implementations of the same kernel many times and checks the result. It also
checks a guard word placed past the end of the output buffer. It then reports
an outlier-free average runtime and writes every runtime to a CSV file in the
working directory.

## Install

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Commands

- `yabms-vvadd`: element-wise addition of two 32-bit integer vectors
  (`dest = src0 + src1`, wrapping on overflow). The inputs are filled from a
  fixed-seed pseudo-random generator, so every run sees the same data. The
  output is compared with a reference computed by `impl_ref`.
- `yabms-mmultopt`: single-precision matrix multiply `R = A x B`. The matrices
  are read as whitespace-separated floats from `matrix_A_float.txt` (M x N),
  `matrix_B_float.txt` (N x P) and `matrix_C_float.txt` (M x P) in the working
  directory. The last file is both the initial content of `R` and the golden
  result. `R` is compared with it element by element, with a tolerance of
  0.05. Every value read is echoed. A missing or short file prints an error
  and the command exits with status 1.
- `yabms-template`: the bare harness. Its kernels do no work.

Examples:

```
yabms-vvadd -i naive
yabms-vvadd -i vec --size 1048576 --nruns 100
yabms-mmultopt -i naive -r 4 -c 4 -p 4
yabms-mmultopt -i opt -r 4 -c 4 -p 4 -b 2
yabms-template --help
```

### Options

Required:

- `-i | --impl`: one of `naive`, `opt`, `vec` or `para`. These run the
  `scalar_naive`, `scalar_opt`, `vectorized` and `parallelized` kernels.

Options:

- `-h | --help`: print usage and exit with status 0. A missing or unknown
  implementation prints an error and the usage, and exits with status 1.
- `-n | --nthreads`: number of threads available (default 1).
- `-c | --cpu`: main CPU for the program (default 0). In `yabms-mmultopt`,
  `-c` sets the matrix dimension N instead, so only `--cpu` sets the CPU there.
- `-s | --size`: size of the byte buffers used for the guard check. For
  `yabms-template` it is in bytes (default 4194304). For `yabms-vvadd` it is
  in 32-bit elements (default 1048576).
- `--nruns`: number of timed runs (default 10000). `yabms-mmultopt` always
  times 10 runs.
- `--nstdevs`: number of standard deviations used to exclude outliers
  (default 3).

`yabms-mmultopt` also takes these options. Each one echoes its value as it is
read.

- `-r | --R`: the dimension M.
- `-c | --C`: the dimension N.
- `-p | --P`: the dimension P.
- `-b | --block`: the block size for the `opt` kernel.

Numeric values are read the way `atoi` reads them: leading digits only, and 0
when there are none.

### What a run does

1. It tries to raise the process priority, starting at niceness -20 and
   working upwards until a level is accepted. Where the platform supports it,
   it also asks for FIFO scheduling and pins the process to the requested
   CPUs. It reports whether each step succeeded.
2. It times the chosen kernel. Each recorded runtime is the mean of 16
   back-to-back calls, measured on the monotonic clock in nanoseconds.
3. It prints one of four outcomes, which combine whether the result matches
   and whether the guard word is intact.
4. It computes the integer mean and standard deviation of the runtimes. It
   drops runtimes that lie more than `nstdevs` standard deviations from the
   mean, and repeats until a round drops nothing. Each round is printed.
5. It writes `<impl>_runtimes.csv`, for example `scalar_naive_runtimes.csv`.
   The file holds the implementation name, the number of runs, every runtime
   and the final average.

## Library use

The kernels are plain functions that take an arguments dataclass:

```python
import numpy as np
from yabms.vvadd import VVAddArgs, impl_scalar_opt

a = np.array([1, 2, 3], dtype=np.int32).tobytes()
b = np.array([10, 20, 30], dtype=np.int32).tobytes()
out = bytearray(12)
impl_scalar_opt(VVAddArgs(a, b, out, size=12))
print(np.frombuffer(out, dtype=np.int32))  # [11 22 33]
```

Modules:

- `yabms.vvadd`: `VVAddArgs`, `impl_ref`, `impl_scalar_naive`,
  `impl_scalar_opt` (the head of `n % 8` elements first, then blocks of eight),
  `impl_vector` (eight-lane chunks), and `impl_parallel`. `impl_parallel` splits
  the work over `nthreads` threads; the calling thread takes the first share
  and the trailing remainder.
- `yabms.mmult`: `MMultArgs` and the matrix kernels.
  - `impl_scalar_naive` writes the product into `R` and returns it.
  - `impl_scalar_opt` computes a blocked product with a double-precision
    accumulator and returns it. It leaves `R` untouched and needs a positive
    block size.
  - `impl_ref`, `impl_vector` and `impl_parallel` only check their operands.
- `yabms.stats`: `Stopwatch` (a context manager), `outlier_free_rounds`, which
  returns one `StatsRound` per pass, and `write_runtimes_csv`.
- `yabms.buffers`: buffer allocation, guard words (`set_guard`,
  `check_guard`), result checks (`check_match`, `check_float_match`) and
  `load_matrix_file`, which raises `MatrixFileError`.
- `yabms.crand`: `CRand`, the seeded pseudo-random generator used to fill the
  inputs.
- `yabms.cpuset`: `CpuSet`, a set of CPU numbers 0 to 31 stored as a bit mask.
- `yabms.vmath`: `log_ps`, `approx_log_ps` and `exp_ps`. These are
  single-precision polynomial approximations of log and exp that work
  element-wise on numpy arrays.
- `yabms.harness`: the shared command-line pieces (`Options`,
  `parse_options`, `usage`, `configure_scheduler`, `time_runs`,
  `report_statistics`, `dump_runtimes`) and the template benchmark.

## What it does not do

- The `vec` and `para` kernels of `yabms-mmultopt` do no work, so `R` keeps
  the content of `matrix_C_float.txt`. The `opt` kernel returns its product
  without storing it in `R`. In all three cases the golden comparison checks
  the unchanged `R`.
- The kernels of `yabms-template` do no work.
- The kernels run on numpy and plain Python. No hand-written SIMD or native
  code is involved, so the timings measure this package's implementations
  only.