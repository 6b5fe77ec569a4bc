"""Microbenchmark harness with vector-add and matrix-multiply kernels, outlier-free timing statistics and float32 log/exp approximations."""

__version__ = "0.1.0"