[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yabms"
version = "0.1.0"
description = "Microbenchmark harness for vector add and matrix multiply kernels with outlier-free timing statistics"
requires-python = ">=3.10"
keywords = ["benchmark", "microbenchmark", "matrix-multiplication", "vector-add", "timing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
yabms-template = "yabms.harness:main"
yabms-vvadd = "yabms.vvadd_bench:main"
yabms-mmultopt = "yabms.mmultopt_bench:main"

[tool.hatch.build.targets.wheel]
packages = ["yabms"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
