[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arithbench"
version = "1.0.0"
description = "Floating-point arithmetic diagnosis (Paranoia) and the Whetstone benchmark"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "floating-point", "whetstone", "paranoia", "arithmetic"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
whetstone = "arithbench.whetstone:main"
paranoia = "arithbench.paranoia:main"

[tool.hatch.build.targets.wheel]
packages = ["arithbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
