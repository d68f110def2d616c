[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gobbisort"
version = "0.1.0"
description = "Event reading and particle reconstruction for silicon-telescope charged-particle experiments"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "nuclear physics",
    "silicon telescope",
    "invariant mass",
    "particle identification",
    "energy loss",
    "ring buffer",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gobbisort = "gobbisort.evtfile:main"

[tool.hatch.build.targets.wheel]
packages = ["gobbisort"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
