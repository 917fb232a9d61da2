[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cargoroute"
version = "0.9.0"
description = "Loading constraints, item geometry, feasibility caching and validator output for vehicle routing with three-dimensional loading"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "vehicle routing",
    "3L-CVRP",
    "container loading",
    "loading constraints",
    "optimization",
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cargoroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
