[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensorlog"
version = "0.1.0"
description = "Generate, sort, split and search timestamped sensor log files"
requires-python = ">=3.10"
dependencies = []
keywords = ["sensor", "log", "timestamp", "time series", "search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sensorlog-search = "sensorlog.search:main"
sensorlog-sort = "sensorlog.sort:main"
sensorlog-generate = "sensorlog.generate:main"

[tool.hatch.build.targets.wheel]
packages = ["sensorlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
