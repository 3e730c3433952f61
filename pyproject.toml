[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aquasense"
version = "0.1.0"
description = "Sampling, filtering and scheduling logic for water-quality sensors: temperature, TDS and pH."
requires-python = ">=3.10"
dependencies = []
keywords = ["water quality", "tds", "ph", "temperature", "sensors", "median filter", "hydroponics"]
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
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aquasense"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
