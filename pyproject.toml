[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "txtproc"
version = "1.0.0"
description = "Text data tools: angle-difference analysis, SEP adjustment tables with spatial interpolation, and magnetometer data conversion and merging."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "text processing",
    "angle analysis",
    "sep",
    "interpolation",
    "haversine",
    "magnetometer",
    "merge",
]
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
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
magfield-process = "txtproc.magfield:main"
mergefiles = "txtproc.mergefiles:main"

[tool.hatch.build.targets.wheel]
packages = ["txtproc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
