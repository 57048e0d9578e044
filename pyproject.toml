[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gnssrx"
version = "0.1.0"
description = "GPS navigation frame parsing and GPS/GLONASS satellite position estimation"
requires-python = ">=3.10"
dependencies = []
keywords = ["gnss", "gps", "glonass", "navigation", "ephemeris", "satellite", "orbit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gnssrx = "gnssrx.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gnssrx"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
