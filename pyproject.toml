[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcal9555"
version = "1.0.0"
description = "Driver for the PCAL9555 16-bit I2C GPIO expander over a pluggable I2C bus"
requires-python = ">=3.10"
dependencies = []
keywords = ["pcal9555", "gpio", "i2c", "io-expander", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Hardware Drivers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pcal9555"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
