[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "omapsoc"
version = "0.1.0"
description = "Register-level models of OMAP system-on-chip peripherals for emulators"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "omap", "arm", "mmio", "peripherals", "registers", "soc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["omapsoc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
