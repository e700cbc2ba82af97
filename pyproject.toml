[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cmdstat"
version = "0.1.0"
description = "Show shell command usage statistics as a table in the terminal"
requires-python = ">=3.10"
keywords = ["shell", "statistics", "history", "terminal", "commands"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "platformdirs",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cmdstat = "cmdstat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cmdstat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
