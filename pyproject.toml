[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clicky"
version = "0.1.0"
description = "Render Python objects as styled terminal text, tables, trees, JSON, YAML, CSV or Markdown"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "formatting",
    "cli",
    "tables",
    "tree",
    "csv",
    "markdown",
    "yaml",
    "json",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["clicky"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
