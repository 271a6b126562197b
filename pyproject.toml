[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atcoder-tool"
version = "0.1.0"
description = "Small command-line helpers for AtCoder: set up contest directories, download samples and test solutions locally"
requires-python = ">=3.10"
keywords = ["atcoder", "competitive-programming", "cli", "testing", "samples"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
atcoder-tool = "atcoder_tool.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["atcoder_tool"]

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
ignore_missing_imports = true
