[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuitodo"
version = "0.1.0"
description = "A keyboard-driven terminal to-do list with a single-store, reducer-based state model and JSON persistence"
requires-python = ">=3.10"
dependencies = []
keywords = ["todo", "tui", "terminal", "curses", "reducer", "task-list"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tuitodo = "tuitodo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tuitodo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
