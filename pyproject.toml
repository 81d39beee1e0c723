[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mlfq-dispatcher"
version = "0.1.0"
description = "Process control blocks, job list tools and a signal-reporting worker process for experimenting with process dispatching"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "scheduler",
    "dispatcher",
    "process",
    "signals",
    "job-list",
    "operating-systems",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mlfq-random = "mlfq_dispatcher.jobs:main"
mlfq-sigtrap = "mlfq_dispatcher.sigtrap:main"

[tool.hatch.build.targets.wheel]
packages = ["mlfq_dispatcher"]

[tool.hatch.build.targets.sdist]
include = ["mlfq_dispatcher", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
