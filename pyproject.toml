[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kittychain"
version = "0.1.0"
description = "An in-memory kitties runtime: a compact binary codec, storage-backed linked lists, breeding, trading and balances."
requires-python = ">=3.10"
dependencies = []
keywords = ["kitties", "runtime", "codec", "compact-encoding", "linked-list", "simulation"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kittychain"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
