[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "redstore"
version = "0.1.0"
description = "In-memory data structures for a key-value store: lock tables, sharded dicts, lists, bitmaps, sets and sorted sets"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "data-structures",
    "skiplist",
    "sorted-set",
    "bitmap",
    "quicklist",
    "linked-list",
    "concurrent-dict",
    "rwlock",
    "key-value",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["redstore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
