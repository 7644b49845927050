[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ekit"
version = "0.1.0"
description = "Small utilities: typed value access, SQL column helpers, synchronisation primitives and atomic values."
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["utilities", "sql", "encryption", "json", "synchronization", "concurrency", "dbapi"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
