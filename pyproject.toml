[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "allpredict"
version = "0.1.0"
description = "Graph-structured prediction contexts and parse-tree rule contexts for adaptive LL(*) parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["parser", "ll-star", "prediction-context", "parse-tree", "grammar", "murmurhash"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["allpredict"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
