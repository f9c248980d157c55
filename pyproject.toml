[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "grammarkit"
version = "0.1.0"
description = "Context-free grammar representation, transformation, analysis and random string generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["grammar", "context-free", "cfg", "earley", "lr", "binarization", "random-generation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["grammarkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
