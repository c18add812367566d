[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minicomp"
version = "0.1.0"
description = "A tiny compiler for a small C-like language that emits LLVM IR and links it into a native executable with clang"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "llvm", "ir", "tokenizer", "parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minicomp = "minicomp.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minicomp"]

[tool.pytest.ini_options]
addopts = "-ra"
