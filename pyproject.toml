[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rhovm"
version = "0.1.0"
description = "Runtime building blocks for the Rho language: object model, errors, opcodes, code objects, frames and a compiled-module loader"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual machine", "bytecode", "interpreter", "runtime", "rho"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rhovm"]

[tool.pytest.ini_options]
addopts = "-ra"
