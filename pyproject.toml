[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "auriga"
version = "0.1.9"
description = "Domain types, CLI argument builders and SQLite trace storage for orchestrating LLM coding agents"
requires-python = ">=3.10"
dependencies = []
keywords = ["llm", "agents", "traces", "sqlite", "cli"]
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
packages = ["auriga"]

[tool.pytest.ini_options]
addopts = "-ra"
