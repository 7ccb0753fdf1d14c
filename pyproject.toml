[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nanotrader"
version = "1.0.0"
description = "An in-memory limit order book and price-time priority matching engine"
requires-python = ">=3.10"
keywords = ["order book", "matching engine", "trading", "exchange", "limit orders"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nanotrader = "nanotrader.demo:main"
nanotrader-bench = "nanotrader.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["nanotrader"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
