[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "autothesis"
version = "0.1.0"
description = "Decision rules for iterative equity research: ticker handling, source ranking, evaluation parsing, opportunity and signal scoring, portfolio valuation, related tickers and refresh scheduling."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "investment research",
    "equity",
    "thesis",
    "scoring",
    "ranking",
    "portfolio",
    "scheduling",
]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["autothesis"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
