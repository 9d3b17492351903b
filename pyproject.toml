[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cudosnode"
version = "0.1.0"
description = "Ledger modules for a proof-of-stake chain: scheduled token minting, community-pool administration and burn routing"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "minting", "bank", "community-pool", "bech32", "decimal"]
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
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cudosnode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
