[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockcraft"
version = "0.1.0"
description = "Client-side building blocks for a block-based game protocol: worlds, chunks, entities, block entities, mod-loader handshakes and session hashing."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "protocol", "client", "chunks", "forge", "voxel"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blockcraft"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
