[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wnfs-common"
version = "0.1.0"
description = "Content-addressed block stores, CIDs, IPLD links, DAG-CBOR encoding and node metadata for a WebNative-style file system"
requires-python = ">=3.10"
dependencies = [
    "cbor2",
]
keywords = ["ipld", "cid", "dag-cbor", "dag-json", "blockstore", "blake3", "content-addressing", "filesystem"]
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
    "Framework :: AsyncIO",
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["wnfs_common"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
