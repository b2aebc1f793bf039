[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "treasurenet"
version = "0.1.0"
description = "A treasure-hunt grid game whose moves travel as Kermit-style frames over raw Ethernet sockets"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "grid", "treasure", "raw-socket", "ethernet", "kermit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
treasurenet-server = "treasurenet.server:main"
treasurenet-client = "treasurenet.client:main"

[tool.setuptools]
packages = ["treasurenet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
