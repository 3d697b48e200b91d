[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yewoh"
version = "0.1.0"
description = "Encryption, compression, client versions and asset loading for Ultima Online compatible clients and servers"
requires-python = ">=3.10"
dependencies = []
keywords = ["ultima-online", "huffman", "blowfish", "twofish", "uop", "mul", "game-assets"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["yewoh"]

[tool.pytest.ini_options]
addopts = "-ra"
