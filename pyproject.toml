[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cryptoguard"
version = "1.0.0"
description = "Encrypt and decrypt files with AES-256-CBC and compute SHA-256 checksums"
requires-python = ">=3.10"
keywords = ["aes", "encryption", "decryption", "sha256", "checksum", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Utilities",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cryptoguard = "cryptoguard.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cryptoguard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
