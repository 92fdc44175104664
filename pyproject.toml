[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adaptorsig"
version = "0.1.0"
description = "BIP-340 style Schnorr signatures and Schnorr/ECDSA adaptor signatures over secp256k1 in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "secp256k1",
    "schnorr",
    "bip340",
    "ecdsa",
    "adaptor-signatures",
    "elliptic-curve",
    "cryptography",
]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
adaptorsig-quick-bip340 = "adaptorsig.quick_bip340:main"

[tool.hatch.build.targets.wheel]
packages = ["adaptorsig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
