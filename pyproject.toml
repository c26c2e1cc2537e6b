[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "silentlsb"
version = "0.1.0"
description = "Steganography building blocks: hide data in WAVE audio samples, plus YCbCr, stego-table and pixel-block tools for images."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "steganography",
    "lsb",
    "wave",
    "audio",
    "ycbcr",
    "stego table",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["silentlsb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
