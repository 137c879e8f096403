[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "w3xkit"
version = "0.1.0"
description = "Command-line toolchain for inspecting, extracting and converting unpacked Warcraft III map directories"
requires-python = ">=3.10"
dependencies = []
keywords = ["warcraft", "w3x", "w3m", "map", "lni", "modding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
w3xkit = "w3xkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["w3xkit"]

[tool.pytest.ini_options]
addopts = "-ra"
