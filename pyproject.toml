[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "boxdrop"
version = "0.1.0"
description = "A falling-block puzzle game with a Tkinter window"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "puzzle", "falling blocks", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
boxdrop = "boxdrop.app:main"

[tool.setuptools.packages.find]
include = ["boxdrop*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
