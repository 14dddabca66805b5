[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "efmgames"
version = "1.0.0"
description = "Falling-block puzzle game for a Linux framebuffer and gamepad, plus square-wave melody synthesizer models"
requires-python = ">=3.10"
dependencies = []
keywords = ["tetris", "framebuffer", "gamepad", "synthesizer", "square wave", "melody", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
efmgames-tetris = "efmgames.game:main"

[tool.hatch.build.targets.wheel]
packages = ["efmgames"]

[tool.hatch.build.targets.sdist]
include = ["efmgames", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
