[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dungeon"
version = "0.1.0"
description = "A small multiplayer boss-fight arena game with a TCP relay server"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "multiplayer", "arcade", "boss", "pvp", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dungeon-client = "dungeon.client:main"
dungeon-server = "dungeon.server:main"

[tool.hatch.build.targets.wheel]
packages = ["dungeon"]

[tool.pytest.ini_options]
addopts = "-ra"
