[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "monsters"
version = "0.1.0"
description = "Game logic for a tile-based multiplayer survival game: seeded world generation, inventory, enemies, player movement and a UDP state protocol"
requires-python = ">=3.10"
keywords = ["game", "tiles", "procedural", "multiplayer", "udp", "mersenne-twister"]
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
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
monsters = "monsters.app:main"

[tool.hatch.build.targets.wheel]
packages = ["monsters"]

[tool.pytest.ini_options]
addopts = "-ra"
