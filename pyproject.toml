[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubscape"
version = "0.1.0"
description = "A grid-based raycasting maze explorer that reads .cub scene files, with an optional mode for doors, a minimap and animated hearts"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "maze", "cub", "pygame", "first-person"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "numpy",
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubscape = "cubscape.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubscape"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
