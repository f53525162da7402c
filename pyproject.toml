[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "planegame"
version = "0.0.1"
description = "A small arcade plane shooter with a scene stack and entity-component systems, drawn pixel-perfect with pygame"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "arcade", "shooter", "pygame", "ecs", "pixel-perfect"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
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
planegame = "planegame.main:main"

[tool.hatch.build.targets.wheel]
packages = ["planegame"]

[tool.pytest.ini_options]
addopts = "-ra"
