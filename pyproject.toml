[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minicleste"
version = "0.1.0"
description = "A small precision platformer with dashing, wall grabbing, moving and crumbling platforms"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "platformer", "pygame", "arcade"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
minicleste = "minicleste.app:main"

[tool.hatch.build.targets.wheel]
packages = ["minicleste"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
