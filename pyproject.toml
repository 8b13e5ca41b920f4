[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "platformer"
version = "0.1.0"
description = "A small side-scrolling tile platformer with coins, spikes, walking enemies and run-length encoded levels"
requires-python = ">=3.10"
keywords = ["game", "platformer", "pygame", "arcade", "side-scroller", "tiles"]
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
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
platformer = "platformer.game:main"

[tool.hatch.build.targets.wheel]
packages = ["platformer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
