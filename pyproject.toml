[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qbreakout"
version = "0.1.0"
description = "Breakout game mechanics, experience replay buffers, clustering utilities and Q-learning abstractions"
requires-python = ">=3.10"
keywords = ["q-learning", "reinforcement-learning", "breakout", "dbscan", "replay-buffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["qbreakout"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
