[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reefflock"
version = "0.1.0"
description = "Headless predator-prey boid simulation over a noise-generated seabed"
requires-python = ">=3.10"
dependencies = []
keywords = ["boids", "flocking", "simulation", "predator-prey", "artificial-life", "terrain"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Life",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
reefflock = "reefflock.app:main"

[tool.hatch.build.targets.wheel]
packages = ["reefflock"]

[tool.pytest.ini_options]
addopts = "-ra"
