[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motiontimeline"
version = "0.1.0"
description = "Keyframed parameter timelines with interpolation, editing controls and JSON persistence"
requires-python = ">=3.10"
dependencies = []
keywords = ["animation", "keyframes", "timeline", "interpolation", "camera", "motion"]
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
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["motiontimeline"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
