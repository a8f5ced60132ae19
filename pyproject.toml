[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cipanel"
version = "0.1.0"
description = "Keyboard-driven state model for browsing CI pipelines, workflows and jobs"
requires-python = ">=3.10"
dependencies = []
keywords = ["ci", "pipelines", "workflows", "keyboard", "filters"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cipanel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
