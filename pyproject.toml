[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atlaskube"
version = "0.5.0"
description = "Data models for MongoDB Atlas custom resources: cluster specs, project entries, conditions and status records"
requires-python = ">=3.10"
dependencies = []
keywords = ["mongodb", "atlas", "kubernetes", "custom-resource", "dataclasses"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["atlaskube"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
