[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apiruntime"
version = "0.1.0"
description = "Runtime building blocks for HTTP APIs: JSON and CSV codecs, Content-Type parsing, byte sizes, logging and a path router"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "api", "router", "csv", "json", "wsgi", "content-type"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Internet :: WWW/HTTP :: WSGI",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["apiruntime"]

[tool.hatch.build.targets.sdist]
include = ["apiruntime", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
