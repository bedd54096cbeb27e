[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "movez"
version = "0.1.0"
description = "Small web server that lists top-rated and searched movies from The Movie Database, with a SQLite cache."
requires-python = ">=3.10"
dependencies = [
    "jinja2",
]
keywords = ["movies", "tmdb", "web", "sqlite", "cache", "jinja2"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
movez = "movez.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["movez"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
