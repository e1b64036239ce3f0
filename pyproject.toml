[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "movieapi"
version = "1.0.0"
description = "A small JSON web API serving a movie catalogue from an SQL database"
requires-python = ">=3.10"
keywords = ["movies", "api", "json", "flask", "sqlalchemy", "catalogue"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "sqlalchemy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
movieapi = "movieapi.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["movieapi"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
