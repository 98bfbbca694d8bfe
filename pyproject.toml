[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "mmoffline"
version = "0.1.0"
description = "Offline order-taking data layer: entities, SQL table handlers, SQLite storage, CSV import and list models"
requires-python = ">=3.10"
dependencies = []
keywords = ["orders", "offline", "sqlite", "csv", "entities", "sales"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["mmoffline*"]

[tool.pytest.ini_options]
addopts = "-ra"
