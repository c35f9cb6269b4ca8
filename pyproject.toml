[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "humakit"
version = "0.1.0"
description = "Building blocks for HTTP APIs: a small router, middleware chains, cookie parsing, conditional requests, JSON patching and casing helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "api", "router", "middleware", "openapi", "json-patch", "merge-patch", "etag", "cookies", "casing"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["humakit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
