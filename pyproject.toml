[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slotter"
version = "0.1.0"
description = "Framework-independent HTTP handlers, auth middleware and request-context helpers for a warehouse management backend"
requires-python = ">=3.10"
dependencies = []
keywords = ["warehouse", "wms", "http", "handlers", "middleware", "sse"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slotter"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
