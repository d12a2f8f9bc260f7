[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rookweb"
version = "0.1.0"
description = "Building blocks for a small HTTP server: query strings, multipart bodies, request and response objects, middleware chains, CORS and helpers."
requires-python = ">=3.10"
dependencies = [
    "multidict",
]
keywords = ["http", "web", "middleware", "cors", "multipart", "query-string", "base64"]
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rookweb"]

[tool.pytest.ini_options]
addopts = "-ra"
