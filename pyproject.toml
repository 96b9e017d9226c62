[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "patria"
version = "0.1.0"
description = "A small chat server: static file HTTP serving plus a WebSocket message relay between logged-in clients."
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "websocket", "http", "server", "messaging"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
patria-server = "patria.server:main"

[tool.hatch.build.targets.wheel]
packages = ["patria"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
