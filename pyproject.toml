[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gsmconsole"
version = "0.1.0"
description = "Command-line manager for dedicated game servers: install, start, stop, update and back up servers through a coordinator."
requires-python = ">=3.11"
keywords = ["game server", "steamcmd", "server manager", "coordinator", "websocket", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "click",
    "requests",
    "websocket-client",
    "tomli-w",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gsm = "gsmconsole.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gsmconsole"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
