[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nullspace"
version = "0.1.0"
description = "A minimal asyncio game server that speaks the Minecraft Java Edition network protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["minecraft", "server", "protocol", "asyncio", "networking"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
nullspace = "nullspace.server:main"

[tool.hatch.build.targets.wheel]
packages = ["nullspace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
