[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "omegaos"
version = "0.1.0"
description = "A simulated hobby kernel: heap allocators, an in-memory block file system, a text-mode console, a shell and cooperative tasks"
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "allocator", "filesystem", "shell", "executor", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
omegaos = "omegaos.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["omegaos"]

[tool.pytest.ini_options]
addopts = "-ra"
