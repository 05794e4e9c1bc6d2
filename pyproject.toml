[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dvtoolbox"
version = "0.1.0"
description = "Validate metadata of Digital Video (DV) files and decode and encode their subcode packs"
requires-python = ">=3.10"
dependencies = []
keywords = ["dv", "digital video", "iec 61834", "video restoration", "camcorder", "metadata"]
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
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dvtoolbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
