[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "janji"
version = "0.1.0"
description = "A small layered 2D application framework with typed events, an orthographic camera and a batching quad renderer."
requires-python = ">=3.10"
keywords = [
    "2d",
    "application-framework",
    "layers",
    "events",
    "orthographic-camera",
    "quad-batching",
    "profiling",
]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "numpy",
    "pyglet",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
janji-sandbox = "janji.sandbox:main"

[tool.hatch.build.targets.wheel]
packages = ["janji"]

[tool.hatch.build.targets.sdist]
include = ["janji", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
