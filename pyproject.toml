[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ocrlayout"
version = "0.54.0"
description = "Data model, option parsing, box statistics and text output for the layout stage of an OCR engine"
requires-python = ">=3.10"
dependencies = []
keywords = ["ocr", "layout", "text lines", "baseline", "character boxes", "document analysis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ocrlayout"]

[tool.hatch.build.targets.sdist]
include = ["ocrlayout", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
