[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "astcc"
version = "0.1.0"
description = "Structural similarity of C syntax trees using subtree hashing and the Jaccard coefficient"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "plagiarism",
    "similarity",
    "abstract syntax tree",
    "clone detection",
    "jaccard",
]
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
    "Topic :: Education",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["astcc"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
