[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "releval"
version = "9.0.4"
description = "Readers for relevance judgments, preferences and ranked retrieval results, with per-query preference counting and z-score conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["information retrieval", "evaluation", "qrels", "relevance", "preferences", "ranking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Topic :: Text Processing :: Indexing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["releval"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
