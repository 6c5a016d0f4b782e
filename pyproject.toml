[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cargo-depgraph"
version = "1.6.0"
description = "Create Graphviz dependency graphs for cargo projects from `cargo metadata`."
requires-python = ">=3.10"
dependencies = []
keywords = ["cargo", "rust", "dependencies", "graphviz", "dot", "graph"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cargo-depgraph = "cargo_depgraph.main:main"

[tool.hatch.build.targets.wheel]
packages = ["cargo_depgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
