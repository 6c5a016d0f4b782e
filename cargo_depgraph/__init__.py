"""Dependency graphs for cargo projects, built from `cargo metadata` and rendered as Graphviz dot."""

__version__ = "1.6.0"
__all__ = ["__version__"]