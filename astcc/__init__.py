"""Structural similarity of C syntax trees: tree model, normalisation, subtree hashing and reports."""

__version__ = "0.1.0"

__all__ = ["nodes", "normalize", "plagcheck", "similarity", "visualize"]