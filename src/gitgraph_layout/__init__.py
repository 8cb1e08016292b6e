"""Gitgraph Layout - deterministic layout engine for git history graphs."""

__version__ = "0.1.0"
