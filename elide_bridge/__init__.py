"""Elide build bridge — delegate Java compilation and dependency install to Elide."""

__version__ = "0.1.0"
