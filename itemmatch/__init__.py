"""Glob-based criteria matching for game items."""

__version__ = "1.0.0"
