"""Utility functions for glob matching and text rendering."""

from .glob import glob_matches, split_glob
from .text import render_plain_text, to_text

__all__ = [
    # Glob
    "split_glob",
    "glob_matches",
    # Text
    "render_plain_text",
    "to_text",
]
