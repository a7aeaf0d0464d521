"""Comparison pipeline engine.

This package provides the main entry point for comparing two BibTeX
files, including its configuration type.
"""

from diffbib.engine.config import DiffConfig
from diffbib.engine.runner import run_diff

__all__ = [
    "DiffConfig",
    "run_diff",
]
