"""CLI command implementations for buildcat.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .build import build
from .init import init
from .query import query

__all__ = [
    "build",
    "init",
    "query",
]
