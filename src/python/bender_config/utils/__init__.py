"""Utility functions and helpers for bender-config."""

__all__ = [
    "setup_logging",
    "create_directory",
    "atomic_write_text",
    "is_writable",
]

from .logging import setup_logging
from .file_utils import create_directory, atomic_write_text, is_writable
