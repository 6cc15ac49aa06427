"""File I/O and data handling modules."""

from .file_handler import FileHandler

__all__ = [
    "FileHandler",
]
