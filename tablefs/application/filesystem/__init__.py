"""Filesystem adapter and its registration factory."""

from .adapter import DatabaseAdapter
from .attributes import FileAttributes
from .factory import create_adapter

__all__ = ["DatabaseAdapter", "FileAttributes", "create_adapter"]
