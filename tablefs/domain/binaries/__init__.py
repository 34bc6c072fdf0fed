"""Domain objects describing stored binaries and their persistence boundary."""

from .identifiers import ordered_uuid
from .models import BinaryEntry
from .repository import BinaryRepository
from .value_objects import ROOT_DIRECTORY, StorageKey

__all__ = [
    "BinaryEntry",
    "BinaryRepository",
    "ROOT_DIRECTORY",
    "StorageKey",
    "ordered_uuid",
]
