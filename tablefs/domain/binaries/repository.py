from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .models import BinaryEntry
from .value_objects import StorageKey


class BinaryRepository(ABC):
    """Persistence boundary for stored binaries.

    Implementations must enforce uniqueness of ``(directory, name)`` and
    maintain ``created_at``/``updated_at``.
    """

    # --- Lookups ------------------------------------------------------------------
    @abstractmethod
    def find_by_key(self, key: StorageKey) -> List[BinaryEntry]:
        """Return every row matching ``key`` (normally zero or one)."""

    @abstractmethod
    def list_by_prefix(self, directory: str) -> List[BinaryEntry]:
        pass

    @abstractmethod
    def count_by_prefix(self, directory: str) -> int:
        pass

    # --- Mutations ----------------------------------------------------------------
    @abstractmethod
    def insert(self, entry: BinaryEntry) -> BinaryEntry:
        """Persist a new row and return it with identity and timestamps.

        Raises:
            UniquenessViolation: a row with the same key already exists.
        """

    @abstractmethod
    def update_key(self, old_key: StorageKey, new_key: StorageKey) -> BinaryEntry:
        """Relabel a row, keeping content and identity.

        Raises:
            UniquenessViolation: ``new_key`` is taken.
            EntryNotFound: no row has ``old_key``.
        """

    @abstractmethod
    def delete_by_key(self, key: StorageKey) -> int:
        pass

    @abstractmethod
    def delete_by_prefix(self, directory: str) -> int:
        pass
