from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from .value_objects import ROOT_DIRECTORY, StorageKey

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


@dataclass(slots=True)
class BinaryEntry:
    """One stored file: a row of the binaries table."""

    directory: str
    name: str
    content: bytes
    size: int
    hash: Optional[str] = None
    mime_type: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        key: StorageKey,
        content: bytes,
        *,
        hash: str,
        mime_type: Optional[str] = None,
    ) -> "BinaryEntry":
        return cls(
            directory=key.directory,
            name=key.name,
            content=content,
            size=len(content),
            hash=hash,
            mime_type=mime_type,
        )

    @property
    def key(self) -> StorageKey:
        return StorageKey(directory=self.directory, name=self.name)

    @property
    def path(self) -> str:
        if self.directory == ROOT_DIRECTORY:
            return self.name
        return f"{self.directory}/{self.name}"

    @property
    def last_modified(self) -> Optional[int]:
        if self.updated_at is None:
            return None
        return int(self.updated_at.timestamp())

    @property
    def size_formatted(self) -> str:
        size = max(self.size or 0, 0)
        power = (size.bit_length() - 1) // 10 if size else 0
        power = min(power, len(SIZE_UNITS) - 1)
        return f"{round(size / 1024 ** power, 2):g} {SIZE_UNITS[power]}"

    def replicate(self, key: StorageKey, *, hash: str) -> "BinaryEntry":
        """Copy of this entry under another key, without store-assigned fields."""
        return replace(
            self,
            directory=key.directory,
            name=key.name,
            hash=hash,
            id=None,
            created_at=None,
            updated_at=None,
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "hash": self.hash,
            "path": self.path,
            "size": self.size,
            "mime_type": self.mime_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
