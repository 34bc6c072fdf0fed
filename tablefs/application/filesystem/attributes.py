from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from tablefs.domain.binaries import BinaryEntry


@dataclass(frozen=True, slots=True)
class FileAttributes:
    """Metadata result of a filesystem verb.

    Only ``path`` is always present; every other field is ``None`` when the
    verb did not ask for it.
    """

    path: str
    file_size: Optional[int] = None
    visibility: Optional[str] = None
    last_modified: Optional[int] = None
    mime_type: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_dir(self) -> bool:
        return False

    @classmethod
    def from_entry(cls, entry: BinaryEntry) -> "FileAttributes":
        return cls(
            path=entry.path,
            file_size=entry.size,
            last_modified=entry.last_modified,
            mime_type=entry.mime_type,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
