"""tablefs: a filesystem adapter backed by a relational table."""

from tablefs.application.filesystem import DatabaseAdapter, FileAttributes, create_adapter
from tablefs.domain.errors import (
    AlreadyExists,
    CollisionError,
    CopyFailed,
    EmptyContent,
    FilesystemError,
    InvalidPath,
    MoveFailed,
    NotFound,
    StoreUnavailable,
    Unsupported,
)

__version__ = "0.1.0"

__all__ = [
    "DatabaseAdapter",
    "FileAttributes",
    "create_adapter",
    "AlreadyExists",
    "CollisionError",
    "CopyFailed",
    "EmptyContent",
    "FilesystemError",
    "InvalidPath",
    "MoveFailed",
    "NotFound",
    "StoreUnavailable",
    "Unsupported",
]
