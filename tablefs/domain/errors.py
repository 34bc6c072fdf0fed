"""Error taxonomy shared by the adapter core and the record stores."""

from __future__ import annotations

from typing import Optional


class FilesystemError(Exception):
    """Base class for every failure a filesystem verb can surface."""

    default_reason = "filesystem operation failed"

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason or self.default_reason
        super().__init__(f"{self.reason}: {path}" if path else self.reason)


class InvalidPath(FilesystemError, ValueError):
    default_reason = "invalid path"


class NotFound(FilesystemError):
    default_reason = "Cannot find the file"


class EmptyContent(FilesystemError):
    default_reason = "Appears to be an empty file or unable to read the stream"


class Unsupported(FilesystemError):
    default_reason = "operation is not supported by this adapter"


class StoreUnavailable(FilesystemError):
    default_reason = "record store is unavailable"


class CollisionError(FilesystemError):
    """Target path already resolves to a live entry."""

    default_reason = "There is already a file at that path"


class AlreadyExists(CollisionError):
    pass


class _TransferFailed(CollisionError):
    verb = "transfer"

    def __init__(self, source: str, destination: str, reason: Optional[str] = None):
        self.source = source
        self.destination = destination
        super().__init__(
            destination,
            reason or f"Unable to {self.verb} file from {source} to",
        )


class MoveFailed(_TransferFailed):
    verb = "move"


class CopyFailed(_TransferFailed):
    verb = "copy"


# --- Store level -----------------------------------------------------------------


class StoreError(Exception):
    """Raised by BinaryRepository implementations."""


class UniquenessViolation(StoreError):
    """The (directory, name) unique constraint rejected a row."""


class EntryNotFound(StoreError):
    """An update targeted a key with no row."""
