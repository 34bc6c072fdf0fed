"""
DatabaseAdapter: filesystem verbs on top of a BinaryRepository.

Every verb validates its path(s) through the configured PathStrategy before
touching the store, then issues one or more repository calls. The adapter
holds no state between calls; the repository's unique constraint on
(directory, name) is what makes check-then-insert safe under concurrency.
"""

from __future__ import annotations

import io
import mimetypes
from typing import BinaryIO, List, Optional, Tuple, Union

import magic

from tablefs.application.filesystem.attributes import FileAttributes
from tablefs.domain.binaries import BinaryEntry, BinaryRepository, StorageKey, ordered_uuid
from tablefs.domain.errors import (
    AlreadyExists,
    CopyFailed,
    EmptyContent,
    EntryNotFound,
    MoveFailed,
    NotFound,
    Unsupported,
    UniquenessViolation,
)
from tablefs.domain.paths import PathStrategy, get_path_strategy
from tablefs.utils.logging import get_logger

logger = get_logger("tablefs.adapter")

# libmagic answers that only say "some bytes" or "some text".
GENERIC_MIME_TYPES = frozenset({
    "application/octet-stream",
    "text/plain",
    "application/x-empty",
    "inode/x-empty",
})


class DatabaseAdapter:
    """Filesystem adapter whose files are rows of a relational table."""

    def __init__(
        self,
        repository: BinaryRepository,
        path_strategy: Union[str, PathStrategy, None] = None,
    ):
        if repository is None:
            raise ValueError("repository is required")
        self.repository = repository
        self.paths = get_path_strategy(path_strategy)

    def __repr__(self) -> str:
        return f"DatabaseAdapter(repository={self.repository!r}, paths={self.paths!r})"

    # --- Existence ----------------------------------------------------------------
    def file_exists(self, path: str) -> bool:
        key = self.paths.validate(path)
        return len(self.repository.find_by_key(key)) == 1

    def directory_exists(self, path: str) -> bool:
        # Flat storage has no directory structure at all.
        if not self.paths.supports_directories:
            return False
        directory = self.paths.directory_key(path)
        return self.repository.count_by_prefix(directory) > 0

    # --- Writing ------------------------------------------------------------------
    def write(self, path: str, contents: bytes, mime_type: Optional[str] = None) -> None:
        self.paths.validate(path)
        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        with io.BytesIO(contents or b"") as buffer:
            self.write_stream(path, buffer, mime_type=mime_type)

    def write_stream(self, path: str, stream: BinaryIO, mime_type: Optional[str] = None) -> None:
        key = self.paths.validate(path)

        content = self._drain(path, stream)

        if self.repository.find_by_key(key):
            raise AlreadyExists(path)

        entry = BinaryEntry.create(
            key,
            content,
            hash=ordered_uuid(),
            mime_type=mime_type or self._detect_mime_type(key, content),
        )
        try:
            entry = self.repository.insert(entry)
        except UniquenessViolation as exc:
            logger.info("Concurrent write lost the race | path=%s", path)
            raise AlreadyExists(path) from exc

        logger.info(
            "Stored binary | path=%s size=%s mime_type=%s hash=%s",
            entry.path,
            entry.size,
            entry.mime_type,
            entry.hash,
        )

    # --- Reading ------------------------------------------------------------------
    def read(self, path: str) -> bytes:
        _, entry = self._find_one(path)
        return bytes(entry.content)

    def read_stream(self, path: str) -> BinaryIO:
        stream = io.BytesIO(self.read(path))
        stream.seek(0)
        return stream

    # --- Deleting -----------------------------------------------------------------
    def delete(self, path: str) -> None:
        key = self.paths.validate(path)
        deleted = self.repository.delete_by_key(key)
        if deleted:
            logger.info("Deleted binary | path=%s", path)
        else:
            logger.debug("Nothing to delete | path=%s", path)

    def delete_directory(self, path: str) -> None:
        if not self.paths.supports_directories:
            self.delete(path)
            return

        directory = self.paths.directory_key(path)
        deleted = self.repository.delete_by_prefix(directory)
        logger.info("Deleted directory | directory=%s deleted=%s", directory, deleted)

    def create_directory(self, path: str) -> None:
        raise Unsupported(
            path,
            "Adapter does not support directories outside a file path, add a file instead",
        )

    # --- Visibility ---------------------------------------------------------------
    def set_visibility(self, path: str, visibility: str) -> None:
        if not self.paths.supports_directories:
            raise Unsupported(path, "Adapter does not support visibility controls")
        self.paths.validate(path)

    def visibility(self, path: str) -> FileAttributes:
        if not self.paths.supports_directories:
            raise Unsupported(path, "Adapter does not support visibility controls")
        key = self.paths.validate(path)
        return FileAttributes(path=key.path)

    # --- Metadata -----------------------------------------------------------------
    def mime_type(self, path: str) -> FileAttributes:
        key, entry = self._find_one(path)
        return FileAttributes(path=key.path, mime_type=entry.mime_type)

    def last_modified(self, path: str) -> FileAttributes:
        key, entry = self._find_one(path)
        return FileAttributes(path=key.path, last_modified=entry.last_modified)

    def file_size(self, path: str) -> FileAttributes:
        key, entry = self._find_one(path)
        return FileAttributes(path=key.path, file_size=entry.size)

    def list_contents(self, path: str, deep: bool = False) -> List[FileAttributes]:
        """List entries under ``path``.

        ``deep`` is accepted for interface compatibility; without nested
        directories it matches exactly the same rows as a shallow listing.
        """
        if self.paths.supports_directories:
            entries = self.repository.list_by_prefix(self.paths.directory_key(path))
        else:
            entries = self.repository.find_by_key(self.paths.validate(path))

        if not entries:
            raise NotFound(path, "Cannot find the path")
        return [FileAttributes.from_entry(entry) for entry in entries]

    # --- Move / copy --------------------------------------------------------------
    def move(self, source: str, destination: str) -> None:
        src_key = self.paths.validate(source)
        dst_key = self.paths.validate(destination)

        if self.repository.find_by_key(dst_key):
            raise MoveFailed(source, destination)
        if not self.repository.find_by_key(src_key):
            raise MoveFailed(source, destination, f"Source does not exist, unable to move {source} to")

        try:
            self.repository.update_key(src_key, dst_key)
        except (UniquenessViolation, EntryNotFound) as exc:
            raise MoveFailed(source, destination) from exc

        logger.info("Moved binary | source=%s destination=%s", source, destination)

    def copy(self, source: str, destination: str) -> None:
        src_key = self.paths.validate(source)
        dst_key = self.paths.validate(destination)

        if self.repository.find_by_key(dst_key):
            raise CopyFailed(source, destination)
        sources = self.repository.find_by_key(src_key)
        if not sources:
            raise CopyFailed(source, destination, f"Source does not exist, unable to copy {source} to")

        duplicate = sources[0].replicate(dst_key, hash=ordered_uuid())
        try:
            self.repository.insert(duplicate)
        except UniquenessViolation as exc:
            raise CopyFailed(source, destination) from exc

        logger.info("Copied binary | source=%s destination=%s", source, destination)

    # --- Internal helpers ---------------------------------------------------------
    def _find_one(self, path: str) -> Tuple[StorageKey, BinaryEntry]:
        key = self.paths.validate(path)
        entries = self.repository.find_by_key(key)

        if len(entries) > 1:
            logger.error(
                "Integrity breach: %s rows share one path | path=%s ids=%s",
                len(entries),
                path,
                [entry.id for entry in entries],
            )
        if len(entries) != 1:
            raise NotFound(path)

        logger.debug("Resolved binary | path=%s id=%s", path, entries[0].id)
        return key, entries[0]

    @staticmethod
    def _drain(path: str, stream: BinaryIO) -> bytes:
        try:
            content = stream.read()
        except (OSError, ValueError, AttributeError) as exc:
            raise EmptyContent(path) from exc

        if isinstance(content, str):
            content = content.encode("utf-8")
        if not content:
            raise EmptyContent(path)
        return bytes(content)

    @staticmethod
    def _detect_mime_type(key: StorageKey, content: bytes) -> Optional[str]:
        """Sniff the bytes with libmagic, falling back to the file extension."""
        try:
            sniffed = magic.from_buffer(content, mime=True)
        except magic.MagicException as exc:
            logger.warning("Content sniffing failed | path=%s error=%s", key.path, exc)
            sniffed = None

        if sniffed and sniffed not in GENERIC_MIME_TYPES:
            return sniffed
        mime_type, _ = mimetypes.guess_type(key.name)
        return mime_type
