"""
Path codecs: turn a caller-supplied path into a StorageKey.

Two strategies share one interface:
- FlatPathStrategy: root-level single-segment files only ("report.pdf")
- PrefixedPathStrategy: "dir/sub/report.pdf" split into ("dir/sub", "report.pdf")

Both are pure and never touch the store.
"""

from __future__ import annotations

import posixpath
import re
from abc import ABC, abstractmethod
from typing import Union

from tablefs.domain.binaries.value_objects import ROOT_DIRECTORY, StorageKey
from tablefs.domain.errors import InvalidPath, Unsupported

SEPARATORS = ("/", "\\")
LINE_BREAKS_RE = re.compile(r"[\r\n]")


class PathStrategy(ABC):
    name: str = ""
    supports_directories: bool = False

    @abstractmethod
    def validate(self, path: str) -> StorageKey:
        """Return the storage key for a file path or raise InvalidPath."""

    def directory_key(self, path: str) -> str:
        raise Unsupported(path, "Adapter does not support directories")

    @staticmethod
    def _missing_extension(path: str) -> InvalidPath:
        return InvalidPath(path, "This adapter requires an extension for the file")

    @staticmethod
    def _reject_line_breaks(path: str) -> None:
        if LINE_BREAKS_RE.search(path):
            raise InvalidPath(repr(path), "Path contains a line break")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FlatPathStrategy(PathStrategy):
    """Single namespace: every file lives at the root."""

    name = "flat"
    supports_directories = False

    _FILE_RE = re.compile(r"[^/\\]*\.[^/\\]*")

    def validate(self, path: str) -> StorageKey:
        if not isinstance(path, str):
            raise InvalidPath(repr(path), "Path must be a string")
        self._reject_line_breaks(path)

        if not self._FILE_RE.fullmatch(path):
            if "." not in path and not any(sep in path for sep in SEPARATORS):
                raise self._missing_extension(path)
            raise InvalidPath(path, "This adapter does not support folders in the path")
        return StorageKey(directory=ROOT_DIRECTORY, name=path)


class PrefixedPathStrategy(PathStrategy):
    """Directories are emulated by the prefix stored next to each file name."""

    name = "prefixed"
    supports_directories = True

    def validate(self, path: str) -> StorageKey:
        normalized = self._normalize(path)
        # "docs/a.txt/" names a directory, not the file "docs/a.txt".
        if not normalized or path.endswith(SEPARATORS):
            raise self._missing_extension(path)

        directory, leaf = posixpath.split(normalized)
        if "." not in leaf:
            raise self._missing_extension(path)
        return StorageKey(directory=directory or ROOT_DIRECTORY, name=leaf)

    def directory_key(self, path: str) -> str:
        return self._normalize(path) or ROOT_DIRECTORY

    @classmethod
    def _normalize(cls, path: str) -> str:
        if not isinstance(path, str):
            raise InvalidPath(repr(path), "Path must be a string")
        cls._reject_line_breaks(path)

        normalized = path.replace("\\", "/").strip("/")
        while normalized.startswith("./"):
            normalized = normalized[2:].lstrip("/")
        if normalized == ".":
            return ""

        for segment in normalized.split("/") if normalized else ():
            if segment in ("", ".", ".."):
                raise InvalidPath(path, "Path contains an empty or relative segment")
        return normalized


PATH_STRATEGIES = {
    FlatPathStrategy.name: FlatPathStrategy,
    PrefixedPathStrategy.name: PrefixedPathStrategy,
}


def get_path_strategy(strategy: Union[str, PathStrategy, None] = None) -> PathStrategy:
    """Resolve a strategy by name ("flat" / "prefixed") or pass an instance through."""
    if strategy is None:
        return FlatPathStrategy()
    if isinstance(strategy, PathStrategy):
        return strategy
    try:
        return PATH_STRATEGIES[str(strategy).strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown path strategy: {strategy!r} (expected one of {sorted(PATH_STRATEGIES)})"
        ) from None
