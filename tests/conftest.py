"""
Pytest fixtures for tablefs.

Unit tests run against MemoryBinaryRepository, an in-process stand-in for the
binaries table that enforces the same (directory, name) unique constraint and
records every call it receives. Tests that need PostgreSQL use ``test_db`` and
are skipped unless TABLEFS_TEST_DATABASE_URL is set.
"""
import logging
import os
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Generator, List

import pytest

from tablefs.application.filesystem import DatabaseAdapter
from tablefs.domain.binaries import BinaryEntry, BinaryRepository, StorageKey
from tablefs.domain.errors import EntryNotFound, UniquenessViolation

TEST_DATABASE_URL_ENV = "TABLEFS_TEST_DATABASE_URL"


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Keep test output quiet: only errors reach the console."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(logging.ERROR)
    formatter = logging.Formatter('%(asctime)s | %(levelname)-8s | %(name)s - %(message)s')
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.ERROR)

    yield


class MemoryBinaryRepository(BinaryRepository):
    """In-memory BinaryRepository with a deterministic clock."""

    def __init__(self):
        self.rows: List[BinaryEntry] = []
        self.calls: List[str] = []
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _matching(self, key: StorageKey) -> List[BinaryEntry]:
        return [r for r in self.rows if r.directory == key.directory and r.name == key.name]

    def find_by_key(self, key):
        self.calls.append("find_by_key")
        return [replace(r) for r in self._matching(key)]

    def list_by_prefix(self, directory):
        self.calls.append("list_by_prefix")
        return [replace(r) for r in self.rows if r.directory == directory]

    def count_by_prefix(self, directory):
        self.calls.append("count_by_prefix")
        return sum(1 for r in self.rows if r.directory == directory)

    def insert(self, entry):
        self.calls.append("insert")
        if self._matching(entry.key):
            raise UniquenessViolation(entry.path)
        return self.force_insert(entry)

    def force_insert(self, entry: BinaryEntry) -> BinaryEntry:
        """Insert without the unique check (simulates a corrupted table)."""
        now = self._tick()
        stored = replace(entry, id=self._next_id, created_at=now, updated_at=now)
        self._next_id += 1
        self.rows.append(stored)
        return replace(stored)

    def update_key(self, old_key, new_key):
        self.calls.append("update_key")
        if self._matching(new_key):
            raise UniquenessViolation(new_key.path)
        matches = self._matching(old_key)
        if not matches:
            raise EntryNotFound(old_key.path)
        row = matches[0]
        row.directory = new_key.directory
        row.name = new_key.name
        row.updated_at = self._tick()
        return replace(row)

    def delete_by_key(self, key):
        self.calls.append("delete_by_key")
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.key != key]
        return before - len(self.rows)

    def delete_by_prefix(self, directory):
        self.calls.append("delete_by_prefix")
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.directory != directory]
        return before - len(self.rows)


@pytest.fixture
def memory_store() -> MemoryBinaryRepository:
    return MemoryBinaryRepository()


@pytest.fixture
def flat_fs(memory_store) -> DatabaseAdapter:
    return DatabaseAdapter(memory_store, path_strategy="flat")


@pytest.fixture
def prefixed_fs(memory_store) -> DatabaseAdapter:
    return DatabaseAdapter(memory_store, path_strategy="prefixed")


@pytest.fixture
def test_db() -> Generator:
    """PostgresBinaryRepository on a scratch table, dropped afterwards."""
    database_url = os.getenv(TEST_DATABASE_URL_ENV)
    if not database_url:
        pytest.skip(f"{TEST_DATABASE_URL_ENV} is not set")

    from tablefs.infrastructure.database import PostgresBinaryRepository

    db = PostgresBinaryRepository(database_url, table_name="test_binaries")
    yield db
    db.drop_schema()
