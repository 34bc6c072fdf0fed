from __future__ import annotations

import os
import re
from contextlib import contextmanager
from typing import List, Optional, Sequence

import psycopg2
import psycopg2.errors

from tablefs.domain.binaries import BinaryEntry, BinaryRepository, StorageKey
from tablefs.domain.errors import EntryNotFound, StoreError, StoreUnavailable, UniquenessViolation
from tablefs.utils.logging import get_logger

logger = get_logger("tablefs.infrastructure.postgres")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

COLUMNS = (
    "id",
    "hash",
    "directory",
    "name",
    "content",
    "size",
    "mime_type",
    "created_at",
    "updated_at",
)
SELECT_COLUMNS = ", ".join(COLUMNS)


class PostgresBinaryRepository(BinaryRepository):
    """PostgreSQL implementation of the binaries table."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        *,
        table_name: str = "binaries",
        ensure_schema: bool = True,
    ):
        conn_str = database_url or os.getenv("DATABASE_URL")
        if not conn_str:
            raise ValueError("database_url is required")
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Invalid table name: {table_name!r}")

        self.connection_string = conn_str
        self.table_name = table_name
        if ensure_schema:
            self.ensure_schema()

    def __repr__(self) -> str:
        return f"PostgresBinaryRepository(table_name={self.table_name!r})"

    @contextmanager
    def get_connection(self):
        try:
            conn = psycopg2.connect(self.connection_string)
        except psycopg2.OperationalError as exc:
            logger.error(f"Database unreachable: {exc}")
            raise StoreUnavailable("", f"record store is unavailable ({exc})") from exc

        try:
            yield conn
            conn.commit()
        except psycopg2.errors.UniqueViolation as exc:
            conn.rollback()
            raise UniquenessViolation(str(exc)) from exc
        except (psycopg2.OperationalError, psycopg2.InterfaceError) as exc:
            conn.rollback()
            logger.error(f"Database error: {exc}")
            raise StoreUnavailable("", f"record store is unavailable ({exc})") from exc
        except StoreError:
            conn.rollback()
            raise
        except Exception as exc:
            conn.rollback()
            logger.error(f"Database error: {exc}")
            raise
        finally:
            conn.close()

    # --- Schema helpers ---------------------------------------------------------
    def ensure_schema(self) -> None:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self.table_name} (
                        id BIGSERIAL PRIMARY KEY,
                        hash UUID NOT NULL,
                        directory TEXT NOT NULL DEFAULT '.',
                        name TEXT NOT NULL,
                        content BYTEA NOT NULL,
                        size BIGINT,
                        mime_type TEXT,
                        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
                        CONSTRAINT {self.table_name}_directory_name_key UNIQUE (directory, name)
                    )
                    """
                )
                cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table_name}_hash ON {self.table_name}(hash)")
        logger.debug(f"Schema ready for table {self.table_name}")

    def drop_schema(self) -> None:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(f"DROP TABLE IF EXISTS {self.table_name}")

    # --- Lookups ----------------------------------------------------------------
    def find_by_key(self, key: StorageKey) -> List[BinaryEntry]:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT {SELECT_COLUMNS} FROM {self.table_name} WHERE directory = %s AND name = %s",
                    (key.directory, key.name),
                )
                return [self._to_entry(row) for row in cur.fetchall()]

    def list_by_prefix(self, directory: str) -> List[BinaryEntry]:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT {SELECT_COLUMNS} FROM {self.table_name} WHERE directory = %s",
                    (directory,),
                )
                return [self._to_entry(row) for row in cur.fetchall()]

    def count_by_prefix(self, directory: str) -> int:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT COUNT(*) FROM {self.table_name} WHERE directory = %s",
                    (directory,),
                )
                return cur.fetchone()[0]

    # --- Mutations --------------------------------------------------------------
    def insert(self, entry: BinaryEntry) -> BinaryEntry:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO {self.table_name} (hash, directory, name, content, size, mime_type)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING {SELECT_COLUMNS}
                    """,
                    (
                        entry.hash,
                        entry.directory,
                        entry.name,
                        psycopg2.Binary(entry.content),
                        entry.size,
                        entry.mime_type,
                    ),
                )
                return self._to_entry(cur.fetchone())

    def update_key(self, old_key: StorageKey, new_key: StorageKey) -> BinaryEntry:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE {self.table_name}
                    SET directory = %s, name = %s, updated_at = CURRENT_TIMESTAMP
                    WHERE directory = %s AND name = %s
                    RETURNING {SELECT_COLUMNS}
                    """,
                    (new_key.directory, new_key.name, old_key.directory, old_key.name),
                )
                row = cur.fetchone()
                if row is None:
                    raise EntryNotFound(old_key.path)
                return self._to_entry(row)

    def delete_by_key(self, key: StorageKey) -> int:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"DELETE FROM {self.table_name} WHERE directory = %s AND name = %s",
                    (key.directory, key.name),
                )
                return cur.rowcount

    def delete_by_prefix(self, directory: str) -> int:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"DELETE FROM {self.table_name} WHERE directory = %s",
                    (directory,),
                )
                return cur.rowcount

    # --- Row mapping ------------------------------------------------------------
    @staticmethod
    def _to_entry(row: Sequence) -> BinaryEntry:
        record = dict(zip(COLUMNS, row))
        content = record["content"]
        return BinaryEntry(
            id=record["id"],
            hash=str(record["hash"]) if record["hash"] is not None else None,
            directory=record["directory"],
            name=record["name"],
            content=bytes(content) if content is not None else b"",
            size=record["size"],
            mime_type=record["mime_type"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )
