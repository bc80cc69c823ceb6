"""Database access abstraction - how to execute a query and get rows back."""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import quote

from sqlite_structure.exceptions import DatabaseNotFoundError, UnsupportedSQLiteVersionError

logger = logging.getLogger(__name__)

Value = Union[str, int, float, None]
Row = dict[str, Value]

# pragma_table_list() first shipped in SQLite 3.37.0
MIN_SQLITE_VERSION = (3, 37, 0)


@dataclass(frozen=True)
class Query:
    """SQL text with positional (?) parameters."""

    sql: str
    params: tuple[Value, ...] = field(default_factory=tuple)


class Storage(ABC):
    """
    Capability to run a read-only query and return its rows.

    Implementations must return one dict per row, keyed by the query's
    select-list column names in select-list order.

    Example:
        >>> class ListStorage(Storage):
        ...     def __init__(self, rows):
        ...         self.rows = rows
        ...     def execute(self, query):
        ...         return self.rows
    """

    @abstractmethod
    def execute(self, query: Query) -> list[Row]:
        """
        Execute a query.

        Args:
            query: SQL and its bound parameters

        Returns:
            Result rows as dicts of column name to value
        """
        pass


class SQLiteStorage(Storage):
    """Storage backed by a sqlite3 connection."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize storage.

        Args:
            conn: Open sqlite3 connection; its row_factory is left untouched
        """
        self.conn = conn

    def execute(self, query: Query) -> list[Row]:
        cur = self.conn.execute(query.sql, query.params)
        try:
            names = [d[0] for d in cur.description or ()]
            return [dict(zip(names, row)) for row in cur.fetchall()]
        finally:
            cur.close()


class CallableStorage(Storage):
    """Storage wrapping a plain ``fn(query) -> rows`` callable."""

    def __init__(self, fn: Callable[[Query], list[Row]]):
        self.fn = fn

    def execute(self, query: Query) -> list[Row]:
        return list(self.fn(query))


def check_sqlite_version(version_info: tuple[int, ...] = sqlite3.sqlite_version_info) -> None:
    """
    Ensure the SQLite library supports the catalog functions we query.

    Raises:
        UnsupportedSQLiteVersionError: If the library predates pragma_table_list()
    """
    if tuple(version_info) < MIN_SQLITE_VERSION:
        raise UnsupportedSQLiteVersionError(
            found=".".join(str(p) for p in version_info),
            required=".".join(str(p) for p in MIN_SQLITE_VERSION),
        )


def _database_uri(path: Path, read_only: bool) -> str:
    mode = "ro" if read_only else "rwc"
    return f"file:{quote(str(path))}?mode={mode}"


def connect(
    path: Union[str, Path],
    attach: Optional[dict[str, Union[str, Path]]] = None,
    read_only: bool = True,
) -> sqlite3.Connection:
    """
    Open a database for introspection.

    Args:
        path: Database file, or ":memory:"
        attach: Schema name -> database file to ATTACH alongside main
        read_only: Open every file with mode=ro (default True)

    Returns:
        Open sqlite3 connection

    Raises:
        UnsupportedSQLiteVersionError: If SQLite is older than 3.37.0
        DatabaseNotFoundError: If a read-only database file does not exist
    """
    check_sqlite_version()

    if str(path) == ":memory:":
        conn = sqlite3.connect(":memory:", uri=True)
    else:
        db_path = Path(path)
        if read_only and not db_path.exists():
            raise DatabaseNotFoundError(str(db_path))
        conn = sqlite3.connect(_database_uri(db_path, read_only), uri=True)

    try:
        for schema, attach_path in (attach or {}).items():
            attach_path = Path(attach_path)
            if read_only and not attach_path.exists():
                raise DatabaseNotFoundError(str(attach_path))
            logger.debug("Attaching %s as %s", attach_path, schema)
            conn.execute(
                "ATTACH DATABASE ? AS ?",
                (_database_uri(attach_path, read_only), schema),
            )
    except BaseException:
        conn.close()
        raise

    return conn
