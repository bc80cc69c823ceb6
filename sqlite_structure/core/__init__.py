"""Core functionality for sqlite-structure."""

from sqlite_structure.core.introspection import CatalogReader
from sqlite_structure.core.models import (
    Column,
    Index,
    IndexColumn,
    IndexOrigin,
    Structure,
    Table,
    TableType,
)
from sqlite_structure.core.storage import CallableStorage, Query, SQLiteStorage, Storage, connect
from sqlite_structure.core.structure import describe, get_structure

__all__ = [
    "CallableStorage",
    "CatalogReader",
    "Column",
    "Index",
    "IndexColumn",
    "IndexOrigin",
    "Query",
    "SQLiteStorage",
    "Storage",
    "Structure",
    "Table",
    "TableType",
    "connect",
    "describe",
    "get_structure",
]
