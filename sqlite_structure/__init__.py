"""
sqlite-structure - Canonical schema descriptions for SQLite databases.

This package provides tools for:
- Introspecting tables, columns and indexes through SQLite's pragma functions
- Producing an order-normalized structure suitable for deep equality checks
- Rendering that structure as JSON for snapshot tests
"""

__version__ = "0.1.0"

from sqlite_structure.core.models import (
    Column,
    Index,
    IndexColumn,
    IndexOrigin,
    Structure,
    Table,
    TableType,
    structure_to_dict,
    structure_to_json,
)
from sqlite_structure.core.storage import CallableStorage, Query, SQLiteStorage, Storage, connect
from sqlite_structure.core.structure import describe, get_structure

__all__ = [
    "CallableStorage",
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
    "__version__",
    "connect",
    "describe",
    "get_structure",
    "structure_to_dict",
    "structure_to_json",
]
