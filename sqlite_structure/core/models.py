"""
Core data models for sqlite-structure.

Defines the immutable value objects that describe a database's shape:
tables, their columns and indexes, and the columns each index covers.
Two structurally identical databases produce equal objects.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class TableType(str, Enum):
    """Kind of table-like object reported by pragma_table_list."""

    TABLE = "table"  # https://sqlite.org/lang_createtable.html
    VIEW = "view"  # https://sqlite.org/lang_createview.html
    SHADOW = "shadow"  # https://sqlite.org/vtab.html#xshadowname
    VIRTUAL = "virtual"  # https://sqlite.org/lang_createvtab.html


class IndexOrigin(str, Enum):
    """Why an index exists."""

    CREATE_INDEX = "c"  # https://sqlite.org/lang_createindex.html
    UNIQUE = "u"  # https://sqlite.org/lang_createtable.html#uniqueconst
    PRIMARY_KEY = "pk"  # https://sqlite.org/lang_createtable.html#primkeyconst


@dataclass(frozen=True)
class Column:
    """
    Represents a table column.

    Attributes:
        name: Column name
        type: Declared type, verbatim (may be empty)
        not_null: Whether the column has a NOT NULL constraint
        default_value: Default value expression as written, or None
        primary_key: 1-based position in the primary key, 0 if not part of it
    """

    name: str
    type: str
    not_null: bool
    default_value: Optional[str] = None
    primary_key: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "notNull": self.not_null,
            "defaultValue": self.default_value,
            "primaryKey": self.primary_key,
        }


@dataclass(frozen=True)
class IndexColumn:
    """A column covered by an index. None for expression keys."""

    name: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class Index:
    """
    Represents an index on a table.

    Attributes:
        name: Index name (auto-generated for constraint indexes)
        unique: Whether the index enforces uniqueness
        origin: How the index came to exist
        partial: Whether the index has a WHERE clause
        columns: Indexed columns in key order
    """

    name: str
    unique: bool
    origin: IndexOrigin
    partial: bool
    columns: tuple[IndexColumn, ...] = ()

    @property
    def column_names(self) -> list[Optional[str]]:
        return [c.name for c in self.columns]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "unique": self.unique,
            "origin": self.origin.value,
            "partial": self.partial,
            "columns": [c.to_dict() for c in self.columns],
        }


@dataclass(frozen=True)
class Table:
    """
    Represents one table-like catalog entry.

    The without_rowid and strict flags are recorded as reported, even for
    kinds where they carry no meaning (a view is never without rowid).

    Attributes:
        schema: Schema the table lives in (main, or an attached name)
        name: Table name
        type: Kind of object
        without_rowid: https://sqlite.org/withoutrowid.html
        strict: https://sqlite.org/stricttables.html
        columns: Columns ordered by name
        indexes: Indexes ordered by name
    """

    schema: str
    name: str
    type: TableType
    without_rowid: bool = False
    strict: bool = False
    columns: tuple[Column, ...] = field(default_factory=tuple)
    indexes: tuple[Index, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"

    @property
    def primary_key(self) -> list[str]:
        """Primary key column names in key order."""
        pk_columns = sorted((c for c in self.columns if c.primary_key), key=lambda c: c.primary_key)
        return [c.name for c in pk_columns]

    def get_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def get_index(self, name: str) -> Optional[Index]:
        for index in self.indexes:
            if index.name == name:
                return index
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema": self.schema,
            "name": self.name,
            "type": self.type.value,
            "withoutRowid": self.without_rowid,
            "strict": self.strict,
            "columns": [c.to_dict() for c in self.columns],
            "indexes": [i.to_dict() for i in self.indexes],
        }


# The root value. Ordered by (schema, name).
Structure = list[Table]


def structure_to_dict(structure: Structure) -> list[dict[str, Any]]:
    """Render a structure as plain lists and dicts for snapshot tooling."""
    return [table.to_dict() for table in structure]


def structure_to_json(structure: Structure, indent: Optional[int] = 2) -> str:
    """Render a structure as JSON text."""
    return json.dumps(structure_to_dict(structure), indent=indent)
