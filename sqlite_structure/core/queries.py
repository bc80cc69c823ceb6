"""
Catalog queries and their row shapes.

Each query selects from an SQLite pragma table-valued function. Ordering is
part of the query text so that the rows come back already normalized.
Table and index names are always bound parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlite_structure.core.storage import Query, Row, Value


def as_flag(value: Value) -> bool:
    """Coerce a 0/1 catalog flag; any nonzero value is true."""
    return bool(value)


# https://sqlite.org/pragma.html#pragma_table_list
TABLE_LIST_QUERY = Query(
    sql="""
    select "schema", "name", "type", "wr", "strict"
    from pragma_table_list()
    where "schema" <> 'temp' and "name" not like 'sqlite\\_%' escape '\\'
    order by "schema", "name"
    """
)


def table_info_query(name: str, schema: str) -> Query:
    """https://sqlite.org/pragma.html#pragma_table_info"""
    return Query(
        sql="""
        select "name", "type", "notnull", "dflt_value", "pk"
        from pragma_table_info(?, ?)
        order by "name"
        """,
        params=(name, schema),
    )


def index_list_query(table: str, schema: str) -> Query:
    """https://sqlite.org/pragma.html#pragma_index_list"""
    return Query(
        sql="""
        select "name", "unique", "origin", "partial"
        from pragma_index_list(?, ?)
        order by "name"
        """,
        params=(table, schema),
    )


def index_info_query(index: str, schema: str) -> Query:
    """https://sqlite.org/pragma.html#pragma_index_info"""
    return Query(
        sql="""
        select "name"
        from pragma_index_info(?, ?)
        order by "seqno"
        """,
        params=(index, schema),
    )


@dataclass(frozen=True)
class TableListRow:
    schema: str
    name: str
    type: str
    wr: bool
    strict: bool

    @classmethod
    def from_row(cls, row: Row) -> TableListRow:
        return cls(
            schema=row["schema"],
            name=row["name"],
            type=row["type"],
            wr=as_flag(row["wr"]),
            strict=as_flag(row["strict"]),
        )


@dataclass(frozen=True)
class TableInfoRow:
    name: str
    type: str
    notnull: bool
    dflt_value: Optional[str]
    pk: int

    @classmethod
    def from_row(cls, row: Row) -> TableInfoRow:
        return cls(
            name=row["name"],
            type=row["type"],
            notnull=as_flag(row["notnull"]),
            dflt_value=row["dflt_value"],
            # Ordinal, not a flag: 0 = not in the key
            pk=int(row["pk"] or 0),
        )


@dataclass(frozen=True)
class IndexListRow:
    name: str
    unique: bool
    origin: str
    partial: bool

    @classmethod
    def from_row(cls, row: Row) -> IndexListRow:
        return cls(
            name=row["name"],
            unique=as_flag(row["unique"]),
            origin=row["origin"],
            partial=as_flag(row["partial"]),
        )


@dataclass(frozen=True)
class IndexInfoRow:
    name: Optional[str]

    @classmethod
    def from_row(cls, row: Row) -> IndexInfoRow:
        return cls(name=row["name"])
