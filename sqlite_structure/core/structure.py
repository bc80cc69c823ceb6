"""Structure assembly - fold catalog rows into the normalized model."""

import logging

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
from sqlite_structure.core.queries import IndexListRow, TableListRow
from sqlite_structure.core.storage import Storage

logger = logging.getLogger(__name__)


def describe(storage: Storage) -> Structure:
    """
    Describe the functionally relevant parts of a database's structure.

    This is a best effort description intended for tests that check whether
    two databases are structurally equivalent. The same schema always yields
    an equal result, however the schema was built.

    Args:
        storage: Query capability for the database to describe

    Returns:
        Tables ordered by (schema, name)

    Example:
        >>> conn = sqlite3.connect(":memory:")
        >>> _ = conn.execute("create table t (id integer primary key)")
        >>> describe(SQLiteStorage(conn))[0].name
        't'
    """
    reader = CatalogReader(storage)
    structure = [_build_table(reader, table) for table in reader.list_tables()]
    logger.debug("Described %d tables", len(structure))
    return structure


# Alias
get_structure = describe


def _build_table(reader: CatalogReader, table: TableListRow) -> Table:
    columns = tuple(
        Column(
            name=column.name,
            type=column.type,
            not_null=column.notnull,
            default_value=column.dflt_value,
            primary_key=column.pk,
        )
        for column in reader.list_columns(table.name, table.schema)
    )
    indexes = tuple(
        _build_index(reader, index, table.schema)
        for index in reader.list_indexes(table.name, table.schema)
    )
    return Table(
        schema=table.schema,
        name=table.name,
        type=TableType(table.type),
        without_rowid=table.wr,
        strict=table.strict,
        columns=columns,
        indexes=indexes,
    )


def _build_index(reader: CatalogReader, index: IndexListRow, schema: str) -> Index:
    columns = tuple(
        IndexColumn(name=column.name)
        for column in reader.list_index_columns(index.name, schema)
    )
    return Index(
        name=index.name,
        unique=index.unique,
        origin=IndexOrigin(index.origin),
        partial=index.partial,
        columns=columns,
    )
