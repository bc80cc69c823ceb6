"""Catalog introspection - read-only pragma queries decoded into typed rows."""

import logging

from sqlite_structure.core.queries import (
    TABLE_LIST_QUERY,
    IndexInfoRow,
    IndexListRow,
    TableInfoRow,
    TableListRow,
    index_info_query,
    index_list_query,
    table_info_query,
)
from sqlite_structure.core.storage import Query, Row, Storage

logger = logging.getLogger(__name__)


class CatalogReader:
    """
    Read SQLite catalog metadata through a Storage.

    Every method issues exactly one query. Nothing is cached and nothing is
    retried; errors raised by the storage propagate unchanged.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def _run(self, query: Query) -> list[Row]:
        logger.debug("Catalog query %s %r", " ".join(query.sql.split()), query.params)
        return self.storage.execute(query)

    def list_tables(self) -> list[TableListRow]:
        """Get all user tables in every non-temp schema, ordered by (schema, name)."""
        return [TableListRow.from_row(row) for row in self._run(TABLE_LIST_QUERY)]

    def list_columns(self, name: str, schema: str) -> list[TableInfoRow]:
        """Get all columns of a table, ordered by column name."""
        return [TableInfoRow.from_row(row) for row in self._run(table_info_query(name, schema))]

    def list_indexes(self, name: str, schema: str) -> list[IndexListRow]:
        """Get all indexes of a table, ordered by index name."""
        return [IndexListRow.from_row(row) for row in self._run(index_list_query(name, schema))]

    def list_index_columns(self, name: str, schema: str) -> list[IndexInfoRow]:
        """Get the key columns of an index, in key order."""
        return [IndexInfoRow.from_row(row) for row in self._run(index_info_query(name, schema))]
