"""Pytest configuration and shared fixtures."""

import sqlite3

import pytest

from sqlite_structure import SQLiteStorage


@pytest.fixture
def db_conn() -> sqlite3.Connection:
    """Provide an empty in-memory database."""
    conn = sqlite3.connect(":memory:")

    yield conn

    conn.close()


@pytest.fixture
def storage(db_conn: sqlite3.Connection) -> SQLiteStorage:
    return SQLiteStorage(db_conn)


@pytest.fixture
def sample_schema(db_conn: sqlite3.Connection) -> sqlite3.Connection:
    """
    Create a small schema exercising every catalog attribute.

    Returns the connection.
    """
    db_conn.executescript(
        """
        CREATE TABLE tb_manufacturer (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL UNIQUE,
            country TEXT DEFAULT 'unknown'
        );

        CREATE TABLE tb_model (
            fk_manufacturer INTEGER NOT NULL REFERENCES tb_manufacturer(id),
            code TEXT NOT NULL,
            description TEXT,
            PRIMARY KEY (fk_manufacturer, code)
        );

        CREATE INDEX idx_model_description ON tb_model(description, code);
        CREATE INDEX idx_model_partial ON tb_model(code) WHERE description IS NOT NULL;

        CREATE TABLE tb_setting (
            key TEXT PRIMARY KEY,
            value ANY
        ) WITHOUT ROWID, STRICT;

        CREATE VIEW v_model AS
            SELECT m.name, t.code FROM tb_model t JOIN tb_manufacturer m ON m.id = t.fk_manufacturer;
        """
    )
    return db_conn


@pytest.fixture
def file_db(tmp_path) -> str:
    """Create an on-disk database with one table and return its path."""
    path = tmp_path / "app.db"
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
        CREATE UNIQUE INDEX t_name ON t(name);
        """
    )
    conn.commit()
    conn.close()
    return str(path)
