"""Custom exceptions with helpful error messages.

Only the connection helper, configuration and CLI raise these. Introspection
errors coming from the driver are never wrapped.
"""


class SqliteStructureError(Exception):
    """Base exception for sqlite-structure errors."""

    pass


class DatabaseNotFoundError(SqliteStructureError):
    """Database file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Database file '{path}' not found.\n\n"
            f"Suggestions:\n"
            f"1. Check the database path spelling\n"
            f"2. Read-only connections never create files; build the database first\n"
            f"3. Pass --writable to open (and create) the file in read-write mode"
        )


class UnsupportedSQLiteVersionError(SqliteStructureError):
    """Runtime SQLite library is too old for pragma_table_list()."""

    def __init__(self, found: str, required: str):
        self.found = found
        self.required = required
        super().__init__(
            f"SQLite {found} does not support pragma_table_list() "
            f"(requires {required} or newer).\n\n"
            f"Suggestions:\n"
            f"1. Upgrade the SQLite library your Python interpreter links against\n"
            f"2. Use a Python build that bundles a recent SQLite"
        )


class ConfigError(SqliteStructureError):
    """Configuration is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(
            f"{message}\n\n"
            f"Suggestions:\n"
            f"1. Check sqlite-structure.toml for typos\n"
            f"2. Attach entries must look like NAME=PATH"
        )
