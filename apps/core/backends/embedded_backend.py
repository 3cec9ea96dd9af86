"""
Embedded Database Backend - In-memory SQLite for development and tests.

The database lives inside the process and disappears with it. Every
statement goes through a single shared connection, serialized by a lock.

Usage:
    Set APP_ENV=development (default) or APP_ENV=test.
"""

import logging
import sqlite3
import threading
from typing import Any, Dict, List, Optional, Sequence

from apps.core.db_service import DatabaseBackend
from apps.core.dtos import QueryResult
from apps.core.exceptions import DatabaseNotInitialized, QueryExecutionError
from apps.core.schema import SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)

_WRITE_VERBS = ('INSERT', 'UPDATE', 'DELETE')


def _materialize(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
    """Turn every result row into a dict, keeping column and row order."""
    if cursor.description is None:
        return []
    columns = [column[0] for column in cursor.description]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]


class EmbeddedDatabaseBackend(DatabaseBackend):
    """
    Execute statements against a private SQLite database.

    Ideal for:
    - Local development without a database server
    - Unit tests (fresh, empty database per process)
    """

    name = 'embedded'

    LIST_TABLES_SQL = (
        "SELECT name FROM sqlite_master "
        "WHERE type='table' AND name NOT LIKE 'sqlite_%' "
        "ORDER BY name"
    )
    TABLE_EXISTS_SQL = "SELECT name FROM sqlite_master WHERE type='table' AND name = ?"

    def __init__(self, database: str = ':memory:'):
        self._database = database
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def initialize(self) -> None:
        connection = sqlite3.connect(
            self._database,
            check_same_thread=False,
            isolation_level=None,  # autocommit
        )
        connection.execute("PRAGMA foreign_keys = ON")
        for statement in SCHEMA_STATEMENTS:
            connection.execute(statement)

        self._connection = connection
        logger.info(f"[EMBEDDED] SQLite database ready ({self._database})")

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """Run one statement; INSERT/UPDATE/DELETE for effect, anything else for rows."""
        verb = sql.strip().upper()
        params = tuple(params or ())

        with self._lock:
            connection = self._connection
            if connection is None:
                raise DatabaseNotInitialized()

            try:
                cursor = connection.execute(sql, params)

                if verb.startswith('INSERT'):
                    last_id = connection.execute("SELECT last_insert_rowid()").fetchone()[0]
                    return QueryResult(row_count=1, last_insert_id=last_id)

                if verb.startswith(_WRITE_VERBS):
                    return QueryResult(row_count=cursor.rowcount)

                rows = _materialize(cursor)
                return QueryResult(rows=rows, row_count=len(rows))

            except sqlite3.Error as e:
                logger.exception(f"[EMBEDDED] Statement failed: {e}")
                raise QueryExecutionError(str(e), sql=sql) from e

    def describe_table(self, table_name: str) -> Dict[str, List[Dict[str, Any]]]:
        # table_name must already have passed table_exists()
        quoted = table_name.replace('"', '""')
        columns = self.execute(f'PRAGMA table_info("{quoted}")')
        indexes = self.execute(f'PRAGMA index_list("{quoted}")')
        return {
            'columns': columns.rows,
            'indexes': indexes.rows,
        }

    def shutdown(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
        logger.info("[EMBEDDED] SQLite database closed")
