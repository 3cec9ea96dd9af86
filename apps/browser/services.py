"""
Services for the database browser.

Backs the schema viewer, row-count stats, table browser, read-only query
console and the development-only clear operation.
"""
import logging
from typing import Optional

from django.conf import settings

from apps.core import db_service
from apps.core.exceptions import OperationNotPermitted
from config.database import is_production
from .dtos import QueryResultDTO, SchemaDTO, StatsDTO, TableDataDTO, TableSchemaDTO
from .gate import ensure_read_only

logger = logging.getLogger(__name__)


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _count_rows(table_name: str) -> int:
    backend = db_service.get_backend()
    result = backend.execute(f"SELECT COUNT(*) AS count FROM {_quote_identifier(table_name)}")
    return int(result.rows[0]['count'])


def get_schema() -> SchemaDTO:
    backend = db_service.get_backend()
    tables = backend.list_tables()

    schema = {}
    for table_name in tables:
        description = backend.describe_table(table_name)
        schema[table_name] = TableSchemaDTO(
            columns=description['columns'],
            indexes=description['indexes'],
        )

    return SchemaDTO(tables=tables, schema=schema)


def get_stats() -> StatsDTO:
    backend = db_service.get_backend()
    tables = backend.list_tables()
    return StatsDTO(
        table_count=len(tables),
        tables={table_name: _count_rows(table_name) for table_name in tables},
    )


def get_table_data(table_name: str) -> Optional[TableDataDTO]:
    """
    Return every row of a table, or None if no table has exactly that name.

    The name is checked against the backend catalog before it is used in
    any statement.
    """
    backend = db_service.get_backend()
    if not backend.table_exists(table_name):
        return None

    data = backend.execute(f"SELECT * FROM {_quote_identifier(table_name)}")
    return TableDataDTO(
        table=table_name,
        row_count=_count_rows(table_name),
        rows=data.rows,
    )


def run_query(sql: str) -> QueryResultDTO:
    """
    Execute a console query.

    Raises:
        QueryRejected: statement is not SELECT/PRAGMA
        QueryExecutionError: backend failed to run it
    """
    ensure_read_only(sql)
    result = db_service.execute(sql)
    return QueryResultDTO(row_count=result.row_count, rows=result.rows)


def clear_database() -> list[str]:
    """
    Delete all rows from every user table. Development and test only.
    Calling it on an already empty database is a no-op.
    """
    if is_production(settings.APP_ENV):
        raise OperationNotPermitted("Database clearing is not allowed in production")

    backend = db_service.get_backend()
    tables = backend.list_tables()
    for table_name in tables:
        backend.execute(f"DELETE FROM {_quote_identifier(table_name)}")

    logger.warning(f"Database cleared: {', '.join(tables) or '(no tables)'}")
    return tables
