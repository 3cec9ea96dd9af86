"""
SQLite -> PostgreSQL dialect translation.

Statements across the codebase are written once, in the embedded (SQLite)
dialect. The server backend rewrites them with the handful of textual
substitutions below before handing them to psycopg2.

Only the constructs used by the tasks schema and repository are covered.
"""
import re

_NOW_FUNCTION = re.compile(r"datetime\(\s*'now'\s*\)", re.IGNORECASE)
_AUTOINCREMENT_PK = re.compile(r"\bINTEGER\s+PRIMARY\s+KEY\s+AUTOINCREMENT\b", re.IGNORECASE)
_AUTOINCREMENT = re.compile(r"\s*\bAUTOINCREMENT\b", re.IGNORECASE)
_RETURNING = re.compile(r"\bRETURNING\b", re.IGNORECASE)


def is_insert(sql: str) -> bool:
    return sql.strip().upper().startswith('INSERT')


def translate(sql: str) -> str:
    """Rewrite SQLite-only syntax into its PostgreSQL equivalent."""
    sql = _NOW_FUNCTION.sub('NOW()', sql)
    sql = _AUTOINCREMENT_PK.sub('SERIAL PRIMARY KEY', sql)
    sql = _AUTOINCREMENT.sub('', sql)
    return sql


def convert_placeholders(sql: str) -> str:
    """
    Turn qmark placeholders into psycopg2's pyformat ones.

    Literal percent signs are doubled first so psycopg2 does not read them
    as placeholders. Question marks inside string literals are not
    special-cased.
    """
    return sql.replace('%', '%%').replace('?', '%s')


def add_returning_id(sql: str, pk_column: str = 'id') -> str:
    """Append RETURNING <pk> to an INSERT that does not already have one."""
    if not is_insert(sql) or _RETURNING.search(sql):
        return sql
    stripped = sql.rstrip().rstrip(';').rstrip()
    return f"{stripped} RETURNING {pk_column}"


def to_server_dialect(sql: str, has_params: bool) -> str:
    """Full pipeline applied by the server backend to every statement."""
    sql = add_returning_id(translate(sql))
    if has_params:
        sql = convert_placeholders(sql)
    return sql
