"""
Read-only query gate for the database console.

authorize() lets a statement through only if its text starts with SELECT
or PRAGMA (case-insensitive, surrounding whitespace ignored).

Known weakness: this is a prefix check. A body such as
"SELECT * FROM tasks; DROP TABLE tasks; --" is allowed. Whether the
trailing statement runs is up to the backend: the embedded backend executes
one statement per call and fails on such input, psycopg2 would run all of
them.
"""
from dataclasses import dataclass
from typing import Optional

ALLOWED_PREFIXES = ('SELECT', 'PRAGMA')

QUERY_REQUIRED = "Query is required"
READ_ONLY_ONLY = "Only SELECT and PRAGMA queries are allowed for safety"


class QueryRejected(Exception):
    """The gate refused a statement. Never raised for execution failures."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class QueryAuthorization:
    allowed: bool
    reason: Optional[str] = None


def authorize(sql: Optional[str]) -> QueryAuthorization:
    statement = (sql or '').strip()
    if not statement:
        return QueryAuthorization(allowed=False, reason=QUERY_REQUIRED)

    if statement.upper().startswith(ALLOWED_PREFIXES):
        return QueryAuthorization(allowed=True)

    return QueryAuthorization(allowed=False, reason=READ_ONLY_ONLY)


def ensure_read_only(sql: Optional[str]) -> None:
    """Raise QueryRejected unless authorize() allows the statement."""
    decision = authorize(sql)
    if not decision.allowed:
        raise QueryRejected(decision.reason)
