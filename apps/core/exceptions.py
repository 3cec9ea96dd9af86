"""Exceptions raised by the data access layer."""


class DatabaseError(Exception):
    """Base class for data access failures."""


class DatabaseNotInitialized(DatabaseError):
    """A statement was issued before the backend finished initializing."""

    def __init__(self, message: str = "Database backend is not initialized"):
        super().__init__(message)


class QueryExecutionError(DatabaseError):
    """
    The backend failed to execute a statement.

    `message` is the backend's own error text, passed through unchanged.
    """

    def __init__(self, message: str, sql: str = ""):
        super().__init__(message)
        self.message = message
        self.sql = sql


class OperationNotPermitted(DatabaseError):
    """Destructive operation requested in an environment that forbids it."""
