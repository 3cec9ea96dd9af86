"""
DatabaseService - Abstraction layer for SQL execution.

This module provides a backend-agnostic interface for running SQL against
the tasks database. The actual backend is picked once, at startup, from the
APP_ENV setting (see config/database.py).

Usage:
    from apps.core import db_service

    result = db_service.execute("SELECT * FROM tasks WHERE id = ?", [task_id])
    result.rows, result.row_count, result.last_insert_id

Environment Configuration:
    APP_ENV=development  # Embedded in-memory SQLite (default)
    APP_ENV=test         # Embedded in-memory SQLite
    APP_ENV=production   # PostgreSQL server, requires DATABASE_URL

Initialization:
    init_database() runs from CoreConfig.ready(). Until it has completed,
    get_backend() raises DatabaseNotInitialized instead of handing out a
    half-built backend. wait_for_backend() blocks on the same barrier.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from django.conf import settings

from apps.core.dtos import QueryResult
from apps.core.exceptions import DatabaseNotInitialized
from config.database import EMBEDDED, SERVER

logger = logging.getLogger(__name__)


class DatabaseBackend(ABC):
    """
    Abstract interface for SQL execution.

    Implementations:
    - EmbeddedDatabaseBackend: in-memory SQLite for development/testing
    - ServerDatabaseBackend: pooled PostgreSQL for production
    """

    name = ''

    # Catalog lookups, written in the backend's own dialect
    LIST_TABLES_SQL = ''
    TABLE_EXISTS_SQL = ''

    @abstractmethod
    def initialize(self) -> None:
        """Open the connection(s) and create the schema if absent."""
        pass

    @abstractmethod
    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """
        Execute a single statement.

        Args:
            sql: Statement text, qmark (?) placeholders
            params: Positional parameters

        Returns:
            QueryResult with rows, row_count and (after INSERT) last_insert_id
        """
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Release every connection held by the backend."""
        pass

    @abstractmethod
    def describe_table(self, table_name: str) -> Dict[str, List[Dict[str, Any]]]:
        """Return {'columns': [...], 'indexes': [...]} for an existing table."""
        pass

    def list_tables(self) -> List[str]:
        result = self.execute(self.LIST_TABLES_SQL)
        return [row['name'] for row in result.rows]

    def table_exists(self, table_name: str) -> bool:
        """Exact-name lookup in the backend's catalog."""
        result = self.execute(self.TABLE_EXISTS_SQL, [table_name])
        return result.row_count > 0


_backend: Optional[DatabaseBackend] = None
_selected_config: Optional[Dict[str, Any]] = None
_ready = threading.Event()
_init_lock = threading.Lock()


def _get_backend(config: Dict[str, Any]) -> DatabaseBackend:
    """Build the configured backend from the TASKDESK_DATABASE config."""
    backend = config.get('BACKEND', EMBEDDED)

    if backend == EMBEDDED:
        from apps.core.backends.embedded_backend import EmbeddedDatabaseBackend
        return EmbeddedDatabaseBackend(database=config.get('NAME', ':memory:'))
    elif backend == SERVER:
        from apps.core.backends.server_backend import ServerDatabaseBackend
        return ServerDatabaseBackend(
            url=config.get('URL', ''),
            min_connections=config.get('POOL_MIN', 1),
            max_connections=config.get('POOL_MAX', 10),
        )
    else:
        raise ValueError(f"Unknown database backend: {backend}")


def init_database(config: Optional[Dict[str, Any]] = None) -> DatabaseBackend:
    """
    Select and initialize the process-wide backend.

    Runs once; later calls return the backend already in place. Any
    failure propagates so that startup aborts.

    The first successful call fixes the backend configuration for the
    life of the process. Re-initializing after shutdown_database() (only
    tests do this) reopens that same configuration; a different config
    argument is ignored.
    """
    global _backend, _selected_config

    with _init_lock:
        if _backend is not None:
            return _backend

        if _selected_config is not None:
            if config is not None and config != _selected_config:
                logger.warning(
                    f"Ignoring database config {config.get('BACKEND')!r}; backend is fixed to "
                    f"{_selected_config.get('BACKEND')!r} for this process"
                )
            config = _selected_config
        elif config is None:
            config = settings.TASKDESK_DATABASE

        backend = _get_backend(config)
        try:
            backend.initialize()
        except Exception as e:
            logger.critical(f"Database initialization failed ({backend.name or config.get('BACKEND')}): {e}")
            raise

        _backend = backend
        _selected_config = dict(config)
        _ready.set()
        logger.info(f"Database backend ready: {backend.name}")
        return backend


def get_backend() -> DatabaseBackend:
    """Return the active backend, or raise if initialization has not finished."""
    if not _ready.is_set() or _backend is None:
        raise DatabaseNotInitialized()
    return _backend


def wait_for_backend(timeout: Optional[float] = None) -> DatabaseBackend:
    """Block until the backend is ready; raise DatabaseNotInitialized on timeout."""
    if not _ready.wait(timeout):
        raise DatabaseNotInitialized(
            f"Database backend not initialized after {timeout} seconds"
        )
    return get_backend()


def execute(sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
    """Execute a statement on the active backend."""
    return get_backend().execute(sql, params)


def shutdown_database() -> None:
    """
    Close the active backend. Subsequent calls fail with DatabaseNotInitialized
    until init_database() reopens the same backend configuration.
    """
    global _backend

    with _init_lock:
        if _backend is None:
            return
        _ready.clear()
        backend, _backend = _backend, None
        logger.info(f"Shutting down database backend: {backend.name}")
        backend.shutdown()
