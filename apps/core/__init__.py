"""
Core app - Shared data access layer.

This app provides the backend-agnostic SQL interface (db_service) used by
the tasks and browser apps.

The backend is chosen once at startup:
- Embedded in-memory SQLite (development / test)
- PostgreSQL with a connection pool (production)
"""
