"""
Schema bootstrap for the tasks table.

The statements are written in the embedded (SQLite) dialect. The server
backend runs them through apps.core.dialect before executing.
"""

TASK_STATUSES = ('TODO', 'IN_PROGRESS', 'COMPLETED')

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    status TEXT NOT NULL CHECK(status IN ('TODO', 'IN_PROGRESS', 'COMPLETED')),
    dueDateTime TEXT NOT NULL,
    createdAt TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updatedAt TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

CREATE_STATUS_INDEX = "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)"

CREATE_DUE_DATE_INDEX = "CREATE INDEX IF NOT EXISTS idx_tasks_dueDateTime ON tasks(dueDateTime)"

SCHEMA_STATEMENTS = (
    CREATE_TASKS_TABLE,
    CREATE_STATUS_INDEX,
    CREATE_DUE_DATE_INDEX,
)
