import logging
from typing import Any, Dict, List, Optional

from apps.core import db_service
from .dtos import TaskDTO
from .models import TaskStatus
from .schemas import TaskIn, TaskUpdateIn

logger = logging.getLogger(__name__)


# Schema field -> tasks column
UPDATABLE_COLUMNS = {
    'title': 'title',
    'description': 'description',
    'status': 'status',
    'due_date_time': 'dueDateTime',
}


def _to_dto(row: Dict[str, Any]) -> TaskDTO:
    """
    Build a TaskDTO from a tasks row.

    PostgreSQL folds unquoted identifiers to lower case (duedatetime,
    createdat, ...), so column names are compared case-insensitively.
    """
    values = {key.lower(): value for key, value in row.items()}
    return TaskDTO(
        id=values['id'],
        title=values['title'],
        description=values['description'],
        status=values['status'],
        due_date_time=str(values['duedatetime']),
        created_at=str(values['createdat']),
        updated_at=str(values['updatedat']),
    )


def create_task(payload: TaskIn) -> TaskDTO:
    status = str(payload.status or TaskStatus.TODO)
    result = db_service.execute(
        "INSERT INTO tasks (title, description, status, dueDateTime, createdAt, updatedAt) "
        "VALUES (?, ?, ?, ?, datetime('now'), datetime('now'))",
        [payload.title, payload.description or None, status, payload.due_date_time],
    )
    logger.info(f"Created task {result.last_insert_id}")
    return get_task(result.last_insert_id)


def get_task(task_id: int) -> Optional[TaskDTO]:
    result = db_service.execute("SELECT * FROM tasks WHERE id = ?", [task_id])
    if not result.rows:
        return None
    return _to_dto(result.rows[0])


def list_tasks() -> List[TaskDTO]:
    """All tasks, soonest due first."""
    result = db_service.execute("SELECT * FROM tasks ORDER BY dueDateTime ASC")
    return [_to_dto(row) for row in result.rows]


def update_task(task_id: int, payload: TaskUpdateIn) -> Optional[TaskDTO]:
    """
    Apply only the fields present in the payload.
    updatedAt is refreshed whenever at least one field changes.

    datetime('now') has whole-second resolution, so an update made within
    the same second as creation leaves updatedAt equal to createdAt.
    """
    existing = get_task(task_id)
    if existing is None:
        return None

    changes = payload.dict(exclude_unset=True)
    if not changes:
        return existing

    assignments = []
    values = []
    for field_name, value in changes.items():
        assignments.append(f"{UPDATABLE_COLUMNS[field_name]} = ?")
        values.append(str(value) if field_name == 'status' else value)

    assignments.append("updatedAt = datetime('now')")
    values.append(task_id)

    db_service.execute(
        f"UPDATE tasks SET {', '.join(assignments)} WHERE id = ?",
        values,
    )
    logger.info(f"Updated task {task_id}: {', '.join(changes)}")
    return get_task(task_id)


def delete_task(task_id: int) -> bool:
    result = db_service.execute("DELETE FROM tasks WHERE id = ?", [task_id])
    deleted = result.row_count > 0
    if deleted:
        logger.info(f"Deleted task {task_id}")
    return deleted


def delete_all_tasks() -> None:
    db_service.execute("DELETE FROM tasks")
