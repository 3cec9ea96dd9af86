"""DTOs for Tasks app - Data Transfer Objects for cross-app communication."""
from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class TaskDTO:
    """A row of the tasks table."""
    id: int
    title: str
    description: Optional[str]
    status: str
    due_date_time: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        """Wire representation, using the column names of the tasks table."""
        data = asdict(self)
        return {
            'id': data['id'],
            'title': data['title'],
            'description': data['description'],
            'status': data['status'],
            'dueDateTime': data['due_date_time'],
            'createdAt': data['created_at'],
            'updatedAt': data['updated_at'],
        }
