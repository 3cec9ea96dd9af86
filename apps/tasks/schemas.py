"""
Schemas for Tasks app.
Pydantic/Ninja schemas carrying the task field constraints.
"""
from typing import Optional

from django.utils.dateparse import parse_date, parse_datetime
from ninja import Field, Schema
from pydantic import ConfigDict, field_validator

from .models import TaskStatus


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


def _validate_iso8601(value: str) -> str:
    value = value.strip()
    try:
        parsed = parse_datetime(value) or parse_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValueError("Due date and time must be a valid ISO 8601 date")
    return value


def _validate_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must not exceed {TITLE_MAX_LENGTH} characters")
    return value


def _validate_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters")
    return value


# =============================================================================
# Request Schemas
# =============================================================================

class TaskIn(Schema):
    """Schema for creating a task."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    due_date_time: str = Field(..., alias='dueDateTime')

    @field_validator('title')
    @classmethod
    def check_title(cls, value):
        return _validate_title(value)

    @field_validator('description')
    @classmethod
    def check_description(cls, value):
        return _validate_description(value)

    @field_validator('due_date_time')
    @classmethod
    def check_due_date_time(cls, value):
        return _validate_iso8601(value)


class TaskUpdateIn(Schema):
    """
    Schema for a partial task update.

    Only fields present in the payload are applied (see
    services.update_task). Description may be set to null; the other
    fields may not.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date_time: Optional[str] = Field(None, alias='dueDateTime')

    @field_validator('title')
    @classmethod
    def check_title(cls, value):
        if value is None:
            raise ValueError("Title cannot be empty")
        return _validate_title(value)

    @field_validator('description')
    @classmethod
    def check_description(cls, value):
        return _validate_description(value)

    @field_validator('status')
    @classmethod
    def check_status(cls, value):
        if value is None:
            raise ValueError(f"Status must be one of: {', '.join(TaskStatus.values)}")
        return value

    @field_validator('due_date_time')
    @classmethod
    def check_due_date_time(cls, value):
        if value is None:
            raise ValueError("Due date and time must be a valid ISO 8601 date")
        return _validate_iso8601(value)
