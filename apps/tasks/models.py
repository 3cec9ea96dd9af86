"""
Tasks are stored in raw SQL through apps.core.db_service (see
apps.core.schema for the table definition); only the status choices
live here.
"""
from django.db import models


class TaskStatus(models.TextChoices):
    TODO = 'TODO', 'To Do'
    IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
    COMPLETED = 'COMPLETED', 'Completed'
