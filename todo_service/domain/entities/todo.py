"""
Todo Entity

A single item on a user's personal task list.
"""

from datetime import datetime

from sqlmodel import Field

from todo_service.domain.base import BaseModel, generate_uuid, utc_now
from .enums import TodoPriority


class Todo(BaseModel):
    """
    Todo entity - owned by exactly one user.

    Business Rules:
    - id, user_id and created_at never change after creation
    - updated_at is refreshed on every update
    """

    id: str = Field(default_factory=generate_uuid)
    title: str
    description: str = ""
    priority: TodoPriority = Field(default=TodoPriority.medium)
    category: str = ""
    due_date: str = ""
    completed: bool = Field(default=False)
    user_id: str

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
