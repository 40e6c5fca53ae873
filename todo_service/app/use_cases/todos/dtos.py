"""
Todo Use Case DTOs (Data Transfer Objects)

Todos travel in camelCase on the wire (userId, dueDate, createdAt,
updatedAt); commands are populated by either name.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from todo_service.domain.entities import Todo


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTodoCommand(CamelModel):
    title: Optional[str] = None
    user_id: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[str] = None


class UpdateTodoCommand(CamelModel):
    """Only the fields explicitly set are applied"""

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[str] = None
    completed: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, by_alias=False)


# ============================================================================
# Response DTOs
# ============================================================================


class TodoResponse(CamelModel):
    id: str
    title: str
    description: str
    priority: str
    category: str
    due_date: str
    completed: bool
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoResponse":
        return cls.model_validate(todo.model_dump(mode="json"))


class DeleteTodoResponse(BaseModel):
    message: str
