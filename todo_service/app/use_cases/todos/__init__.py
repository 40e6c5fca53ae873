"""
Todo Use Cases

CRUD over a user's personal todo list.
"""

from .create_todo_use_case import CreateTodoUseCase
from .list_todos_use_case import ListTodosUseCase
from .get_todo_use_case import GetTodoUseCase
from .update_todo_use_case import UpdateTodoUseCase
from .delete_todo_use_case import DeleteTodoUseCase
from .dtos import CreateTodoCommand, UpdateTodoCommand, TodoResponse, DeleteTodoResponse

__all__ = [
    # Use Cases
    "CreateTodoUseCase",
    "ListTodosUseCase",
    "GetTodoUseCase",
    "UpdateTodoUseCase",
    "DeleteTodoUseCase",
    # DTOs
    "CreateTodoCommand",
    "UpdateTodoCommand",
    "TodoResponse",
    "DeleteTodoResponse",
]
