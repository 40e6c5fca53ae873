"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and password reset
- todos/: Todo list management

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .todos import (
    CreateTodoUseCase,
    ListTodosUseCase,
    GetTodoUseCase,
    UpdateTodoUseCase,
    DeleteTodoUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Todos
    "CreateTodoUseCase",
    "ListTodosUseCase",
    "GetTodoUseCase",
    "UpdateTodoUseCase",
    "DeleteTodoUseCase",
]
