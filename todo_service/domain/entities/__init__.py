"""
Todo Service Domain Entities

Each entity in its own file.
"""

from .enums import TodoPriority

from .user import User
from .password_reset_token import PasswordResetToken
from .todo import Todo

__all__ = [
    # Enums
    "TodoPriority",
    # Entities
    "User",
    "PasswordResetToken",
    "Todo",
]
