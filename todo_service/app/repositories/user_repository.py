from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from todo_service.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        pass

    @abstractmethod
    async def create(self, user: User) -> Optional[User]:
        """Create a new user; None if the email (case-insensitive) is taken"""
        pass

    @abstractmethod
    async def update(self, email: str, fields: Dict[str, Any]) -> bool:
        """Update fields of the user with this email; False if no such user"""
        pass
