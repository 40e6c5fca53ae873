from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from todo_service.domain.entities import Todo


class ITodoRepository(ABC):
    """Todo repository interface - application layer"""

    @abstractmethod
    async def list_by_user_id(self, user_id: str) -> List[Todo]:
        """Get all todos owned by a user"""
        pass

    @abstractmethod
    async def get_by_id(self, todo_id: str) -> Optional[Todo]:
        """Get todo by ID"""
        pass

    @abstractmethod
    async def create(self, todo: Todo) -> Todo:
        """Create a new todo"""
        pass

    @abstractmethod
    async def update(self, todo_id: str, fields: Dict[str, Any]) -> Optional[Todo]:
        """Apply field updates and refresh updated_at; None if not found"""
        pass

    @abstractmethod
    async def delete(self, todo_id: str) -> bool:
        """Delete todo; False if not found"""
        pass
