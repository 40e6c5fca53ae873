from typing import Any, Dict, List, Optional

from todo_service.app.repositories.todo_repository import ITodoRepository
from todo_service.app.services.collection_store import CollectionStore
from todo_service.domain.base import utc_now
from todo_service.domain.entities import Todo

TODOS_COLLECTION = "todos"

IMMUTABLE_FIELDS = {"id", "user_id", "created_at"}


class TodoRepository(ITodoRepository):
    """Todo repository implementation over a CollectionStore"""

    def __init__(self, store: CollectionStore):
        self.collections = store

    async def list_by_user_id(self, user_id: str) -> List[Todo]:
        """Get all todos owned by a user"""
        async with self.collections.lock(TODOS_COLLECTION):
            records = await self.collections.read(TODOS_COLLECTION)
        return [Todo.from_record(r) for r in records if r.get("user_id") == user_id]

    async def get_by_id(self, todo_id: str) -> Optional[Todo]:
        """Get todo by ID"""
        async with self.collections.lock(TODOS_COLLECTION):
            records = await self.collections.read(TODOS_COLLECTION)
        for record in records:
            if record.get("id") == todo_id:
                return Todo.from_record(record)
        return None

    async def create(self, todo: Todo) -> Todo:
        """Create a new todo"""
        async with self.collections.lock(TODOS_COLLECTION):
            records = await self.collections.read(TODOS_COLLECTION)
            records.append(todo.to_record())
            await self.collections.write(TODOS_COLLECTION, records)
        return todo

    async def update(self, todo_id: str, fields: Dict[str, Any]) -> Optional[Todo]:
        """Apply field updates and refresh updated_at; None if not found"""
        changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        changes["updated_at"] = utc_now()

        async with self.collections.lock(TODOS_COLLECTION):
            records = await self.collections.read(TODOS_COLLECTION)
            for index, record in enumerate(records):
                if record.get("id") == todo_id:
                    current = Todo.from_record(record)
                    updated = Todo.model_validate(
                        {**current.model_dump(), **changes}
                    )
                    records[index] = updated.to_record()
                    await self.collections.write(TODOS_COLLECTION, records)
                    return updated
        return None

    async def delete(self, todo_id: str) -> bool:
        """Delete todo; False if not found"""
        async with self.collections.lock(TODOS_COLLECTION):
            records = await self.collections.read(TODOS_COLLECTION)
            remaining = [r for r in records if r.get("id") != todo_id]
            if len(remaining) == len(records):
                return False
            await self.collections.write(TODOS_COLLECTION, remaining)
        return True
