from typing import Any, Dict, Optional

from todo_service.app.repositories.user_repository import IUserRepository
from todo_service.app.services.collection_store import CollectionStore
from todo_service.domain.entities import User

USERS_COLLECTION = "users"


class UserRepository(IUserRepository):
    """User repository implementation over a CollectionStore"""

    def __init__(self, store: CollectionStore):
        self.collections = store

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        wanted = email.lower()
        async with self.collections.lock(USERS_COLLECTION):
            records = await self.collections.read(USERS_COLLECTION)
        for record in records:
            if record.get("email", "").lower() == wanted:
                return User.from_record(record)
        return None

    async def create(self, user: User) -> Optional[User]:
        """Create a new user; None if the email (case-insensitive) is taken"""
        wanted = user.email.lower()
        async with self.collections.lock(USERS_COLLECTION):
            records = await self.collections.read(USERS_COLLECTION)
            if any(r.get("email", "").lower() == wanted for r in records):
                return None
            records.append(user.to_record())
            await self.collections.write(USERS_COLLECTION, records)
        return user

    async def update(self, email: str, fields: Dict[str, Any]) -> bool:
        """Update fields of the user with this email; False if no such user"""
        wanted = email.lower()
        async with self.collections.lock(USERS_COLLECTION):
            records = await self.collections.read(USERS_COLLECTION)
            for index, record in enumerate(records):
                if record.get("email", "").lower() == wanted:
                    user = User.from_record(record)
                    updated = user.model_copy(update=fields)
                    records[index] = updated.to_record()
                    await self.collections.write(USERS_COLLECTION, records)
                    return True
        return False
