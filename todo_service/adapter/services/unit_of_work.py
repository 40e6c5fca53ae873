from datetime import datetime
from typing import Callable, Optional

from todo_service.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from todo_service.adapter.repositories.todo_repository import TodoRepository
from todo_service.adapter.repositories.user_repository import UserRepository
from todo_service.app.services.collection_store import CollectionStore
from todo_service.app.services.unit_of_work import UnitOfWork


class CollectionUnitOfWork(UnitOfWork):
    """UnitOfWork over a shared CollectionStore (JSON files or memory)"""

    def __init__(
        self,
        store: CollectionStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.clock = clock

    async def __aenter__(self):
        # Initialize all repositories with the store
        self.users = UserRepository(self.store)
        self.password_reset_tokens = PasswordResetTokenRepository(self.store, clock=self.clock)
        self.todos = TodoRepository(self.store)
        return self

    async def __aexit__(self, *args):
        return False
