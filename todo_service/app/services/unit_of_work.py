from abc import ABC, abstractmethod

from todo_service.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from todo_service.app.repositories.todo_repository import ITodoRepository
from todo_service.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access.

    Every repository operation is durable on its own and serialized per
    collection, so there is no commit step. No operation spans two
    collections atomically.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    password_reset_tokens: IPasswordResetTokenRepository
    todos: ITodoRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass
