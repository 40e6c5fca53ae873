from typing import List, Optional

from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import TodoResponse


class ListTodosUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: Optional[str]) -> Result[List[TodoResponse]]:
        if not user_id:
            return Return.err(Error("VALIDATION_ERROR", "User ID is required"))

        async with self.uow:
            todos = await self.uow.todos.list_by_user_id(user_id)

        return Return.ok([TodoResponse.from_entity(todo) for todo in todos])
