from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import TodoResponse


class GetTodoUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, todo_id: str) -> Result[TodoResponse]:
        async with self.uow:
            todo = await self.uow.todos.get_by_id(todo_id)

        if todo is None:
            return Return.err(Error("TODO_NOT_FOUND", "Todo not found"))

        return Return.ok(TodoResponse.from_entity(todo))
