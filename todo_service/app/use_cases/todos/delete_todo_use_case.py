from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import DeleteTodoResponse


class DeleteTodoUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, todo_id: str) -> Result[DeleteTodoResponse]:
        async with self.uow:
            deleted = await self.uow.todos.delete(todo_id)

        if not deleted:
            return Return.err(Error("TODO_NOT_FOUND", "Todo not found"))

        return Return.ok(DeleteTodoResponse(message="Todo deleted successfully"))
