from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.libs.result import Error, Result, Return
from .dtos import TodoResponse, UpdateTodoCommand
from .validation import validate_priority


class UpdateTodoUseCase:
    """
    Update Todo Use Case

    Partial update: toggling completion and editing fields go through the
    same path. id, owner and creation time cannot change.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, todo_id: str, command: UpdateTodoCommand) -> Result[TodoResponse]:
        changes = command.changes()

        if "title" in changes and not changes["title"]:
            return Return.err(Error("VALIDATION_ERROR", "Title cannot be empty"))

        priority_error = validate_priority(changes.get("priority"))
        if priority_error:
            return Return.err(priority_error)

        # Explicit nulls clear optional text fields and are ignored elsewhere
        for field in ("description", "category", "due_date"):
            if field in changes and changes[field] is None:
                changes[field] = ""
        changes = {k: v for k, v in changes.items() if v is not None}

        async with self.uow:
            todo = await self.uow.todos.update(todo_id, changes)

        if todo is None:
            return Return.err(Error("TODO_NOT_FOUND", "Todo not found"))

        return Return.ok(TodoResponse.from_entity(todo))
