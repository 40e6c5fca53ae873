from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.domain.entities import Todo, TodoPriority
from todo_service.libs.result import Error, Result, Return
from .dtos import CreateTodoCommand, TodoResponse
from .validation import validate_priority


class CreateTodoUseCase:
    """
    Create Todo Use Case

    Business Rules:
    - title and user_id are required
    - priority defaults to medium; text fields default to ""
    - New todos start incomplete
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateTodoCommand) -> Result[TodoResponse]:
        if not command.title or not command.user_id:
            return Return.err(Error("VALIDATION_ERROR", "Title and user ID are required"))

        priority_error = validate_priority(command.priority)
        if priority_error:
            return Return.err(priority_error)

        todo = Todo(
            title=command.title,
            user_id=command.user_id,
            description=command.description or "",
            priority=command.priority or TodoPriority.medium,
            category=command.category or "",
            due_date=command.due_date or "",
            completed=False,
        )

        async with self.uow:
            todo = await self.uow.todos.create(todo)

        return Return.ok(TodoResponse.from_entity(todo))
