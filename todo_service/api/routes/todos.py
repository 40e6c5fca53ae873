from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from todo_service.api.error import ClientError, ServerError
from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.app.use_cases.todos import (
    CreateTodoCommand,
    CreateTodoUseCase,
    DeleteTodoResponse,
    DeleteTodoUseCase,
    GetTodoUseCase,
    ListTodosUseCase,
    TodoResponse,
    UpdateTodoCommand,
    UpdateTodoUseCase,
)
from todo_service.depends import get_unit_of_work
from todo_service.libs.result import Error

router = APIRouter(prefix="/todos", tags=["Todos"])


def _raise_for(error: Error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error)
    if error.code == "TODO_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("", response_model=List[TodoResponse])
async def list_todos(
    user_id: Optional[str] = Query(None, alias="userId"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List a user's todos in creation order"""
    result = await ListTodosUseCase(uow).execute(user_id)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TodoResponse)
async def create_todo(
    command: CreateTodoCommand, uow: UnitOfWork = Depends(get_unit_of_work)
):
    result = await CreateTodoUseCase(uow).execute(command)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_todo(todo_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetTodoUseCase(uow).execute(todo_id)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.put("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    command: UpdateTodoCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Partial update; only the fields present in the body change"""
    result = await UpdateTodoUseCase(uow).execute(todo_id, command)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.delete("/{todo_id}", response_model=DeleteTodoResponse)
async def delete_todo(todo_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await DeleteTodoUseCase(uow).execute(todo_id)
    if result.is_err():
        _raise_for(result.error)
    return result.value
