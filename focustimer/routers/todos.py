"""
Todos: per-user CRUD plus completion toggle.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlmodel import Session

from focustimer.db import get_session
from focustimer.models import TodoPriority
from focustimer.routers.identity import require_user_id
from focustimer.schemas import TodoRead
from focustimer.services import todos as todo_service

router = APIRouter(prefix="/api", tags=["todos"])


class CreateTodoRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: TodoPriority = TodoPriority.MEDIUM
    due_date: Optional[datetime] = None


class UpdateTodoRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: Optional[TodoPriority] = None
    due_date: Optional[datetime] = None
    is_completed: Optional[bool] = None


@router.get("/todos", response_model=List[TodoRead])
def list_todos(
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """The caller's todos, newest first."""
    return [TodoRead.model_validate(t) for t in todo_service.list_todos(db, user_id)]


@router.post("/todos", response_model=TodoRead, status_code=201)
def create_todo(
    req: CreateTodoRequest,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    todo = todo_service.create_todo(db, user_id, **req.model_dump())
    return TodoRead.model_validate(todo)


@router.patch("/todos/{todo_id}", response_model=TodoRead)
def update_todo(
    todo_id: int,
    req: UpdateTodoRequest,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Update only the fields present in the body."""
    todo = todo_service.update_todo(db, user_id, todo_id, **req.model_dump(exclude_unset=True))
    return TodoRead.model_validate(todo)


@router.delete("/todos/{todo_id}", status_code=204)
def delete_todo(
    todo_id: int,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    todo_service.delete_todo(db, user_id, todo_id)
    return Response(status_code=204)


@router.post("/todos/{todo_id}/toggle", response_model=TodoRead)
def toggle_todo(
    todo_id: int,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Flip completion; completed_at is set or cleared with it."""
    return TodoRead.model_validate(todo_service.toggle_todo(db, user_id, todo_id))
