import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from focustimer import clock
from focustimer.errors import InvalidInputError, NotFoundError
from focustimer.models import Category, Todo, TodoPriority

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
UPDATABLE_FIELDS = ("title", "description", "category_id", "priority", "due_date", "is_completed")


def _clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise InvalidInputError("Title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise InvalidInputError(f"Title is too long (max {MAX_TITLE_LENGTH} characters)")
    return title


def _check_category(db: Session, category_id: Optional[int]) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise NotFoundError("Category not found")


def _set_completed(todo: Todo, is_completed: bool) -> None:
    # is_completed and completed_at always move together
    todo.is_completed = is_completed
    todo.completed_at = clock.now() if is_completed else None


def get_owned_todo(db: Session, user_id: str, todo_id: int) -> Todo:
    todo = db.exec(select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id)).one_or_none()
    if not todo:
        raise NotFoundError("Todo not found")
    return todo


def list_todos(db: Session, user_id: str) -> List[Todo]:
    """All of the caller's todos, newest first."""
    statement = (
        select(Todo)
        .where(Todo.user_id == user_id)
        .order_by(Todo.created_at.desc(), Todo.id.desc())
    )
    return db.exec(statement).all()


def create_todo(
    db: Session,
    user_id: str,
    title: str,
    description: Optional[str] = None,
    category_id: Optional[int] = None,
    priority: TodoPriority = TodoPriority.MEDIUM,
    due_date: Optional[datetime] = None,
) -> Todo:
    _check_category(db, category_id)
    todo = Todo(
        user_id=user_id,
        title=_clean_title(title),
        description=description,
        category_id=category_id,
        priority=TodoPriority(priority),
        due_date=due_date,
        created_at=clock.now(),
    )
    db.add(todo)
    db.commit()
    db.refresh(todo)
    logger.info("User %s created todo %s", user_id, todo.id)
    return todo


def update_todo(db: Session, user_id: str, todo_id: int, **changes) -> Todo:
    """Apply only the given fields. Completing stamps completed_at, un-completing clears it."""
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidInputError(f"Cannot update fields: {sorted(unknown)}")

    todo = get_owned_todo(db, user_id, todo_id)
    if "title" in changes:
        changes["title"] = _clean_title(changes["title"])
    if "priority" in changes:
        if changes["priority"] is None:
            raise InvalidInputError("Priority cannot be null")
        changes["priority"] = TodoPriority(changes["priority"])
    if "category_id" in changes:
        _check_category(db, changes["category_id"])
    if "is_completed" in changes:
        is_completed = bool(changes.pop("is_completed"))
        if is_completed != todo.is_completed:
            _set_completed(todo, is_completed)

    for field, value in changes.items():
        setattr(todo, field, value)
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


def delete_todo(db: Session, user_id: str, todo_id: int) -> None:
    todo = get_owned_todo(db, user_id, todo_id)
    db.delete(todo)
    db.commit()
    logger.info("User %s deleted todo %s", user_id, todo_id)


def toggle_todo(db: Session, user_id: str, todo_id: int) -> Todo:
    todo = get_owned_todo(db, user_id, todo_id)
    _set_completed(todo, not todo.is_completed)
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo
