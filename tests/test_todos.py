from datetime import datetime

import pytest

from focustimer.errors import InvalidInputError, NotFoundError
from focustimer.models import TodoPriority
from focustimer.services import todos as todo_service


@pytest.fixture
def alice(make_user):
    return make_user("alice")


def test_create_defaults(db, alice):
    todo = todo_service.create_todo(db, "alice", title="Plan week")
    assert todo.priority == TodoPriority.MEDIUM
    assert todo.is_completed is False
    assert todo.completed_at is None


def test_create_rejects_blank_title(db, alice):
    with pytest.raises(InvalidInputError):
        todo_service.create_todo(db, "alice", title="   ")
    with pytest.raises(InvalidInputError):
        todo_service.create_todo(db, "alice", title="x" * 201)


def test_list_is_scoped_and_newest_first(db, alice, make_user):
    make_user("bob")
    first = todo_service.create_todo(db, "alice", title="first")
    second = todo_service.create_todo(db, "alice", title="second")
    todo_service.create_todo(db, "bob", title="not mine")

    assert [t.id for t in todo_service.list_todos(db, "alice")] == [second.id, first.id]


def test_toggle_round_trip(db, alice):
    todo = todo_service.create_todo(db, "alice", title="Read")

    todo_service.toggle_todo(db, "alice", todo.id)
    assert todo.is_completed is True
    assert todo.completed_at is not None

    todo_service.toggle_todo(db, "alice", todo.id)
    assert todo.is_completed is False
    assert todo.completed_at is None


def test_update_only_given_fields(db, alice, make_category):
    study = make_category("Study")
    due = datetime(2030, 1, 1, 9, 0)
    todo = todo_service.create_todo(db, "alice", title="Essay", description="draft")

    todo_service.update_todo(db, "alice", todo.id, priority="high", category_id=study.id, due_date=due)
    assert todo.priority == TodoPriority.HIGH
    assert todo.category_id == study.id
    assert todo.due_date == due
    assert todo.title == "Essay"
    assert todo.description == "draft"


def test_update_completion_keeps_timestamp_in_step(db, alice):
    todo = todo_service.create_todo(db, "alice", title="Essay")
    todo_service.update_todo(db, "alice", todo.id, is_completed=True)
    assert todo.completed_at is not None
    todo_service.update_todo(db, "alice", todo.id, is_completed=False)
    assert todo.completed_at is None


def test_update_rejects_unknown_fields(db, alice):
    todo = todo_service.create_todo(db, "alice", title="Essay")
    with pytest.raises(InvalidInputError):
        todo_service.update_todo(db, "alice", todo.id, owner="bob")


def test_delete(db, alice):
    todo = todo_service.create_todo(db, "alice", title="Essay")
    todo_service.delete_todo(db, "alice", todo.id)
    assert todo_service.list_todos(db, "alice") == []


def test_other_users_todo_is_not_found(db, alice, make_user):
    make_user("bob")
    todo = todo_service.create_todo(db, "alice", title="mine")

    with pytest.raises(NotFoundError):
        todo_service.toggle_todo(db, "bob", todo.id)
    with pytest.raises(NotFoundError):
        todo_service.update_todo(db, "bob", todo.id, title="hijacked")
    with pytest.raises(NotFoundError):
        todo_service.delete_todo(db, "bob", todo.id)

    db.refresh(todo)
    assert todo.title == "mine"
    assert todo.is_completed is False
