# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from taskline.schema import Deadline, Event, TaskList, Todo
from taskline.session import Session
from taskline.storage import Storage


@pytest.fixture()
def data_path(tmp_path: Path) -> Path:
    """Data file inside a directory that does not exist yet."""
    return tmp_path / "data" / "tasks.txt"


@pytest.fixture()
def storage(data_path: Path) -> Storage:
    return Storage(data_path)


@pytest.fixture()
def todo() -> Todo:
    return Todo(description="Read book")


@pytest.fixture()
def deadline() -> Deadline:
    return Deadline(description="report", due_at=datetime(2025, 12, 30, 18, 0))


@pytest.fixture()
def event() -> Event:
    return Event(
        description="party",
        start=datetime(2026, 1, 1, 19, 0),
        end=datetime(2026, 1, 1, 23, 30),
    )


@pytest.fixture()
def task_list(todo: Todo, deadline: Deadline, event: Event) -> TaskList:
    tl = TaskList()
    for task in (todo, deadline, event):
        tl.add(task)
    return tl


@pytest.fixture()
def session(storage: Storage) -> Session:
    return Session(storage)
