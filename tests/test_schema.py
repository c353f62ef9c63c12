# tests/test_schema.py

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from taskline.schema import (
    Deadline,
    Event,
    Task,
    TaskKind,
    TaskList,
    Todo,
    format_display,
    format_machine,
    parse_display,
    parse_machine,
)


def test_todo_renders_kind_status_and_description(todo) -> None:
    assert todo.render() == "[T][ ] Read book"
    todo.set_done(True)
    assert todo.render() == "[T][X] Read book"
    assert str(todo) == "[T][X] Read book"


def test_deadline_renders_due_time_in_display_format(deadline) -> None:
    assert deadline.render() == "[D][ ] report (by: 6:00 PM 30 Dec, 2025)"


def test_event_renders_both_times(event) -> None:
    event.set_done(True)
    assert event.render() == "[E][X] party (from: 7:00 PM 1 Jan, 2026 to: 11:30 PM 1 Jan, 2026)"


def test_event_does_not_require_start_before_end() -> None:
    e = Event(description="odd", start=datetime(2026, 1, 2, 10, 0), end=datetime(2026, 1, 1, 10, 0))
    assert e.start > e.end


def test_kind_codes() -> None:
    assert Todo(description="a").kind is TaskKind.TODO
    assert TaskKind.DEADLINE.value == "D"
    assert TaskKind.EVENT.value == "E"


def test_equality_is_display_string_equality() -> None:
    a = Todo(description="same")
    b = Todo(description="same")
    assert a is not b
    assert a == b
    b.set_done(True)
    assert a != b
    assert Todo(description="x") != Deadline(description="x", due_at=datetime(2025, 1, 1, 0, 0))


def test_description_is_immutable(todo) -> None:
    with pytest.raises(ValidationError):
        todo.description = "something else"


@pytest.mark.parametrize("blank", ["", "   "])
def test_blank_description_rejected(blank: str) -> None:
    with pytest.raises(ValidationError):
        Todo(description=blank)


@pytest.mark.parametrize("description", ["a\nb", "a\rb", "trailing\r"])
def test_description_with_record_terminator_rejected(description: str) -> None:
    with pytest.raises(ValidationError):
        Todo(description=description)


@pytest.mark.parametrize("description", ["a\x85b", "a\u2028b", "a\x0cb", "a\x1cb"])
def test_description_may_hold_other_separators(description: str) -> None:
    assert Todo(description=description).render() == f"[T][ ] {description}"


def test_task_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        Task(description="plain")


# ---- timestamp formats ----

def test_machine_format_parses_and_formats() -> None:
    dt = parse_machine("05/03/2025 09:07")
    assert dt == datetime(2025, 3, 5, 9, 7)
    assert format_machine(dt) == "05/03/2025 09:07"


@pytest.mark.parametrize(
    "text",
    [
        "5/3/2025 09:07",       # unpadded day/month
        "05/03/25 09:07",       # two-digit year
        "2025-03-05 09:07",     # ISO
        "31/02/2025 10:00",     # not a calendar date
        "01/13/2025 10:00",     # month 13
        "01/01/2025 24:00",     # hour 24
        "01/01/2025 10:00 ",    # trailing space
        "３０/12/2025 18:00",   # full-width digits
        "30/12/2025 1\u0668:00",  # Arabic-Indic digit
        "",
    ],
)
def test_machine_format_rejects(text: str) -> None:
    with pytest.raises(ValueError):
        parse_machine(text)


@pytest.mark.parametrize(
    ("dt", "expected"),
    [
        (datetime(2025, 12, 30, 18, 0), "6:00 PM 30 Dec, 2025"),
        (datetime(2025, 8, 30, 16, 0), "4:00 PM 30 Aug, 2025"),
        (datetime(2026, 1, 1, 0, 5), "12:05 AM 1 Jan, 2026"),
        (datetime(2026, 7, 4, 12, 30), "12:30 PM 4 Jul, 2026"),
    ],
)
def test_display_format(dt: datetime, expected: str) -> None:
    assert format_display(dt) == expected
    assert parse_display(expected) == dt


@pytest.mark.parametrize(
    "text",
    ["13:00 PM 1 Jan, 2026", "0:15 AM 1 Jan, 2026", "6:00 pm 1 Jan, 2026", "6:00 PM 1 Foo, 2026", "6:00 PM 30 Feb, 2026", "６:00 PM 1 Jan, 2026"],
)
def test_display_format_rejects(text: str) -> None:
    with pytest.raises(ValueError):
        parse_display(text)


# ---- TaskList ----

def test_task_list_add_mark_delete(task_list) -> None:
    assert len(task_list) == 3
    assert task_list.size == 3

    assert task_list.mark(0, True) == "[T][X] Read book"
    assert task_list.mark(0, False) == "[T][ ] Read book"

    removed = task_list.delete(1)
    assert removed == "[D][ ] report (by: 6:00 PM 30 Dec, 2025)"
    assert task_list.size == 2
    assert task_list.render_all()[1].startswith("[E][ ] party")


def test_task_list_find_is_case_insensitive() -> None:
    tl = TaskList()
    tl.add(Todo(description="Read book"))
    tl.add(Todo(description="READING list"))
    tl.add(Todo(description="write essay"))

    assert tl.find("read") == ["[T][ ] Read book", "[T][ ] READING list"]
    assert tl.find("ESSAY") == ["[T][ ] write essay"]
    assert tl.find("nothing") == []


def test_find_looks_at_description_only(deadline) -> None:
    tl = TaskList()
    tl.add(deadline)
    # "Dec" appears in the rendering but not in the description
    assert tl.find("dec") == []
