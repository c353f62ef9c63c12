# tests/test_session.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskline.commands import ResultKind
from taskline.session import Session
from taskline.storage import Storage


def test_end_to_end_scenario(session: Session, data_path: Path) -> None:
    assert session.handle("todo buy milk").ok
    assert session.handle("deadline report /by 30/12/2025 18:00").ok

    listed = session.handle("list").result
    assert listed is not None
    assert [f"{i}.{t}" for i, t in enumerate(listed.tasks, start=1)] == [
        "1.[T][ ] buy milk",
        "2.[D][ ] report (by: 6:00 PM 30 Dec, 2025)",
    ]

    assert session.handle("mark 1").ok
    deleted = session.handle("delete 2").result
    assert deleted is not None and deleted.size == 1

    listed = session.handle("list").result
    assert listed is not None
    assert listed.tasks == ["[T][X] buy milk"]
    assert data_path.read_text(encoding="utf-8") == "T | 1 | buy milk\n"


def test_todo_renders_exactly(session: Session) -> None:
    response = session.handle("todo Read book")
    assert response.result is not None
    assert response.result.tasks == ["[T][ ] Read book"]
    assert session.task_list.render_all() == ["[T][ ] Read book"]


def test_errors_come_back_as_responses(session: Session) -> None:
    unknown = session.handle("dance")
    assert not unknown.ok
    assert unknown.error is not None and unknown.error.startswith("Invalid command, ")

    malformed = session.handle("mark")
    assert not malformed.ok
    assert malformed.error is not None and "mark {id}" in malformed.error

    out_of_range = session.handle("delete 1")
    assert not out_of_range.ok
    assert out_of_range.error == "Invalid index, task's index should be an int between 1 and 0"

    assert session.task_list.size == 0
    assert not session.is_exit


def test_find_no_match_is_distinct(session: Session) -> None:
    session.handle("todo Read book")
    session.handle("todo READING list")
    found = session.handle("find read").result
    assert found is not None and found.kind is ResultKind.FOUND
    assert len(found.tasks) == 2

    missing = session.handle("find zebra").result
    assert missing is not None and missing.kind is ResultKind.NO_MATCH


def test_bye_saves_and_sets_exit(session: Session, data_path: Path) -> None:
    session.handle("todo a")
    data_path.write_text("", encoding="utf-8")

    response = session.handle("bye")
    assert response.is_exit
    assert session.is_exit
    assert data_path.read_text(encoding="utf-8") == "T | 0 | a\n"


def test_state_survives_restart(data_path: Path) -> None:
    first = Session(Storage(data_path))
    first.handle("event party /from 01/01/2026 19:00 /to 01/01/2026 23:30")
    first.handle("mark 1")

    second = Session(Storage(data_path))
    assert second.task_list.render_all() == [
        "[E][X] party (from: 7:00 PM 1 Jan, 2026 to: 11:30 PM 1 Jan, 2026)"
    ]


def test_corrupt_file_starts_empty(data_path: Path) -> None:
    data_path.parent.mkdir(parents=True)
    data_path.write_text("D | 1 | iP\n", encoding="utf-8")

    session = Session(Storage(data_path))
    assert session.task_list.size == 0
    assert session.load_error is not None and "Invalid source data" in session.load_error
    assert session.handle("list").ok


def test_lenient_session_keeps_good_records(data_path: Path) -> None:
    data_path.parent.mkdir(parents=True)
    data_path.write_text("D | 1 | iP\nT | 0 | fine\n", encoding="utf-8")

    session = Session.from_paths(data_path, strict=False)
    assert session.load_error is None
    assert session.task_list.render_all() == ["[T][ ] fine"]


def test_from_paths_with_aliases(tmp_path: Path) -> None:
    rc = tmp_path / ".tasklinerc"
    rc.write_text("alias t='todo {1}'\n", encoding="utf-8")

    session = Session.from_paths(tmp_path / "tasks.txt", alias_path=rc)
    assert session.handle("t buy milk").ok
    assert session.task_list.render_all() == ["[T][ ] buy milk"]

    bad = session.handle("t")
    assert not bad.ok
    assert bad.error == "Alias 't' requires one parameter."


def test_close_saves(session: Session, data_path: Path) -> None:
    session.handle("todo a")
    data_path.unlink()
    assert session.close() is None
    assert data_path.read_text(encoding="utf-8") == "T | 0 | a\n"


@pytest.mark.parametrize("separator", ["\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
def test_restart_keeps_descriptions_with_unicode_separators(data_path: Path, separator: str) -> None:
    first = Session(Storage(data_path))
    first.handle("todo keep me")
    assert first.handle(f"todo foo{separator}bar").ok

    second = Session(Storage(data_path))
    assert second.load_error is None
    assert second.task_list.render_all() == ["[T][ ] keep me", f"[T][ ] foo{separator}bar"]


def test_carriage_return_in_description_is_refused(data_path: Path) -> None:
    first = Session(Storage(data_path))
    first.handle("todo keep me")

    response = first.handle("todo foo\rbar")
    assert not response.ok
    assert response.error == "The description of a todo cannot contain line breaks."

    second = Session(Storage(data_path))
    assert second.task_list.render_all() == ["[T][ ] keep me"]


def test_unreadable_file_is_set_aside_before_saving(data_path: Path) -> None:
    data_path.parent.mkdir(parents=True)
    data_path.write_text("T | 0 | old\nD | 1 | iP\n", encoding="utf-8")

    session = Session(Storage(data_path))
    backup = data_path.with_name("tasks.txt.bak")
    assert session.backup_path == backup

    session.handle("todo new")
    assert data_path.read_text(encoding="utf-8") == "T | 0 | new\n"
    assert backup.read_text(encoding="utf-8") == "T | 0 | old\nD | 1 | iP\n"
