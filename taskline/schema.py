"""
TASKLINE - Task Schema Definition
=================================
Task variants (todo, deadline, event), the ordered TaskList that owns
them, and the two timestamp formats tasks are written in.

Display string grammar (load-bearing, the codec parses it back):

    [T][ ] Read book
    [D][X] report (by: 6:00 PM 30 Dec, 2025)
    [E][ ] party (from: 7:00 PM 1 Jan, 2026 to: 11:30 PM 1 Jan, 2026)
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import List, Literal, Union

from pydantic import BaseModel, Field, field_validator


class TaskKind(str, Enum):
    """Task variants, valued by their one-letter type code"""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


# ============================================================
# TIMESTAMP FORMATS
# ============================================================

# Command input and storage, e.g. 30/12/2025 18:00
MACHINE_PATTERN = "dd/MM/yyyy HH:mm"
# Human-facing rendering, e.g. 6:00 PM 30 Dec, 2025
DISPLAY_PATTERN = "h:mm a d MMM, yyyy"

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_MACHINE_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4}) (\d{2}):(\d{2})", re.ASCII)
_DISPLAY_RE = re.compile(
    r"(\d{1,2}):(\d{2}) (AM|PM) (\d{1,2}) ([A-Z][a-z]{2}), (\d{4})",
    re.ASCII,
)

# Record terminators in the data file
LINE_BREAKS = ("\n", "\r")


def has_line_break(text: str) -> bool:
    return any(ch in text for ch in LINE_BREAKS)


def parse_machine(text: str) -> datetime:
    """Parse a dd/MM/yyyy HH:mm timestamp.

    Every field must have its full width; out-of-range values (31/02,
    24:00, ...) raise ValueError.
    """
    m = _MACHINE_RE.fullmatch(text)
    if not m:
        raise ValueError(f"{text!r} does not match {MACHINE_PATTERN}")
    day, month, year, hour, minute = (int(g) for g in m.groups())
    return datetime(year, month, day, hour, minute)


def format_machine(value: datetime) -> str:
    return (
        f"{value.day:02d}/{value.month:02d}/{value.year:04d} "
        f"{value.hour:02d}:{value.minute:02d}"
    )


def parse_display(text: str) -> datetime:
    """Parse an h:mm a d MMM, yyyy timestamp (English, locale independent)."""
    m = _DISPLAY_RE.fullmatch(text)
    if not m:
        raise ValueError(f"{text!r} does not match {DISPLAY_PATTERN}")
    hour12, minute, meridiem, day, month_name, year = m.groups()
    hour12 = int(hour12)
    if not 1 <= hour12 <= 12:
        raise ValueError(f"{text!r} has an invalid clock hour")
    if month_name not in MONTHS:
        raise ValueError(f"{text!r} has an unknown month")
    hour = hour12 % 12 + (12 if meridiem == "PM" else 0)
    return datetime(int(year), MONTHS.index(month_name) + 1, int(day), hour, int(minute))


def format_display(value: datetime) -> str:
    hour12 = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{hour12}:{value.minute:02d} {meridiem} "
        f"{value.day} {MONTHS[value.month - 1]}, {value.year:04d}"
    )


# ============================================================
# TASKS
# ============================================================

class Task(BaseModel, ABC):
    """Common part of every task: description plus completion flag.

    Two tasks are equal when their display strings are equal.
    """
    description: str = Field(frozen=True)
    is_done: bool = False

    @field_validator("description")
    @classmethod
    def _valid_description(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description cannot be empty")
        if has_line_break(value):
            raise ValueError("description cannot contain line breaks")
        return value

    def set_done(self, done: bool) -> None:
        self.is_done = done

    def _status(self) -> str:
        return f"[{'X' if self.is_done else ' '}] {self.description}"

    @abstractmethod
    def render(self) -> str:
        """Display string, e.g. [T][ ] Read book"""

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Task):
            return self.render() == other.render()
        return NotImplemented


class Todo(Task):
    kind: Literal[TaskKind.TODO] = TaskKind.TODO

    def render(self) -> str:
        return f"[{self.kind.value}]{self._status()}"


class Deadline(Task):
    kind: Literal[TaskKind.DEADLINE] = TaskKind.DEADLINE
    due_at: datetime

    def render(self) -> str:
        return f"[{self.kind.value}]{self._status()} (by: {format_display(self.due_at)})"


class Event(Task):
    """Time-bounded task. start <= end is not checked."""
    kind: Literal[TaskKind.EVENT] = TaskKind.EVENT
    start: datetime
    end: datetime

    def render(self) -> str:
        return (
            f"[{self.kind.value}]{self._status()} "
            f"(from: {format_display(self.start)} to: {format_display(self.end)})"
        )


# tagged by the Literal kind field of each variant
AnyTask = Union[Todo, Deadline, Event]


class TaskList(BaseModel):
    """Ordered task list, 0-based here, 1-based for the user"""
    tasks: List[AnyTask] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tasks)

    @property
    def size(self) -> int:
        return len(self.tasks)

    def add(self, task: Task) -> None:
        self.tasks.append(task)

    def delete(self, index: int) -> str:
        """Remove the task at index; return its rendering"""
        return self.tasks.pop(index).render()

    def mark(self, index: int, done: bool) -> str:
        """Set the completion flag at index; return the new rendering"""
        task = self.tasks[index]
        task.set_done(done)
        return task.render()

    def render_all(self) -> List[str]:
        return [task.render() for task in self.tasks]

    def find(self, query: str) -> List[str]:
        """Renderings of tasks whose description contains query (any case)"""
        needle = query.lower()
        return [t.render() for t in self.tasks if needle in t.description.lower()]
