"""
TASKLINE - Record Codec
=======================
Converts between a task, its display string and its storage record.

Storage record layout (one line per task, fields joined by " | "):

    T | <0|1> | <description>
    D | <0|1> | <description> | <dd/MM/yyyy HH:mm>
    E | <0|1> | <description> | <dd/MM/yyyy HH:mm> | <dd/MM/yyyy HH:mm>

For every valid task t:

    decode_record(encode_record(t.render())).render() == t.render()
"""

import logging
from typing import List

from pydantic import ValidationError

from .errors import InvalidStorageRecord
from .schema import (
    Deadline,
    Event,
    Task,
    TaskKind,
    Todo,
    format_machine,
    parse_display,
    parse_machine,
)

logger = logging.getLogger("taskline.codec")

SEPARATOR = " | "

# Display string offsets: "[T][X] description..."
_TYPE_OFFSET = 1
_MARK_OFFSET = 4
_CONTENT_OFFSET = 7

_BY_MARKER = " (by: "
_FROM_MARKER = " (from: "
_TO_MARKER = " to: "


# ============================================================
# DECODE
# ============================================================

def decode_record(line: str) -> Task:
    """Decode one storage record.

    Any malformed record (wrong field count, bad done flag, bad timestamp,
    unknown type code, blank description) raises InvalidStorageRecord; the
    record is never partially recovered.
    """
    fields = line.split(SEPARATOR, 2)
    if len(fields) != 3:
        raise InvalidStorageRecord(line)

    code, flag, rest = fields
    if flag not in ("0", "1"):
        raise InvalidStorageRecord(line)

    try:
        if code == TaskKind.TODO.value:
            task: Task = Todo(description=rest)
        elif code == TaskKind.DEADLINE.value:
            # descriptions may themselves contain " | "; timestamps never do
            parts = rest.rsplit(SEPARATOR, 1)
            if len(parts) != 2:
                raise InvalidStorageRecord(line)
            task = Deadline(description=parts[0], due_at=parse_machine(parts[1]))
        elif code == TaskKind.EVENT.value:
            parts = rest.rsplit(SEPARATOR, 2)
            if len(parts) != 3:
                raise InvalidStorageRecord(line)
            task = Event(
                description=parts[0],
                start=parse_machine(parts[1]),
                end=parse_machine(parts[2]),
            )
        else:
            raise InvalidStorageRecord(line)
    except (ValidationError, ValueError) as e:
        raise InvalidStorageRecord(line) from e

    task.set_done(flag == "1")
    return task


# ============================================================
# ENCODE
# ============================================================

def encode_record(display: str) -> str:
    """Encode a display string (as produced by Task.render) into a record.

    Raises ValueError when the string does not follow the display layout;
    for a rendered task that cannot happen.
    """
    if (
        len(display) < _CONTENT_OFFSET
        or display[0] != "["
        or display[2:4] != "]["
        or display[5:_CONTENT_OFFSET] != "] "
    ):
        raise ValueError(f"Not a task display string: {display!r}")

    code = display[_TYPE_OFFSET]
    marked = display[_MARK_OFFSET] == "X"
    content = display[_CONTENT_OFFSET:]

    if code == TaskKind.TODO.value:
        fields = [content]
    elif code == TaskKind.DEADLINE.value:
        description, marker, tail = content.rpartition(_BY_MARKER)
        if not marker or not tail.endswith(")"):
            raise ValueError(f"Malformed deadline display string: {display!r}")
        fields = [description, _reformat(tail[:-1])]
    elif code == TaskKind.EVENT.value:
        description, marker, tail = content.rpartition(_FROM_MARKER)
        if not marker or not tail.endswith(")"):
            raise ValueError(f"Malformed event display string: {display!r}")
        start, marker, end = tail[:-1].partition(_TO_MARKER)
        if not marker:
            raise ValueError(f"Malformed event display string: {display!r}")
        fields = [description, _reformat(start), _reformat(end)]
    else:
        raise ValueError(f"Unknown task type {code!r} in {display!r}")

    return SEPARATOR.join([code, "1" if marked else "0"] + fields)


def encode_task(task: Task) -> str:
    """Encode straight from the structured task; same output as encode_record"""
    fields: List[str] = [task.kind.value, "1" if task.is_done else "0", task.description]
    if isinstance(task, Deadline):
        fields.append(format_machine(task.due_at))
    elif isinstance(task, Event):
        fields.extend([format_machine(task.start), format_machine(task.end)])
    elif not isinstance(task, Todo):
        raise ValueError(f"Unsupported task type: {type(task).__name__}")
    return SEPARATOR.join(fields)


def _reformat(display_time: str) -> str:
    """Display timestamp -> storage timestamp"""
    return format_machine(parse_display(display_time))
