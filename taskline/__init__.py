"""
TASKLINE - Line-Oriented Task Manager
=====================================

Short textual commands in, a persisted list of todos, deadlines and
events out.

Usage:
    from taskline import Session

    session = Session.from_paths("data/tasks.txt")
    session.handle("todo Read book")
    session.handle("deadline Submit report /by 30/08/2025 16:00")
    response = session.handle("list")
    print(response.result.tasks)
    # ['[T][ ] Read book', '[D][ ] Submit report (by: 4:00 PM 30 Aug, 2025)']
"""

from .schema import (
    Task,
    TaskKind,
    Todo,
    Deadline,
    Event,
    TaskList,
    MACHINE_PATTERN,
    DISPLAY_PATTERN,
)
from .errors import (
    TasklineError,
    UnknownCommand,
    MalformedCommand,
    MissingDescription,
    InvalidDescription,
    MissingTimestamp,
    InvalidTimestampFormat,
    IndexOutOfRange,
    InvalidStorageRecord,
    StorageError,
    AliasError,
)
from .grammar import CommandShape, CommandType, classify, extract
from .commands import Command, CommandResult, ResultKind
from .parser import CommandParser, parse, parse_task
from .codec import decode_record, encode_record, encode_task
from .storage import Storage
from .session import Response, Session

__version__ = "1.0.0"
__all__ = [
    "Task",
    "TaskKind",
    "Todo",
    "Deadline",
    "Event",
    "TaskList",
    "MACHINE_PATTERN",
    "DISPLAY_PATTERN",
    "TasklineError",
    "UnknownCommand",
    "MalformedCommand",
    "MissingDescription",
    "InvalidDescription",
    "MissingTimestamp",
    "InvalidTimestampFormat",
    "IndexOutOfRange",
    "InvalidStorageRecord",
    "StorageError",
    "AliasError",
    "CommandShape",
    "CommandType",
    "classify",
    "extract",
    "Command",
    "CommandResult",
    "ResultKind",
    "CommandParser",
    "parse",
    "parse_task",
    "decode_record",
    "encode_record",
    "encode_task",
    "Storage",
    "Response",
    "Session",
]
