"""
TASKLINE - Task / Command Parser
================================
Builds typed tasks and commands from the raw argument strings the
grammar extracts, enforcing:

- a non-empty description without line breaks for every task;
- every required timestamp present;
- every timestamp in dd/MM/yyyy HH:mm form and a real calendar date.

Event start/end ordering is not checked.

Examples:
    parse_task("todo Read book")
    parse_task("deadline Submit report /by 30/08/2025 16:00")
    CommandParser().parse("event Dinner /from 27/08/2025 18:00 /to 27/08/2025 21:00")
"""

import logging
from datetime import datetime
from typing import List, Optional

from .aliases import AliasExpander
from .commands import (
    AddCommand,
    Command,
    DeleteCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    MarkCommand,
)
from .errors import (
    InvalidDescription,
    InvalidTimestampFormat,
    MalformedCommand,
    MissingDescription,
    MissingTimestamp,
    UnknownCommand,
)
from .grammar import TASK_SHAPES, CommandShape, CommandType, classify, extract
from .schema import MACHINE_PATTERN, Deadline, Event, Task, Todo, has_line_break, parse_machine

logger = logging.getLogger("taskline.parser")

DUE_DATE = "due date"
STARTING_TIME = "starting time"
ENDING_TIME = "ending time"


# ============================================================
# TASKS
# ============================================================

def parse_task(line: str) -> Task:
    """Parse a todo/deadline/event line into a task"""
    shape = classify(line)
    if shape not in TASK_SHAPES:
        raise MalformedCommand([c.formula for c in (CommandType.TODO, CommandType.DEADLINE, CommandType.EVENT)])
    return build_task(shape, extract(line, shape))


def build_task(shape: CommandShape, params: List[str]) -> Task:
    """Validate extracted components (keyword first) and construct the task"""
    kind = shape.keyword
    args = params[1:]
    description = args[0] if args else ""
    if not description.strip():
        raise MissingDescription(kind)
    if has_line_break(description):
        raise InvalidDescription(kind)

    if shape is CommandShape.TODO:
        return Todo(description=description)

    if shape is CommandShape.DEADLINE:
        raw_due = _require(args, 1, kind, DUE_DATE)
        due_at = _parse_timestamp(raw_due, kind, DUE_DATE)
        return Deadline(description=description, due_at=due_at)

    if shape is CommandShape.EVENT:
        raw_start = _require(args, 1, kind, STARTING_TIME)
        raw_end = _require(args, 2, kind, ENDING_TIME)
        start = _parse_timestamp(raw_start, kind, STARTING_TIME)
        end = _parse_timestamp(raw_end, kind, ENDING_TIME)
        return Event(description=description, start=start, end=end)

    raise ValueError(f"Unreachable: {shape} is not a task shape")


def _require(args: List[str], position: int, kind: str, role: str) -> str:
    value = args[position].strip() if len(args) > position else ""
    if not value:
        raise MissingTimestamp(kind, role)
    return value


def _parse_timestamp(raw: str, kind: str, role: str) -> datetime:
    try:
        return parse_machine(raw)
    except ValueError:
        raise InvalidTimestampFormat(kind, role, MACHINE_PATTERN) from None


# ============================================================
# COMMANDS
# ============================================================

class CommandParser:
    """
    Turns a full input line into a Command

    Aliases are expanded first when an expander is given.
    """

    def __init__(self, expander: Optional[AliasExpander] = None):
        self.expander = expander

    def parse(self, line: str) -> Command:
        if self.expander is not None:
            line = self.expander.expand(line)

        shape = classify(line)
        params = extract(line, shape)
        logger.debug(f"Parsed {line!r} as {shape.name} {params[1:]}")

        if shape in TASK_SHAPES:
            return AddCommand(task=build_task(shape, params))
        if shape is CommandShape.MARK or shape is CommandShape.UNMARK:
            return MarkCommand(index=_parse_index(params), done=shape is CommandShape.MARK)
        if shape is CommandShape.DELETE:
            return DeleteCommand(index=_parse_index(params))
        if shape is CommandShape.LIST:
            return ListCommand()
        if shape is CommandShape.FIND:
            return FindCommand(query=params[1])
        if shape is CommandShape.HELP:
            return HelpCommand(detailed=params[1] == "--details")
        if shape is CommandShape.BYE:
            return ExitCommand()

        raise ValueError(f"Unreachable: unhandled command shape {shape}")


def _parse_index(params: List[str]) -> int:
    """The grammar only lets digits through; anything else is still a command error"""
    try:
        return int(params[1])
    except (IndexError, ValueError):
        raise UnknownCommand() from None


def parse(line: str) -> Command:
    """Parse without alias expansion"""
    return CommandParser().parse(line)
