"""
TASKLINE - Command Grammar
==========================
Recognises which command a raw line is, in two steps:

1. the leading keyword picks the candidate shapes;
2. the first candidate whose pattern matches the *whole* line wins.

A known keyword with no matching shape is a MalformedCommand (the error
lists the expected formulas); an unknown keyword is an UnknownCommand.
"""

import re
from enum import Enum
from typing import List

from .errors import MalformedCommand, UnknownCommand


class CommandType(Enum):
    """User-visible command types with their usage formula and an example"""
    TODO = ("todo", "todo {description}", "todo Do the laundry")
    DEADLINE = ("deadline",
                "deadline {description} /by {datetime}",
                "deadline Submit report /by 30/08/2025 16:00")
    EVENT = ("event",
             "event {description} /from {datetime} /to {datetime}",
             "event Team dinner /from 27/08/2025 18:00 /to 27/08/2025 21:00")
    MARK = ("mark", "mark {id}", "mark 2")
    UNMARK = ("unmark", "unmark {id}", "unmark 3")
    LIST = ("list", "list", "list")
    DELETE = ("delete", "delete {id}", "delete 2")
    FIND = ("find", "find {description}", "find book")
    BYE = ("bye", "bye", "bye")
    HELP = ("help", "help", "help")
    DETAILED_HELP = ("help --details", "help --details", "help --details")

    def __init__(self, usage: str, formula: str, example: str):
        self.usage = usage
        self.formula = formula
        self.example = example

    @property
    def keyword(self) -> str:
        return self.usage.split(" ", 1)[0]

    @classmethod
    def for_keyword(cls, keyword: str) -> List["CommandType"]:
        return [c for c in cls if c.keyword == keyword]


class CommandShape(Enum):
    """Full-line patterns; several shapes may share a keyword"""
    TODO = ("todo", re.compile(r"todo (.*)"))
    DEADLINE = ("deadline", re.compile(r"deadline (.*) /by (.*)"))
    EVENT = ("event", re.compile(r"event (.*) /from (.*) /to (.*)"))
    MARK = ("mark", re.compile(r"mark ([0-9]+)"))
    UNMARK = ("unmark", re.compile(r"unmark ([0-9]+)"))
    LIST = ("list", re.compile(r"list"))
    DELETE = ("delete", re.compile(r"delete ([0-9]+)"))
    FIND = ("find", re.compile(r"find (.*)"))
    HELP = ("help", re.compile(r"help( --details|)"))
    BYE = ("bye", re.compile(r"bye"))

    def __init__(self, keyword: str, pattern: "re.Pattern[str]"):
        self.keyword = keyword
        self.pattern = pattern

    def matches(self, line: str) -> bool:
        return self.pattern.fullmatch(line) is not None


TASK_SHAPES = (CommandShape.TODO, CommandShape.DEADLINE, CommandShape.EVENT)


def keyword_of(line: str) -> str:
    return line.split(" ", 1)[0]


def classify(line: str) -> CommandShape:
    """Return the shape of line or raise UnknownCommand / MalformedCommand"""
    keyword = keyword_of(line)
    candidates = [s for s in CommandShape if s.keyword == keyword]
    if not candidates:
        raise UnknownCommand()

    for shape in candidates:
        if shape.matches(line):
            return shape

    raise MalformedCommand([c.formula for c in CommandType.for_keyword(keyword)])


def extract(line: str, shape: CommandShape) -> List[str]:
    """Keyword followed by the trimmed captured groups.

    Empty groups stay as "". When line does not match, only the keyword
    comes back.
    """
    components = [shape.keyword]
    m = shape.pattern.fullmatch(line)
    if m:
        components.extend((group or "").strip() for group in m.groups())
    return components


# ============================================================
# HELP LISTINGS
# ============================================================

def all_commands() -> str:
    """One tab-indented command per line"""
    return "".join(f"\t{c.usage}\n" for c in CommandType)


def all_commands_detailed() -> str:
    """Every formula followed by an example line"""
    return "".join(
        f"\t{c.formula}\n\t\te.g.: {c.example}\n\n" for c in CommandType
    )
