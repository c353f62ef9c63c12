"""
TASKLINE - Errors
=================
Every user-facing failure is a TasklineError subclass. They are all
recoverable: the session reports the message and keeps reading commands.
"""

from typing import List, Optional

HELP_HINT = "Type 'help' or 'help --details' for more information"


class TasklineError(Exception):
    """Base class for recoverable taskline errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TasklineError):
            return type(self) is type(other) and self.message == other.message
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.message))


# ============================================================
# COMMAND ERRORS
# ============================================================

class UnknownCommand(TasklineError):
    """The leading keyword is not a known command"""

    def __init__(self):
        super().__init__(f"Invalid command, {HELP_HINT}")


class MalformedCommand(TasklineError):
    """The keyword is known but the rest of the line has the wrong shape"""

    def __init__(self, formulas: List[str]):
        self.formulas = list(formulas)
        lines = ["Invalid command. Perhaps, you are mentioning one of these below:"]
        lines.extend(f"\t{formula}" for formula in self.formulas)
        lines.append(f"{HELP_HINT} about the valid commands")
        super().__init__("\n".join(lines))


class MissingDescription(TasklineError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"The description of a {kind} cannot be empty.")


class InvalidDescription(TasklineError):
    """Description holds a character that would end a storage record"""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"The description of a {kind} cannot contain line breaks.")


class MissingTimestamp(TasklineError):
    def __init__(self, kind: str, role: str):
        self.kind = kind
        self.role = role
        super().__init__(f"Missing the {role} of the {kind}")


class InvalidTimestampFormat(TasklineError):
    def __init__(self, kind: str, role: str, pattern: str):
        self.kind = kind
        self.role = role
        self.pattern = pattern
        super().__init__(f"Invalid time format of the {kind}'s {role}. It should be {pattern}")


class IndexOutOfRange(TasklineError):
    """Task index outside 1..size (zero and negatives included)"""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Invalid index, task's index should be an int between 1 and {size}")


class AliasError(TasklineError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Alias '{name}' requires one parameter.")


# ============================================================
# STORAGE ERRORS
# ============================================================

class InvalidStorageRecord(TasklineError):
    """A stored line could not be decoded into a task"""

    def __init__(self, record: str, line_number: Optional[int] = None):
        self.record = record
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Invalid source data{where}: {record!r}")


class StorageError(TasklineError):
    """The data file cannot be created, read or written"""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Cannot access data file: {path}{detail}")
