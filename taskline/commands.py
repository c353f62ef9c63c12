"""
TASKLINE - Commands
===================
Parsed, executable user instructions. Each command runs once against a
TaskList and returns a CommandResult; rendering the result is the
caller's job.

Mutating commands (add, mark/unmark, delete, bye) save the whole list
right away. A failed save does not roll the change back: it is reported
on the result as ``save_error``.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, List, Optional

from pydantic import BaseModel, Field

from .errors import IndexOutOfRange, StorageError
from .grammar import all_commands, all_commands_detailed
from .schema import AnyTask, TaskList

if TYPE_CHECKING:
    from .storage import Storage

logger = logging.getLogger("taskline.commands")


class ResultKind(str, Enum):
    ADDED = "added"
    MARKED = "marked"
    UNMARKED = "unmarked"
    DELETED = "deleted"
    LISTED = "listed"
    FOUND = "found"
    NO_MATCH = "no_match"
    HELP = "help"
    DETAILED_HELP = "detailed_help"
    EXIT = "exit"


class CommandResult(BaseModel):
    """Structured outcome of one command"""
    kind: ResultKind
    tasks: List[str] = Field(default_factory=list)  # renderings, in list order
    size: Optional[int] = None                       # list size after the command
    message: Optional[str] = None                    # help listings
    is_exit: bool = False
    save_error: Optional[str] = None


class Command(BaseModel, ABC):
    """Base class for every command"""
    is_exit: ClassVar[bool] = False

    @abstractmethod
    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        """Run once against task_list; mutating commands save through storage"""


# ========================================
# HELPERS
# ========================================

def _check_index(index: int, task_list: TaskList) -> int:
    """Turn a 1-based user index into a list position"""
    if index < 1 or index > task_list.size:
        raise IndexOutOfRange(task_list.size)
    return index - 1


def _persist(task_list: TaskList, storage: Optional["Storage"]) -> Optional[str]:
    """Save the list; return the error message instead of raising"""
    if storage is None:
        return None
    try:
        storage.save(task_list)
    except StorageError as e:
        logger.error(f"❌ Save failed: {e.message}")
        return e.message
    return None


# ========================================
# MUTATING COMMANDS
# ========================================

class AddCommand(Command):
    task: AnyTask

    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        task_list.add(self.task)
        save_error = _persist(task_list, storage)
        logger.debug(f"Added task #{task_list.size}: {self.task.render()}")
        return CommandResult(
            kind=ResultKind.ADDED,
            tasks=[self.task.render()],
            size=task_list.size,
            save_error=save_error,
        )


class MarkCommand(Command):
    """mark / unmark"""
    index: int
    done: bool = True

    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        position = _check_index(self.index, task_list)
        rendered = task_list.mark(position, self.done)
        save_error = _persist(task_list, storage)
        return CommandResult(
            kind=ResultKind.MARKED if self.done else ResultKind.UNMARKED,
            tasks=[rendered],
            size=task_list.size,
            save_error=save_error,
        )


class DeleteCommand(Command):
    index: int

    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        position = _check_index(self.index, task_list)
        rendered = task_list.delete(position)
        save_error = _persist(task_list, storage)
        logger.debug(f"Deleted task #{self.index}: {rendered}")
        return CommandResult(
            kind=ResultKind.DELETED,
            tasks=[rendered],
            size=task_list.size,
            save_error=save_error,
        )


class ExitCommand(Command):
    is_exit: ClassVar[bool] = True

    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        save_error = _persist(task_list, storage)
        return CommandResult(
            kind=ResultKind.EXIT,
            size=task_list.size,
            is_exit=True,
            save_error=save_error,
        )


# ========================================
# READ-ONLY COMMANDS
# ========================================

class ListCommand(Command):
    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        return CommandResult(
            kind=ResultKind.LISTED,
            tasks=task_list.render_all(),
            size=task_list.size,
        )


class FindCommand(Command):
    """Case-insensitive substring search over descriptions"""
    query: str

    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        matches = task_list.find(self.query)
        return CommandResult(
            kind=ResultKind.FOUND if matches else ResultKind.NO_MATCH,
            tasks=matches,
            size=task_list.size,
        )


class HelpCommand(Command):
    detailed: bool = False

    def execute(self, task_list: TaskList, storage: Optional["Storage"] = None) -> CommandResult:
        if self.detailed:
            return CommandResult(kind=ResultKind.DETAILED_HELP, message=all_commands_detailed())
        return CommandResult(kind=ResultKind.HELP, message=all_commands())
