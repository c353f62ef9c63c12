"""
TASKLINE - Session
==================
Owns the task list for one run: loads it at startup, feeds each input
line through the parser, executes the command and hands back a Response.

User errors never escape ``handle``; they come back as
``Response(ok=False, error=...)``.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel

from .aliases import AliasExpander, AliasStore
from .commands import CommandResult
from .errors import InvalidStorageRecord, StorageError, TasklineError
from .parser import CommandParser
from .schema import TaskList
from .storage import Storage

logger = logging.getLogger("taskline.session")


class Response(BaseModel):
    """Outcome of one input line"""
    ok: bool
    result: Optional[CommandResult] = None
    error: Optional[str] = None

    @property
    def is_exit(self) -> bool:
        return bool(self.result and self.result.is_exit)


class Session:
    """
    One task list, one storage file, one parser

    A load failure is not fatal: it is logged, kept on ``load_error`` and
    the session starts with an empty list. An unreadable data file is
    renamed to ``<name>.bak`` (``backup_path``) before anything is saved.
    """

    def __init__(self, storage: Storage, parser: Optional[CommandParser] = None):
        self.storage = storage
        self.parser = parser or CommandParser()
        self.load_error: Optional[str] = None
        self.backup_path: Optional[Path] = None
        self.is_exit = False
        self.task_list = self._load()

    @classmethod
    def from_paths(
        cls,
        data_path: Union[str, Path],
        alias_path: Optional[Union[str, Path]] = None,
        strict: bool = True,
    ) -> "Session":
        """Build a session from file locations"""
        expander = None
        if alias_path is not None:
            store = AliasStore(alias_path)
            store.load()
            expander = AliasExpander(store)
        return cls(Storage(data_path, strict=strict), CommandParser(expander))

    # ========================================
    # COMMAND HANDLING
    # ========================================

    def handle(self, line: str) -> Response:
        """Parse and execute one line"""
        try:
            command = self.parser.parse(line)
            result = command.execute(self.task_list, self.storage)
        except TasklineError as e:
            logger.debug(f"Rejected {line!r}: {type(e).__name__}")
            return Response(ok=False, error=e.message)

        if result.is_exit:
            self.is_exit = True
            logger.info(f"👋 Session closed with {self.task_list.size} tasks")
        return Response(ok=True, result=result)

    def close(self) -> Optional[str]:
        """Final save when input ends without 'bye'; returns an error message if it failed"""
        try:
            self.storage.save(self.task_list)
        except StorageError as e:
            logger.error(f"❌ Final save failed: {e.message}")
            return e.message
        return None

    # ========================================
    # HELPER METHODS
    # ========================================

    def _load(self) -> TaskList:
        try:
            return self.storage.load()
        except TasklineError as e:
            logger.error(f"❌ Could not load tasks: {e.message}")
            self.load_error = e.message
            if isinstance(e, InvalidStorageRecord):
                self._set_aside()
            return TaskList()

    def _set_aside(self) -> None:
        try:
            self.backup_path = self.storage.set_aside()
        except StorageError as e:
            logger.error(f"❌ Could not move unreadable data file: {e.message}")
