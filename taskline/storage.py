"""
TASKLINE - Storage
==================
Flat-file persistence for the task list. One storage record per line
(see codec.py), rewritten in full on every save.
"""

import logging
from pathlib import Path
from typing import Union

from .codec import decode_record, encode_task
from .errors import InvalidStorageRecord, StorageError
from .schema import TaskList

logger = logging.getLogger("taskline.storage")

PathLike = Union[str, Path]


class Storage:
    """
    Task file reader/writer

    strict=True aborts a load on the first malformed record; strict=False
    skips such records with a warning.
    """

    def __init__(self, path: PathLike, strict: bool = True):
        self.path = Path(path)
        self.strict = strict

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def load(self) -> TaskList:
        """Read every record; create an empty file first if there is none"""
        self._ensure_file()
        try:
            # records end at "\n" only; other line separators may sit inside a description
            with self.path.open(encoding="utf-8", newline="") as f:
                lines = f.read().split("\n")
        except OSError as e:
            raise StorageError(str(self.path), e.strerror or str(e)) from e

        task_list = TaskList()
        skipped = 0
        for number, raw in enumerate(lines, start=1):
            line = raw[:-1] if raw.endswith("\r") else raw
            if not line.strip():
                continue
            try:
                task_list.add(decode_record(line))
            except InvalidStorageRecord as e:
                if self.strict:
                    raise InvalidStorageRecord(line, line_number=number) from e
                skipped += 1
                logger.warning(f"⚠️ Skipping invalid record at {self.path}:{number}: {line!r}")

        logger.info(f"📂 Loaded {task_list.size} tasks from {self.path}"
                    + (f" ({skipped} skipped)" if skipped else ""))
        return task_list

    def save(self, task_list: TaskList) -> None:
        """Overwrite the file with the whole list"""
        payload = "".join(f"{encode_task(task)}\n" for task in task_list.tasks)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(payload)
        except OSError as e:
            raise StorageError(str(self.path), e.strerror or str(e)) from e

        logger.debug(f"💾 Saved {task_list.size} tasks to {self.path}")

    def set_aside(self) -> Path:
        """Rename the current file to <name>.bak; returns the new path"""
        backup = self.path.with_name(f"{self.path.name}.bak")
        try:
            self.path.replace(backup)
        except OSError as e:
            raise StorageError(str(self.path), e.strerror or str(e)) from e

        logger.warning(f"📦 Moved unreadable data file to {backup}")
        return backup

    # ========================================
    # HELPER METHODS
    # ========================================

    def _ensure_file(self) -> None:
        """Create parent directories and an empty data file if missing"""
        if self.path.is_file():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
        except OSError as e:
            raise StorageError(str(self.path), e.strerror or str(e)) from e
        if not self.path.is_file():
            raise StorageError(str(self.path), "not a regular file")
        logger.info(f"🆕 Created data file: {self.path}")


def load(path: PathLike, strict: bool = True) -> TaskList:
    return Storage(path, strict=strict).load()


def save(path: PathLike, task_list: TaskList) -> None:
    Storage(path).save(task_list)
