"""
TASKLINE - Command Aliases
==========================
Shorthands expanded before a line reaches the grammar.

Alias file format (default ``data/.tasklinerc``):

    # taskline command aliases
    alias t='todo {1}'
    alias hw='deadline {1} /by ${sun}'

``{1}`` receives everything after the alias name; ``${sun}`` becomes the
upcoming Sunday (today, if it is Sunday) at 23:59.
"""

import logging
import re
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .errors import AliasError
from .schema import format_machine

logger = logging.getLogger("taskline.aliases")

PLACEHOLDER = "{1}"
MACRO_SUN = "${sun}"

ALIAS_RE = re.compile(r"^alias\s+(?P<name>[^=]+?)\s*=\s*(?P<quote>['\"])(?P<template>.+)(?P=quote)$")


class AliasStore:
    """Alias name -> template mapping backed by an rc file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._templates: Dict[str, str] = {}

    def load(self) -> None:
        """Replace the in-memory aliases with the file's; a missing file means none"""
        self._templates.clear()
        if not self.path.exists():
            return
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Cannot read alias file {self.path}: {e}")
            return

        for line in lines:
            self._parse_line(line)
        logger.debug(f"Loaded {len(self._templates)} aliases from {self.path}")

    def save(self) -> None:
        lines = ["# taskline command aliases"]
        lines.extend(f"alias {name}='{template}'" for name, template in self._templates.items())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def view(self) -> Dict[str, str]:
        return dict(self._templates)

    def get(self, name: str) -> Optional[str]:
        return self._templates.get(name.lower())

    def put(self, name: str, template: str) -> None:
        self._templates[name.lower()] = template

    def remove(self, name: str) -> None:
        self._templates.pop(name.lower(), None)

    def _parse_line(self, line: str) -> None:
        s = line.strip()
        if not s or s.startswith("#"):
            return
        m = ALIAS_RE.match(s)
        if not m:
            logger.debug(f"Ignoring alias line: {line!r}")
            return
        self._templates[m.group("name").lower()] = m.group("template")


class AliasExpander:
    """Expands the leading alias of a command line, if there is one"""

    def __init__(self, store: AliasStore, today: Callable[[], date] = date.today):
        self.store = store
        self._today = today

    def expand(self, line: str) -> str:
        if not line or not line.strip():
            return line

        parts = line.strip().split(" ", 1)
        name = parts[0].lower()
        template = self.store.get(name)
        if template is None:
            return line

        param = parts[1].strip() if len(parts) > 1 else ""
        if PLACEHOLDER in template:
            if not param:
                raise AliasError(name)
            template = template.replace(PLACEHOLDER, param)

        expanded = self._apply_macros(template)
        logger.debug(f"Alias {name!r} expanded to {expanded!r}")
        return expanded

    def _apply_macros(self, text: str) -> str:
        if MACRO_SUN in text:
            text = text.replace(MACRO_SUN, format_machine(self.upcoming_sunday()))
        return text

    def upcoming_sunday(self) -> datetime:
        """Next Sunday 23:59, or today's if today is Sunday"""
        today = self._today()
        sunday = today + timedelta(days=6 - today.weekday())
        return datetime.combine(sunday, time(23, 59))
