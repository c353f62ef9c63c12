#!/usr/bin/env python3
"""
TASKLINE - CLI Interface
========================
Interactive line-oriented task manager.

Usage:
    taskline                                  Start the interactive prompt
    taskline -f ~/tasks.txt                   Use another data file
    taskline -c "todo Read book" -c list      Run commands and exit
    taskline --lenient                        Skip unreadable records instead of refusing to load
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .commands import CommandResult, ResultKind
from .session import Response, Session

ENV_PREFIX = "TASKLINE"
DEFAULT_DATA_FILE = Path("data") / "tasks.txt"
DEFAULT_ALIAS_FILE = Path("data") / ".tasklinerc"

GREETING = "Hello from taskline, what can I do for you?"
FAREWELL = "Bye. Hope to see you again soon!"
ERROR_PREFIX = "OOPS!!! "

logger = logging.getLogger("taskline.cli")


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(f"{ENV_PREFIX}_{name}")
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def setup_logging(verbosity: int = 0) -> None:
    """WARNING by default, -v for INFO, -vv for DEBUG"""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ============================================================
# RENDERING
# ============================================================

def _count_line(size: Optional[int]) -> str:
    n = size or 0
    return f"Now you have {n} {'task' if n == 1 else 'tasks'} in the list."


def _numbered(tasks: List[str]) -> List[str]:
    return [f"\t{i}.{task}" for i, task in enumerate(tasks, start=1)]


def render_result(result: CommandResult) -> str:
    """Turn a command result into the text shown to the user"""
    kind = result.kind
    if kind == ResultKind.ADDED:
        lines = ["Got it. I've added this task:", f"\t{result.tasks[0]}", _count_line(result.size)]
    elif kind == ResultKind.MARKED:
        lines = ["Nice! I've marked this task as done:", f"\t{result.tasks[0]}"]
    elif kind == ResultKind.UNMARKED:
        lines = ["Ok! I've marked this task as not done yet:", f"\t{result.tasks[0]}"]
    elif kind == ResultKind.DELETED:
        lines = ["Noted. I've removed this task:", f"\t{result.tasks[0]}", _count_line(result.size)]
    elif kind == ResultKind.LISTED:
        if not result.tasks:
            lines = ["(no tasks yet)"]
        else:
            lines = ["Here are the tasks in your list:"] + _numbered(result.tasks)
    elif kind == ResultKind.FOUND:
        lines = ["Here are the matching tasks in your list:"] + _numbered(result.tasks)
    elif kind == ResultKind.NO_MATCH:
        lines = ["Oops! There isn't any task match your search"]
    elif kind == ResultKind.HELP:
        lines = ["The command must start with one of these below:", result.message or ""]
    elif kind == ResultKind.DETAILED_HELP:
        lines = ["The command must have the formula as one of these below:", result.message or ""]
    elif kind == ResultKind.EXIT:
        lines = [FAREWELL]
    else:
        raise ValueError(f"Unreachable: unknown result kind {kind}")

    if result.save_error:
        lines.append(f"{ERROR_PREFIX}{result.save_error}")
    return "\n".join(lines).rstrip()


def render_response(response: Response) -> str:
    if not response.ok:
        return f"{ERROR_PREFIX}{response.error}"
    assert response.result is not None
    return render_result(response.result)


# ============================================================
# DRIVERS
# ============================================================

def _report_load(session: Session, stdout: TextIO) -> None:
    if session.load_error:
        print(f"{ERROR_PREFIX}{session.load_error}", file=stdout)
    if session.backup_path:
        print(f"Starting with an empty list. The unreadable file was kept as {session.backup_path}", file=stdout)


def run_repl(session: Session, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    """Read lines until 'bye' or end of input"""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    print(GREETING, file=stdout)
    _report_load(session, stdout)

    for raw in stdin:
        response = session.handle(raw.rstrip("\r\n"))
        print(render_response(response), file=stdout)
        stdout.flush()
        if session.is_exit:
            return 0

    # end of input without 'bye'
    error = session.close()
    if error:
        print(f"{ERROR_PREFIX}{error}", file=stdout)
        return 1
    print(FAREWELL, file=stdout)
    return 0


def run_commands(session: Session, lines: List[str], stdout: Optional[TextIO] = None) -> int:
    """Run each line once; exit status 1 if any of them failed"""
    stdout = stdout or sys.stdout
    _report_load(session, stdout)

    status = 0
    for line in lines:
        response = session.handle(line)
        print(render_response(response), file=stdout)
        if not response.ok or (response.result and response.result.save_error):
            status = 1
        if session.is_exit:
            break
    return status


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="taskline",
        description="taskline - line-oriented task manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands (at the prompt or with -c):
  todo Read book
  deadline Submit report /by 30/08/2025 16:00
  event Team dinner /from 27/08/2025 18:00 /to 27/08/2025 21:00
  mark 2 | unmark 2 | delete 2
  list | find book | help | help --details | bye

Environment:
  TASKLINE_FILE      default data file
  TASKLINE_ALIASES   default alias file
        """
    )
    parser.add_argument(
        "-f", "--file",
        type=Path,
        default=_env_path("FILE", DEFAULT_DATA_FILE),
        help="Path to the tasks file (default: %(default)s)",
    )
    parser.add_argument(
        "--aliases",
        type=Path,
        default=_env_path("ALIASES", DEFAULT_ALIAS_FILE),
        help="Path to the alias file (default: %(default)s)",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip unreadable records when loading instead of starting empty",
    )
    parser.add_argument(
        "-c", "--command",
        dest="commands",
        action="append",
        default=[],
        help="Run a command and exit (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    session = Session.from_paths(args.file, alias_path=args.aliases, strict=not args.lenient)
    logger.info(f"Using data file {args.file}")

    if args.commands:
        return run_commands(session, args.commands)
    return run_repl(session)


if __name__ == "__main__":
    sys.exit(main())
