"""Small helper programs for exercising a job-control shell.

Each takes an argument vector whose first item is the program name and
whose second is a number of seconds, and returns an exit status.
"""

from __future__ import annotations

import os
import re
import signal
import sys
import time
from typing import Optional, Sequence


class UsageError(ValueError):
    """The argument vector does not hold exactly one argument."""


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _args(argv: Optional[Sequence[str]]) -> list[str]:
    return list(sys.argv if argv is None else argv)


def parse_seconds(argv: Sequence[str]) -> int:
    """Return the number of seconds named by ``argv[1]``.

    The number is read as a leading decimal integer; text that does not
    start with one counts as zero. Raises ``UsageError`` unless ``argv``
    holds the program name and exactly one argument.
    """
    if len(argv) != 2:
        name = argv[0] if argv else "prog"
        raise UsageError(f"Usage: {name} <n>")
    return _atoi(argv[1])


def _sleep_seconds(secs: int) -> None:
    for _ in range(secs):
        time.sleep(1)


def _seconds_or_usage(argv: Sequence[str]) -> Optional[int]:
    try:
        return parse_seconds(argv)
    except UsageError as err:
        sys.stderr.write(f"{err}\n")
        return None


def myspin(argv: Optional[Sequence[str]] = None) -> int:
    """Sleep for the given number of seconds in one-second chunks."""
    secs = _seconds_or_usage(_args(argv))
    if secs is not None:
        _sleep_seconds(secs)
    return 0


def myint(argv: Optional[Sequence[str]] = None) -> int:
    """Sleep for the given number of seconds, then send SIGINT to this process."""
    secs = _seconds_or_usage(_args(argv))
    if secs is None:
        return 0
    _sleep_seconds(secs)
    try:
        os.kill(os.getpid(), signal.SIGINT)
    except OSError:
        sys.stderr.write("kill (int) error")
    return 0


def mystop(argv: Optional[Sequence[str]] = None) -> int:
    """Sleep for the given number of seconds, then send SIGTSTP to this
    process's own process group."""
    secs = _seconds_or_usage(_args(argv))
    if secs is None:
        return 0
    _sleep_seconds(secs)
    try:
        os.killpg(os.getpid(), signal.SIGTSTP)
    except OSError:
        sys.stderr.write("kill (tstp) error")
    return 0


def mysplit(argv: Optional[Sequence[str]] = None) -> int:
    """Fork a child that sleeps for the given number of seconds and wait for it."""
    secs = _seconds_or_usage(_args(argv))
    if secs is None:
        return 0
    pid = os.fork()
    if pid == 0:
        try:
            _sleep_seconds(secs)
        finally:
            os._exit(0)
    os.waitpid(pid, 0)
    return 0