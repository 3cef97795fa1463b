"""Job table and command-line parsing for a small job-control shell."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Iterator, Optional, TextIO

MAXLINE = 1024
MAXARGS = 128
MAXJOBS = 16


class JobState(enum.IntEnum):
    """State of a job in the table."""

    UNDEF = 0
    FG = 1
    BG = 2
    ST = 3


_STATE_WORDS = {
    JobState.BG: "Running",
    JobState.FG: "Foreground",
    JobState.ST: "Stopped",
}


@dataclass
class Job:
    """One entry of the job table."""

    pid: int
    jid: int
    state: JobState
    cmdline: str


def _skip_spaces(buf: str, pos: int) -> int:
    while pos < len(buf) and buf[pos] == " ":
        pos += 1
    return pos


def parseline(cmdline: str) -> tuple[list[str], bool]:
    """Split a command line into arguments and tell whether it runs in the background.

    The final character of the line (normally its newline) is dropped.
    Text between single quotes forms one argument; an unterminated quote
    and any text after the last separator are ignored. A blank line
    counts as a background request with no arguments. A last argument
    starting with ``&`` marks a background job and is removed.
    """
    buf = cmdline[:-1] + " " if cmdline else ""
    argv: list[str] = []
    pos = _skip_spaces(buf, 0)
    while True:
        if pos < len(buf) and buf[pos] == "'":
            pos += 1
            delim = buf.find("'", pos)
        else:
            delim = buf.find(" ", pos)
        if delim < 0:
            break
        argv.append(buf[pos:delim])
        pos = _skip_spaces(buf, delim + 1)

    if not argv:
        return argv, True

    bg = argv[-1].startswith("&")
    if bg:
        argv.pop()
    return argv, bg


class JobList:
    """Fixed table of ``MAXJOBS`` job slots with job-ID allocation."""

    def __init__(self, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
        self.verbose = verbose
        self._stream = stream
        self._slots: list[Optional[Job]] = [None] * MAXJOBS
        self._next_jid = 1

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)

    def add(self, pid: int, state: JobState, cmdline: str) -> Optional[Job]:
        """Put a job in the first free slot; return it, or None if not added."""
        if pid < 1:
            return None
        for index, slot in enumerate(self._slots):
            if slot is None:
                job = Job(pid, self._next_jid, JobState(state), cmdline)
                self._slots[index] = job
                self._next_jid += 1
                if self._next_jid > MAXJOBS:
                    self._next_jid = 1
                if self.verbose:
                    self._write(f"Added job [{job.jid}] {job.pid} {job.cmdline}\n")
                return job
        self._write("Tried to create too many jobs\n")
        return None

    def delete(self, pid: int) -> bool:
        """Remove the job with ``pid``; return whether one was removed."""
        if pid < 1:
            return False
        for index, slot in enumerate(self._slots):
            if slot is not None and slot.pid == pid:
                self._slots[index] = None
                self._next_jid = self.max_jid() + 1
                return True
        return False

    def max_jid(self) -> int:
        """Largest job ID in use, or 0."""
        return max((job.jid for job in self), default=0)

    def fg_pid(self) -> int:
        """PID of the foreground job, or 0 if there is none."""
        return next((job.pid for job in self if job.state is JobState.FG), 0)

    def by_pid(self, pid: int) -> Optional[Job]:
        """The job with process ID ``pid``, or None."""
        if pid < 1:
            return None
        return next((job for job in self if job.pid == pid), None)

    def by_jid(self, jid: int) -> Optional[Job]:
        """The job with job ID ``jid``, or None."""
        if jid < 1:
            return None
        return next((job for job in self if job.jid == jid), None)

    def pid_to_jid(self, pid: int) -> int:
        """Job ID of the job with ``pid``, or 0."""
        job = self.by_pid(pid)
        return job.jid if job is not None else 0

    def listing(self) -> str:
        """The job table as printed by the ``jobs`` command."""
        parts = []
        for index, job in enumerate(self._slots):
            if job is None:
                continue
            word = _STATE_WORDS.get(job.state)
            if word is None:
                word = f"listjobs: Internal error: job[{index}].state={int(job.state)}"
            parts.append(f"[{job.jid}] ({job.pid}) {word} {job.cmdline}")
        return "".join(parts)

    def __iter__(self) -> Iterator[Job]:
        return (job for job in self._slots if job is not None)