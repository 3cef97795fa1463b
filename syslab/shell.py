"""A tiny interactive shell with job control."""

from __future__ import annotations

import getopt
import os
import signal
import subprocess
import sys
import time
from typing import Optional, Sequence, TextIO

from syslab.jobs import JobList, JobState, parseline

PROMPT = "tsh> "

_USAGE = (
    "Usage: shell [-hvp]\n"
    "   -h   print this message\n"
    "   -v   print additional diagnostic information\n"
    "   -p   do not emit a command prompt\n"
)

_BLOCKED = {signal.SIGCHLD, signal.SIGINT, signal.SIGTSTP}


class ShellExit(Exception):
    """Raised to leave the shell with the given exit status."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


def _atoi(text: str) -> int:
    text = text.lstrip()
    end = 0
    if text[:1] in ("+", "-"):
        end = 1
    while end < len(text) and text[end].isdigit():
        end += 1
    digits = text[:end]
    try:
        return int(digits)
    except ValueError:
        return 0


def _child_setup() -> None:
    signal.pthread_sigmask(signal.SIG_UNBLOCK, _BLOCKED)
    os.setpgid(0, 0)


class Shell:
    """Reads command lines, runs programs and manages their jobs."""

    def __init__(
        self,
        verbose: bool = False,
        emit_prompt: bool = True,
        out: Optional[TextIO] = None,
        poll_interval: float = 1.0,
    ) -> None:
        self.verbose = verbose
        self.emit_prompt = emit_prompt
        self.out = out
        self.poll_interval = poll_interval
        self.jobs = JobList(verbose=verbose, stream=out)
        self._procs: dict[int, subprocess.Popen] = {}

    def _write(self, text: str) -> None:
        stream = self.out if self.out is not None else sys.stdout
        stream.write(text)

    def _flush(self) -> None:
        stream = self.out if self.out is not None else sys.stdout
        stream.flush()

    def eval(self, cmdline: str) -> None:
        """Run a built-in command at once, or start a program as a job."""
        argv, bg = parseline(cmdline)
        if not argv or self.builtin_cmd(argv):
            return

        program = argv[0]
        executable = program if os.sep in program else os.path.join(os.curdir, program)
        signal.pthread_sigmask(signal.SIG_BLOCK, _BLOCKED)
        try:
            try:
                proc = subprocess.Popen(
                    argv, executable=executable, preexec_fn=_child_setup
                )
            except (OSError, subprocess.SubprocessError):
                self._write(f"{program}: Command not found\n")
                return
            self._procs[proc.pid] = proc
            self.jobs.add(proc.pid, JobState.BG if bg else JobState.FG, cmdline)
        finally:
            signal.pthread_sigmask(signal.SIG_UNBLOCK, _BLOCKED)

        if bg:
            self._write(f"[{self.jobs.pid_to_jid(proc.pid)}] ({proc.pid}) {cmdline}")
        else:
            self.waitfg(proc.pid)

    def builtin_cmd(self, argv: Sequence[str]) -> bool:
        """Execute ``argv`` if it is a built-in command; return whether it was."""
        cmd = argv[0]
        if cmd == "quit":
            raise ShellExit(0)
        if cmd == "jobs":
            self._write(self.jobs.listing())
            return True
        if cmd in ("bg", "fg"):
            self.do_bgfg(argv)
            return True
        return False

    def do_bgfg(self, argv: Sequence[str]) -> None:
        """Resume a job in the background (``bg``) or foreground (``fg``)."""
        cmd = argv[0]
        if len(argv) < 2:
            self._write(f"{cmd} command requires PID or %jobid argument\n")
            return
        ident = argv[1]

        if ident.startswith("%"):
            job = self.jobs.by_jid(_atoi(ident[1:]))
            if job is None:
                self._write(f"{ident}: No such job\n")
                return
        elif ident[:1].isdigit():
            job = self.jobs.by_pid(_atoi(ident))
            if job is None:
                self._write(f"({ident}): No such process\n")
                return
        else:
            self._write(f"{cmd}: argument must be a PID or %jobid\n")
            return

        os.killpg(job.pid, signal.SIGCONT)
        if cmd == "bg":
            job.state = JobState.BG
            self._write(f"[{job.jid}] ({job.pid}) {job.cmdline}")
        else:
            job.state = JobState.FG
            self.waitfg(job.pid)

    def waitfg(self, pid: int) -> None:
        """Block until ``pid`` is no longer the foreground job."""
        while True:
            self.reap_children()
            if pid != self.jobs.fg_pid():
                return
            time.sleep(self.poll_interval)

    def reap_children(self) -> None:
        """Collect every child that has ended or stopped, without blocking."""
        while True:
            try:
                pid, status = os.waitpid(-1, os.WNOHANG | os.WUNTRACED)
            except ChildProcessError:
                return
            if pid <= 0:
                return
            if os.WIFSTOPPED(status):
                job = self.jobs.by_pid(pid)
                if job is None:
                    continue
                job.state = JobState.ST
                self._write(
                    f"Job [{job.jid}] ({pid}) stopped by signal {os.WSTOPSIG(status)}\n"
                )
                continue
            if os.WIFSIGNALED(status):
                self._write(
                    f"Job [{self.jobs.pid_to_jid(pid)}] ({pid}) "
                    f"terminated by signal {os.WTERMSIG(status)}\n"
                )
            elif not os.WIFEXITED(status):
                continue
            self.jobs.delete(pid)
            proc = self._procs.pop(pid, None)
            if proc is not None:
                proc.returncode = os.waitstatus_to_exitcode(status)

    def _forward(self, sig: int) -> None:
        pid = self.jobs.fg_pid()
        if pid > 0:
            os.killpg(pid, sig)

    def sigint_handler(self, sig, frame) -> None:
        """Pass an interrupt on to the foreground job."""
        self._forward(signal.SIGINT)

    def sigtstp_handler(self, sig, frame) -> None:
        """Pass a terminal stop on to the foreground job."""
        self._forward(signal.SIGTSTP)

    def _sigchld_handler(self, sig, frame) -> None:
        self.reap_children()

    def _sigquit_handler(self, sig, frame) -> None:
        self._write("Terminating after receipt of SIGQUIT signal\n")
        raise ShellExit(1)

    def install_handlers(self) -> None:
        """Install the shell's handlers for SIGINT, SIGTSTP, SIGCHLD and SIGQUIT."""
        signal.signal(signal.SIGINT, self.sigint_handler)
        signal.signal(signal.SIGTSTP, self.sigtstp_handler)
        signal.signal(signal.SIGCHLD, self._sigchld_handler)
        signal.signal(signal.SIGQUIT, self._sigquit_handler)

    def run(self, stream: TextIO) -> int:
        """Read and evaluate lines from ``stream`` until end of input or quit."""
        try:
            while True:
                if self.emit_prompt:
                    self._write(PROMPT)
                    self._flush()
                line = stream.readline()
                if not line or not line.endswith("\n"):
                    self._flush()
                    return 0
                self.eval(line)
                self._flush()
        except ShellExit as done:
            self._flush()
            return done.code


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the shell on standard input; options -h, -v and -p."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        opts, _ = getopt.getopt(args, "hvp")
    except getopt.GetoptError:
        sys.stdout.write(_USAGE)
        return 1

    verbose = False
    emit_prompt = True
    for opt, _ in opts:
        if opt == "-h":
            sys.stdout.write(_USAGE)
            return 1
        if opt == "-v":
            verbose = True
        elif opt == "-p":
            emit_prompt = False

    sys.stdout.flush()
    os.dup2(1, 2)
    shell = Shell(verbose=verbose, emit_prompt=emit_prompt)
    shell.install_handlers()
    try:
        return shell.run(sys.stdin)
    except OSError as err:
        sys.stdout.write(f"{err}\n")
        sys.stdout.flush()
        return 1