"""Two threads incrementing a shared counter, with or without a mutex."""

from __future__ import annotations

import argparse
import re
import sys
import threading
import time
from dataclasses import dataclass
from typing import Optional, Sequence

_THREADS = 2


@dataclass(frozen=True)
class CountResult:
    """Outcome of one counting run."""

    count: int
    expected: int
    elapsed_us: int

    @property
    def ok(self) -> bool:
        return self.count == self.expected

    def report(self) -> str:
        status = "OK" if self.ok else "BOOM!"
        return (
            f"{status} cnt={self.count}\n"
            f"Elapsed time: {self.elapsed_us} microseconds\n"
        )


class _Counter:
    def __init__(self) -> None:
        self.value = 0


def run_counter(niters: int, synchronized: bool) -> CountResult:
    """Run two threads that each add one to a shared counter ``niters`` times.

    With ``synchronized`` every increment is guarded by a binary semaphore.
    """
    counter = _Counter()
    mutex = threading.Semaphore(1)

    def unguarded() -> None:
        for _ in range(niters):
            counter.value += 1

    def guarded() -> None:
        for _ in range(niters):
            with mutex:
                counter.value += 1

    target = guarded if synchronized else unguarded
    start = time.perf_counter_ns()
    threads = [threading.Thread(target=target) for _ in range(_THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    elapsed_us = (time.perf_counter_ns() - start) // 1000
    return CountResult(
        count=counter.value,
        expected=_THREADS * max(niters, 0),
        elapsed_us=elapsed_us,
    )


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Count with two threads and report whether any update was lost."""
    parser = argparse.ArgumentParser(
        prog="counter", description="Increment a shared counter from two threads."
    )
    parser.add_argument("niters", type=_atoi, help="increments per thread")
    parser.add_argument(
        "--mutex", action="store_true", help="guard each increment with a semaphore"
    )
    args = parser.parse_args(argv)
    result = run_counter(args.niters, args.mutex)
    sys.stdout.write(result.report())
    return 0