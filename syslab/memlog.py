"""Numbered log of memory-management calls."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


def format_pointer(ptr: Optional[int]) -> str:
    """Render an address the way a C ``%p`` conversion does."""
    if not ptr:
        return "(nil)"
    return f"0x{ptr:x}"


_CALL_INDENT = " " * 9
_WARN_INDENT = " " * 4


class MemLog:
    """Writes numbered log lines to a stream (standard error by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self._next_id = 1

    def log(self, message: str) -> int:
        """Write one numbered line; return the number of characters before the newline."""
        stream = self._stream if self._stream is not None else sys.stderr
        prefix = f"[{self._next_id:04d}] "
        self._next_id += 1
        stream.write(f"{prefix}{message}\n")
        return len(prefix) + len(message)

    def start(self) -> None:
        self.log("Memory tracer started.")

    def stop(self) -> None:
        self.log("")
        self.log("Memory tracer stopped.")

    def malloc(self, size: int, res: Optional[int]) -> int:
        return self.log(f"{_CALL_INDENT}malloc( {size} ) = {format_pointer(res)}")

    def calloc(self, nmemb: int, size: int, res: Optional[int]) -> int:
        return self.log(
            f"{_CALL_INDENT}calloc( {nmemb} , {size} ) = {format_pointer(res)}"
        )

    def realloc(self, ptr: Optional[int], size: int, res: Optional[int]) -> int:
        return self.log(
            f"{_CALL_INDENT}realloc( {format_pointer(ptr)} , {size} ) = "
            f"{format_pointer(res)}"
        )

    def free(self, ptr: Optional[int]) -> int:
        return self.log(f"{_CALL_INDENT}free( {format_pointer(ptr)} )")

    def statistics(self, alloc_total: int, alloc_avg: int, free_total: int) -> None:
        self.log("")
        self.log("Statistics")
        self.log(f"  allocated_total      {alloc_total}")
        self.log(f"  allocated_avg        {alloc_avg}")
        self.log(f"  freed_total          {free_total}")

    def nonfreed_start(self) -> None:
        self.log("")
        self.log("Non-deallocated memory blocks")
        self.log(f"  {'block':<16}   {'size':<8}   {'ref cnt':<7}")

    def block(self, ptr: Optional[int], size: int, cnt: int) -> int:
        return self.log(f"  {format_pointer(ptr):<16}   {size:<8}   {cnt:<7}")

    def double_free(self) -> int:
        return self.log(f"{_WARN_INDENT}*** DOUBLE_FREE  *** (ignoring)")

    def illegal_free(self) -> int:
        return self.log(f"{_WARN_INDENT}*** ILLEGAL_FREE *** (ignoring)")