"""Bookkeeping of allocated memory blocks, ordered by address."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterator, Optional

from syslab.memlog import format_pointer

_by_ptr = attrgetter("ptr")


@dataclass
class Block:
    """An allocated block: its address, size and allocation count."""

    ptr: int
    size: int
    cnt: int = 1


class BlockList:
    """Blocks kept sorted by address, with reference counts."""

    def __init__(self) -> None:
        self._blocks: list[Block] = []

    def _index(self, ptr: int) -> int:
        return bisect_left(self._blocks, ptr, key=_by_ptr)

    def alloc(self, ptr: int, size: int) -> Block:
        """Record an allocation of ``size`` bytes at ``ptr``.

        An existing block at the same address gets the new size and
        its count raised by one.
        """
        index = self._index(ptr)
        if index < len(self._blocks) and self._blocks[index].ptr == ptr:
            block = self._blocks[index]
            block.size = size
            block.cnt += 1
            return block
        block = Block(ptr, size, 1)
        self._blocks.insert(index, block)
        return block

    def dealloc(self, ptr: int) -> Optional[Block]:
        """Lower the count of the block at ``ptr``; None if unknown."""
        block = self.find(ptr)
        if block is not None:
            block.cnt -= 1
        return block

    def find(self, ptr: int) -> Optional[Block]:
        """Return the block at ``ptr``, or None."""
        index = self._index(ptr)
        if index < len(self._blocks) and self._blocks[index].ptr == ptr:
            return self._blocks[index]
        return None

    def dump(self) -> str:
        """Return the list as a human-readable table."""
        lines = [f"  {'block':<16}   {'size':<8}   {'cnt':<3}"]
        lines.extend(
            f"  {format_pointer(block.ptr):<16}   {block.size:<8}   {block.cnt:<3}"
            for block in self._blocks
        )
        return "\n".join(lines) + "\n"

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)