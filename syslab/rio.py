"""Robust I/O on raw file descriptors: full reads and writes, buffered lines."""

from __future__ import annotations

import os

RIO_BUFSIZE = 8192
MAXLINE = 8192
MAXBUF = 8192


def readn(fd: int, n: int) -> bytes:
    """Read up to ``n`` bytes from ``fd``, stopping early only at end of file.

    Interrupted reads are retried; other failures raise ``OSError``.
    """
    if n < 0:
        raise ValueError("byte count must not be negative")
    chunks: list[bytes] = []
    remaining = n
    while remaining > 0:
        chunk = os.read(fd, remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def writen(fd: int, data: bytes) -> int:
    """Write all of ``data`` to ``fd`` and return the number of bytes written."""
    view = memoryview(data)
    total = len(view)
    while view:
        written = os.write(fd, view)
        if written <= 0:
            raise OSError("write made no progress")
        view = view[written:]
    return total


class RioReader:
    """Buffered reader over a file descriptor.

    Data is pulled from the descriptor in chunks of ``RIO_BUFSIZE`` bytes and
    handed out by :meth:`read` and :meth:`readline`.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._buf = b""
        self._pos = 0

    def _available(self) -> int:
        return len(self._buf) - self._pos

    def _fill(self) -> bool:
        """Refill an empty buffer; return False at end of file."""
        if self._available() > 0:
            return True
        self._buf = os.read(self.fd, RIO_BUFSIZE)
        self._pos = 0
        return bool(self._buf)

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes, stopping early only at end of file."""
        if n < 0:
            raise ValueError("byte count must not be negative")
        out = bytearray()
        while len(out) < n:
            if not self._fill():
                break
            take = min(n - len(out), self._available())
            out += self._buf[self._pos:self._pos + take]
            self._pos += take
        return bytes(out)

    def readline(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line of at most ``maxlen - 1`` bytes, newline included.

        Returns an empty result at end of file.
        """
        limit = maxlen - 1
        out = bytearray()
        while len(out) < limit:
            if not self._fill():
                break
            take = min(limit - len(out), self._available())
            newline = self._buf.find(b"\n", self._pos, self._pos + take)
            if newline >= 0:
                take = newline - self._pos + 1
            out += self._buf[self._pos:self._pos + take]
            self._pos += take
            if newline >= 0:
                break
        return bytes(out)