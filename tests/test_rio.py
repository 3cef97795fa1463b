import os

import pytest

from syslab.rio import RIO_BUFSIZE, RioReader, readn, writen


@pytest.fixture
def make_fd(tmp_path):
    opened = []

    def _make(data: bytes) -> int:
        path = tmp_path / f"data{len(opened)}.bin"
        path.write_bytes(data)
        fd = os.open(path, os.O_RDONLY)
        opened.append(fd)
        return fd

    yield _make
    for fd in opened:
        os.close(fd)


def test_writen_readn_round_trip_through_pipe():
    rfd, wfd = os.pipe()
    try:
        payload = b"hello, robust world\n"
        assert writen(wfd, payload) == len(payload)
        os.close(wfd)
        wfd = -1
        assert readn(rfd, len(payload)) == payload
        assert readn(rfd, 10) == b""
    finally:
        os.close(rfd)
        if wfd >= 0:
            os.close(wfd)


def test_readn_short_at_eof(make_fd):
    fd = make_fd(b"abc")
    assert readn(fd, 100) == b"abc"


def test_readn_zero_bytes(make_fd):
    fd = make_fd(b"abc")
    assert readn(fd, 0) == b""
    assert readn(fd, 3) == b"abc"


def test_readn_negative_raises(make_fd):
    fd = make_fd(b"abc")
    with pytest.raises(ValueError):
        readn(fd, -1)


def test_writen_to_file_then_read_back(tmp_path):
    path = tmp_path / "out.bin"
    payload = bytes(range(256)) * 100
    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
    try:
        assert writen(fd, payload) == len(payload)
    finally:
        os.close(fd)
    assert path.read_bytes() == payload


def test_readn_bad_descriptor_raises(tmp_path):
    fd = os.open(tmp_path / "x", os.O_CREAT | os.O_WRONLY, 0o600)
    os.close(fd)
    with pytest.raises(OSError):
        readn(fd, 1)


def test_writen_bad_descriptor_raises(tmp_path):
    fd = os.open(tmp_path / "x", os.O_CREAT | os.O_WRONLY, 0o600)
    os.close(fd)
    with pytest.raises(OSError):
        writen(fd, b"data")


def test_readline_splits_lines(make_fd):
    fd = make_fd(b"first\nsecond\nthird")
    reader = RioReader(fd)
    assert reader.readline() == b"first\n"
    assert reader.readline() == b"second\n"
    assert reader.readline() == b"third"
    assert reader.readline() == b""


def test_readline_respects_maxlen(make_fd):
    fd = make_fd(b"abcdef\n")
    reader = RioReader(fd)
    assert reader.readline(4) == b"abc"
    assert reader.readline(4) == b"def"
    assert reader.readline(4) == b"\n"
    assert reader.readline(4) == b""


def test_readline_maxlen_one_reads_nothing(make_fd):
    fd = make_fd(b"xyz\n")
    reader = RioReader(fd)
    assert reader.readline(1) == b""
    assert reader.readline() == b"xyz\n"


def test_readline_empty_lines(make_fd):
    fd = make_fd(b"\n\nz\n")
    reader = RioReader(fd)
    assert [reader.readline() for _ in range(4)] == [b"\n", b"\n", b"z\n", b""]


def test_readline_across_buffer_boundary(make_fd):
    first = b"a" * (RIO_BUFSIZE - 3) + b"\n"
    second = b"b" * 10 + b"\n"
    fd = make_fd(first + second)
    reader = RioReader(fd)
    assert reader.readline(len(first) + 10) == first
    assert reader.readline() == second


def test_read_mixed_with_readline(make_fd):
    data = b"header line\n" + bytes(range(50))
    fd = make_fd(data)
    reader = RioReader(fd)
    assert reader.readline() == b"header line\n"
    assert reader.read(50) == bytes(range(50))
    assert reader.read(5) == b""


def test_read_large_data_in_pieces(make_fd):
    data = bytes(i % 251 for i in range(3 * RIO_BUFSIZE + 17))
    fd = make_fd(data)
    reader = RioReader(fd)
    pieces = []
    while True:
        piece = reader.read(1000)
        if not piece:
            break
        assert len(piece) <= 1000
        pieces.append(piece)
    assert b"".join(pieces) == data


def test_read_whole_large_file_at_once(make_fd):
    data = os.urandom(2 * RIO_BUFSIZE + 5)
    fd = make_fd(data)
    reader = RioReader(fd)
    assert reader.read(len(data) + 100) == data


def test_read_negative_raises(make_fd):
    fd = make_fd(b"abc")
    with pytest.raises(ValueError):
        RioReader(fd).read(-5)


def test_reader_bad_descriptor_raises(tmp_path):
    fd = os.open(tmp_path / "x", os.O_CREAT | os.O_WRONLY, 0o600)
    os.close(fd)
    with pytest.raises(OSError):
        RioReader(fd).readline()