"""Tests for the null-terminated response reader."""

import pytest

from cgminer_api.errors import ReadError
from cgminer_api.protocol.framing import read_with_null_terminator


def test_returns_payload_without_terminator(make_conn):
    """The terminator is stripped from the returned payload."""
    conn = make_conn(b'{"STATUS":[]}\x00')
    assert read_with_null_terminator(conn) == b'{"STATUS":[]}'


def test_never_reads_past_terminator(make_conn):
    """Bytes after the terminator are left unread on the connection."""
    payload = b"STATUS=S,Msg=ok|"
    conn = make_conn(payload + b"\x00" + b"garbage after terminator")
    assert read_with_null_terminator(conn) == payload
    assert conn.position == len(payload) + 1


def test_empty_payload(make_conn):
    """A bare terminator is an empty payload, not an error."""
    assert read_with_null_terminator(make_conn(b"\x00")) == b""


def test_long_response(make_conn):
    """Responses far larger than any socket buffer are read completely."""
    payload = b"x" * 200_000
    assert read_with_null_terminator(make_conn(payload + b"\x00")) == payload


def test_closed_without_terminator(make_conn):
    """A stream that ends early fails and returns no partial payload."""
    conn = make_conn(b"STATUS=S,Msg=partial")
    with pytest.raises(ReadError) as excinfo:
        read_with_null_terminator(conn)
    assert isinstance(excinfo.value.cause, EOFError)
    assert not excinfo.value.timed_out


def test_deadline_exceeded(make_conn):
    """A timeout surfaces as a ReadError that reports timed_out."""
    timeout = TimeoutError("i/o deadline exceeded")
    conn = make_conn(read_error=timeout)
    with pytest.raises(ReadError) as excinfo:
        read_with_null_terminator(conn)
    assert excinfo.value.cause is timeout
    assert excinfo.value.__cause__ is timeout
    assert excinfo.value.timed_out


def test_connection_reset(make_conn):
    """Other socket errors are wrapped as well."""
    conn = make_conn(read_error=ConnectionResetError("reset by peer"))
    with pytest.raises(ReadError) as excinfo:
        read_with_null_terminator(conn)
    assert isinstance(excinfo.value.cause, ConnectionResetError)
