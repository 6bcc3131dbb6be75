"""Shared fakes: an in-memory connection and a dialer that hands it out."""

import pytest


class FakeConnection:
    """In-memory connection serving a canned response."""

    def __init__(self, response=b"", read_error=None, write_error=None):
        self.response = response
        self.read_error = read_error
        self.write_error = write_error
        self.written = bytearray()
        self.position = 0
        self.deadline = None
        self.deadline_calls = 0
        self.close_calls = 0

    def set_deadline(self, deadline):
        self.deadline = deadline
        self.deadline_calls += 1

    def read(self, size):
        if self.read_error is not None:
            raise self.read_error
        chunk = self.response[self.position : self.position + size]
        self.position += len(chunk)
        return chunk

    def write(self, data):
        if self.write_error is not None:
            raise self.write_error
        self.written += data

    def close(self):
        self.close_calls += 1


class FakeDialer:
    """Dialer returning a fixed connection, or raising a fixed error."""

    def __init__(self, conn=None, error=None):
        self.conn = conn
        self.error = error
        self.calls = []

    def dial_context(self, ctx, network, address):
        self.calls.append((ctx, network, address))
        if self.error is not None:
            raise self.error
        return self.conn

    def dial(self, network, address):
        return self.dial_context(None, network, address)


@pytest.fixture
def make_conn():
    return FakeConnection


@pytest.fixture
def make_dialer():
    return FakeDialer
