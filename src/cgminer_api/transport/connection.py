"""TCP connection and dialer for the cgminer API port.

The client only depends on the :class:`Connection` and :class:`Dialer`
protocols, so tests (or callers with their own networking) can inject
any object with the same methods.
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Protocol

from ..context import Context

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4028
READ_BUFFER_SIZE = 8192


class Connection(Protocol):
    """A byte stream bound to an absolute deadline."""

    def set_deadline(self, deadline: float) -> None:
        """Set the absolute ``time.monotonic()`` deadline for all I/O."""

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; ``b""`` means the peer closed."""

    def write(self, data: bytes) -> None:
        """Write all of ``data``."""

    def close(self) -> None:
        ...


class Dialer(Protocol):
    """Opens connections to ``host:port`` addresses."""

    def dial_context(self, ctx: Context, network: str, address: str) -> Connection:
        ...

    def dial(self, network: str, address: str) -> Connection:
        ...


def split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6]:port``) into its parts.

    Raises:
        ValueError: If the port is missing or not a number.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"missing port in address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


def join_address(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class SocketConnection:
    """A connected TCP socket with deadline semantics.

    Each read and write gets the time left until the deadline as its socket
    timeout, so the deadline bounds the whole exchange rather than each
    individual operation. Reads are buffered, which lets the framing reader
    consume the response one byte at a time cheaply.
    """

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._deadline: float | None = None
        self._buffer = bytearray()
        self._closed = False

    def set_deadline(self, deadline: float) -> None:
        self._deadline = deadline

    def _apply_deadline(self) -> None:
        if self._deadline is None:
            self._sock.settimeout(None)
            return
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError("i/o deadline exceeded")
        self._sock.settimeout(remaining)

    def read(self, size: int) -> bytes:
        if not self._buffer:
            self._apply_deadline()
            chunk = self._sock.recv(max(size, READ_BUFFER_SIZE))
            if not chunk:
                return b""
            self._buffer += chunk
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def write(self, data: bytes) -> None:
        self._apply_deadline()
        self._sock.sendall(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing connection: %s", e)

    def __enter__(self) -> SocketConnection:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class TCPDialer:
    """Dials TCP connections with a connect timeout.

    Usage::

        dialer = TCPDialer(timeout=5.0)
        conn = dialer.dial("tcp", "192.168.1.10:4028")
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def dial_context(self, ctx: Context, network: str, address: str) -> Connection:
        """Open a connection, honouring ``ctx`` cancellation and deadline.

        Raises:
            ContextCancelled: If ``ctx`` was cancelled before dialing.
            TimeoutError: If ``ctx`` expired or the connect timed out.
            OSError: For resolution and connection failures.
        """
        if network not in ("tcp", "tcp4", "tcp6"):
            raise ValueError(f"unsupported network {network!r}")
        ctx.check()

        host, port = split_address(address)
        timeout = self.timeout
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)

        logger.debug("Dialing %s (timeout=%s)", address, timeout)
        sock = socket.create_connection((host, port), timeout=timeout)
        return SocketConnection(sock)

    def dial(self, network: str, address: str) -> Connection:
        return self.dial_context(Context.background(), network, address)
