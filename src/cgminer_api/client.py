"""cgminer API client.

Every call is one exchange on a fresh connection::

    dial -> set deadline -> send command -> read/decode response -> close

Usage::

    client = CGMiner.new("192.168.1.10", 4028, timeout=5.0)
    out = Response(Summary)
    client.call(summary(), out)
    print(out.first.mhs_av)
"""

from __future__ import annotations

import logging
import time
from contextlib import closing
from typing import TYPE_CHECKING

from . import protocol
from .context import Context
from .errors import ConnectError, SendError
from .models.base import Response
from .models.devices import Device
from .models.pools import Pool
from .models.summary import Summary
from .models.system import Config, Version
from .protocol.framing import read_with_null_terminator
from .transport.connection import DEFAULT_PORT, TCPDialer, join_address
from .transport.json_transport import JSONTransport

if TYPE_CHECKING:
    from .models.base import AbstractResponse
    from .protocol.commands import Command
    from .transport.base import Transport
    from .transport.connection import Connection, Dialer

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class CGMiner:
    """cgminer API client.

    Attributes:
        address: API endpoint as ``host:port``.
        timeout: Seconds allowed for the whole exchange after connecting.
        dialer: Opens connections; must be safe for concurrent use.
        transport: Request encoder and response decoder (JSON by default).
    """

    def __init__(
        self,
        address: str,
        timeout: float,
        dialer: Dialer,
        transport: Transport,
    ) -> None:
        self.address = address
        self.timeout = timeout
        self.dialer = dialer
        self.transport = transport

    @classmethod
    def new(
        cls,
        hostname: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> CGMiner:
        """Client with the JSON transport and a TCP dialer using ``timeout``."""
        return cls(
            address=join_address(hostname, port),
            timeout=timeout,
            dialer=TCPDialer(timeout=timeout),
            transport=JSONTransport(),
        )

    def __repr__(self) -> str:
        return (
            f"CGMiner(address={self.address!r}, timeout={self.timeout}, "
            f"transport={getattr(self.transport, 'name', self.transport)!r})"
        )

    # ─── CORE CALLS ──────────────────────────────────────────────────

    def call(self, cmd: Command, out: AbstractResponse | None = None) -> None:
        """Send ``cmd`` and load its result into ``out``.

        Pass ``out=None`` for commands without a result; the status is still
        checked. See :meth:`call_context` for errors.
        """
        self.call_context(Context.background(), cmd, out)

    def call_context(
        self, ctx: Context, cmd: Command, out: AbstractResponse | None = None
    ) -> None:
        """Like :meth:`call`, with ``ctx`` able to cancel the dial.

        Raises:
            ConnectError: If dialing failed.
            SendError: If the command could not be encoded or written.
            ReadError: If the response was cut short or timed out.
            ProtocolError: If the response is structurally invalid.
            APIError: If cgminer reported an error status.
            DecodeError: If a value does not fit the destination.
        """
        with self._connect(ctx) as conn:
            self._send(conn, cmd)
            self.transport.decode_response(conn, cmd, out)

    def raw_call(self, ctx: Context, cmd: Command) -> bytes:
        """Send ``cmd`` and return the undecoded response payload.

        The status is not checked; use :mod:`cgminer_api.protocol.parser`
        or :func:`cgminer_api.transport.json_transport.loads_response`
        to interpret it.
        """
        with self._connect(ctx) as conn:
            self._send(conn, cmd)
            return read_with_null_terminator(conn)

    def _connect(self, ctx: Context) -> closing:
        try:
            conn = self.dialer.dial_context(ctx, "tcp", self.address)
        except Exception as e:
            logger.debug("Dial %s failed: %s", self.address, e)
            raise ConnectError(e) from e

        try:
            conn.set_deadline(time.monotonic() + self.timeout)
        except OSError as e:
            conn.close()
            logger.debug("Setting deadline on %s failed: %s", self.address, e)
            raise ConnectError(e) from e
        return closing(conn)

    def _send(self, conn: Connection, cmd: Command) -> None:
        logger.debug("Sending %r to %s", cmd, self.address)
        try:
            self.transport.send_command(conn, cmd)
        except SendError:
            raise
        except OSError as e:
            raise SendError(f"failed to send cgminer command {cmd.name!r}", e) from e

    # ─── CONVENIENCE COMMANDS ────────────────────────────────────────

    def _records(self, cmd: Command, record_type):
        out = Response(record_type)
        self.call(cmd, out)
        return out.records

    def summary(self) -> Summary | None:
        records = self._records(protocol.summary(), Summary)
        return records[0] if records else None

    def devs(self) -> list[Device]:
        return self._records(protocol.devs(), Device)

    def pools(self) -> list[Pool]:
        return self._records(protocol.pools(), Pool)

    def version(self) -> Version | None:
        records = self._records(protocol.version(), Version)
        return records[0] if records else None

    def config(self) -> Config | None:
        records = self._records(protocol.config(), Config)
        return records[0] if records else None

    def stats(self) -> list[dict]:
        """Raw ``stats`` records; their keys differ per driver."""
        return self._records(protocol.stats(), dict)

    def switch_pool(self, index: int) -> None:
        self.call(protocol.switchpool(index))

    def enable_pool(self, index: int) -> None:
        self.call(protocol.enablepool(index))

    def disable_pool(self, index: int) -> None:
        self.call(protocol.disablepool(index))

    def remove_pool(self, index: int) -> None:
        self.call(protocol.removepool(index))

    def add_pool(self, url: str, user: str, password: str) -> None:
        self.call(protocol.addpool(url, user, password))

    def restart(self) -> None:
        self.call(protocol.restart())

    def quit(self) -> None:
        self.call(protocol.shutdown())
