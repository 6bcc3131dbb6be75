"""Transport contract shared by the JSON and plain-text encodings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from ..errors import SendError

if TYPE_CHECKING:
    from ..models.base import AbstractResponse
    from ..protocol.commands import Command
    from .connection import Connection

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Encodes commands onto and decodes responses from a connection."""

    name: str

    def send_command(self, conn: Connection, cmd: Command) -> None:
        ...

    def decode_response(
        self, conn: Connection, cmd: Command, out: AbstractResponse | None
    ) -> None:
        ...


def write_request(conn: Connection, cmd: Command, payload: bytes) -> None:
    """Write an encoded request, wrapping I/O failures in SendError."""
    logger.debug("-> %s", payload)
    try:
        conn.write(payload)
    except OSError as e:
        raise SendError(f"failed to send {cmd.name!r} command", e) from e
