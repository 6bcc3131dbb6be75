"""Null-terminated response framing.

cgminer ends every response with a single ``0x00`` byte instead of a
length header::

    +--------------------------------+------+
    | payload (JSON or plain text)   | 0x00 |
    | arbitrary length               |      |
    +--------------------------------+------+

The reader scans for the terminator one byte at a time so it never
consumes anything that follows it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import ReadError

if TYPE_CHECKING:
    from ..transport.connection import Connection

logger = logging.getLogger(__name__)

TERMINATOR = b"\x00"


def read_with_null_terminator(conn: Connection) -> bytes:
    """Read from ``conn`` up to (not including) the first null byte.

    Args:
        conn: A connection whose deadline is already set.

    Returns:
        Every byte received before the terminator.

    Raises:
        ReadError: If the stream closes or the deadline passes before the
            terminator arrives. Partially read bytes are discarded.
    """
    buf = bytearray()
    while True:
        try:
            chunk = conn.read(1)
        except OSError as e:
            raise ReadError(
                f"failed to read response after {len(buf)} bytes", e
            ) from e

        if not chunk:
            raise ReadError(
                f"connection closed after {len(buf)} bytes without terminator",
                EOFError("unexpected end of stream"),
            )
        if chunk == TERMINATOR:
            break
        buf += chunk

    logger.debug("Read %d byte response", len(buf))
    return bytes(buf)
