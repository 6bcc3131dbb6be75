"""Plain-text transport for the legacy, pipe/comma delimited API format."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import DecodeError, ProtocolError
from ..models.status import parse_status
from ..protocol.commands import encode_text
from ..protocol.framing import read_with_null_terminator
from ..protocol.parser import parse_record, parse_status_record, split_sections
from .base import write_request

if TYPE_CHECKING:
    from ..models.base import AbstractResponse
    from ..protocol.commands import Command
    from .connection import Connection

logger = logging.getLogger(__name__)


class TextTransport:
    """Transport for the plain-text API format.

    The request is ``name[,param,...]``; the response is described in
    :mod:`cgminer_api.protocol.parser`.
    """

    name = "text"

    def send_command(self, conn: Connection, cmd: Command) -> None:
        write_request(conn, cmd, encode_text(cmd))

    def decode_response(
        self, conn: Connection, cmd: Command, out: AbstractResponse | None
    ) -> None:
        """Read the response and load every record after the status into ``out``.

        Raises:
            ReadError: If the response could not be read.
            ProtocolError: On an empty response or malformed status record.
            APIError: If cgminer reports an error status.
            DecodeError: If the payload is not text or a value is mistyped.
        """
        data = read_with_null_terminator(conn)
        try:
            payload = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("response", "", data[:64], e) from e

        sections = split_sections(payload)
        if not sections:
            raise ProtocolError("empty response")
        status = parse_status(parse_status_record(parse_record(sections[0])))
        logger.debug("<- %s status %s: %s", cmd.name, status.status, status.message)
        status.raise_for_status()

        if out is None:
            return
        records = [parse_record(section) for section in sections[1:]]
        out.load([r.fields for r in records if r.fields])
