"""JSON transport: the default cgminer API encoding.

Request::

    {"command": "switchpool", "parameter": "1"}

Response (null terminated)::

    {"STATUS": [{"STATUS": "S", "Code": 11, "Msg": "Summary", ...}],
     "SUMMARY": [{"Elapsed": 3600, "MHS av": 13500.0, ...}],
     "id": 1}
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from ..errors import DecodeError, ProtocolError
from ..models.status import Status, parse_status
from ..protocol.commands import encode_json
from ..protocol.framing import read_with_null_terminator
from .base import write_request

if TYPE_CHECKING:
    from ..models.base import AbstractResponse
    from ..protocol.commands import Command
    from .connection import Connection

logger = logging.getLogger(__name__)

STATUS_KEY = "STATUS"

# Some bmminer builds emit adjacent objects without a comma: [{...}{...}]
_MISSING_COMMA = re.compile(r"\}\s*\{")


def loads_response(data: bytes) -> dict[str, Any]:
    """Parse a JSON response body into its top-level object.

    Raises:
        DecodeError: If the body is not valid JSON.
        ProtocolError: If the body is valid JSON but not an object.
    """
    try:
        text = data.decode("utf-8").strip().rstrip("\x00")
    except UnicodeDecodeError as e:
        raise DecodeError("response", "", data[:64], e) from e

    try:
        body = json.loads(text)
    except json.JSONDecodeError as first_error:
        try:
            body = json.loads(_MISSING_COMMA.sub("},{", text))
        except json.JSONDecodeError:
            raise DecodeError("response", "", text[:64], first_error) from first_error
        logger.debug("Repaired missing commas in JSON response")

    if not isinstance(body, dict):
        raise ProtocolError(f"expected JSON object, got {type(body).__name__}")
    return body


def status_from_body(body: dict[str, Any]) -> Status:
    """Extract and validate the status section of a response object.

    Raises:
        ProtocolError: If the section is missing or malformed.
    """
    section = body.get(STATUS_KEY)
    if isinstance(section, list):
        section = section[0] if section else None
    if not isinstance(section, dict):
        raise ProtocolError("missing status section")
    return parse_status(section)


class JSONTransport:
    """Transport for the JSON API format."""

    name = "json"

    def send_command(self, conn: Connection, cmd: Command) -> None:
        write_request(conn, cmd, encode_json(cmd))

    def decode_response(
        self, conn: Connection, cmd: Command, out: AbstractResponse | None
    ) -> None:
        """Read the response and load the ``cmd.result_key`` section into ``out``.

        ``out`` is left untouched if cgminer reports an error or the
        response has no section for the command.

        Raises:
            ReadError: If the response could not be read.
            ProtocolError: If the status section is missing.
            APIError: If cgminer reports an error status.
            DecodeError: On malformed JSON or mistyped values.
        """
        body = loads_response(read_with_null_terminator(conn))
        status = status_from_body(body)
        logger.debug("<- %s status %s: %s", cmd.name, status.status, status.message)
        status.raise_for_status()

        if out is None:
            return

        section = body.get(cmd.result_key)
        if section is None:
            return
        if isinstance(section, dict):
            section = [section]
        if not isinstance(section, list):
            raise DecodeError(cmd.result_key, cmd.result_key, section)
        out.load(section)
