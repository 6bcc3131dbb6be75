"""Status section model shared by both wire formats."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import APIError, DecodeError, ProtocolError
from .base import decode_record

# Success, Informational, Warning, Error, Fatal
STATUS_SUCCESS = "S"
STATUS_INFO = "I"
STATUS_WARNING = "W"
STATUS_ERROR = "E"
STATUS_FATAL = "F"

ERROR_STATUSES = frozenset({STATUS_ERROR, STATUS_FATAL})


@dataclass
class Status:
    """The mandatory status part of every cgminer response."""

    status: str = field(metadata={"key": "STATUS"})
    message: str = field(metadata={"key": "Msg"})
    code: int | None = field(default=None, metadata={"key": "Code"})
    when: int | None = field(default=None, metadata={"key": "When"})
    description: str = field(default="", metadata={"key": "Description"})

    @property
    def failed(self) -> bool:
        return self.status in ERROR_STATUSES

    def raise_for_status(self) -> None:
        """Raise :class:`APIError` if cgminer reported an error."""
        if self.failed:
            raise APIError(self.status, self.code, self.message)


def parse_status(raw: Mapping[str, Any]) -> Status:
    """Build a :class:`Status` from a raw status object.

    Raises:
        ProtocolError: If required fields are missing or malformed.
    """
    try:
        return decode_record(Status, raw)
    except DecodeError as e:
        raise ProtocolError(f"malformed status section: {e}", e) from e
