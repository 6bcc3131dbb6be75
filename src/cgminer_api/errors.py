"""Exception hierarchy for cgminer API calls.

Every error keeps the underlying exception (if any) in ``cause`` and as
``__cause__``, so callers can tell a refused connection from a timeout
without parsing messages.
"""

from __future__ import annotations


class CGMinerError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def timed_out(self) -> bool:
        """True if the underlying cause was a deadline or dial timeout."""
        return isinstance(self.cause, TimeoutError)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} ({self.cause})"


class ConnectError(CGMinerError):
    """Dialing the cgminer API endpoint failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__("connect error", cause)


class SendError(CGMinerError):
    """Writing the command to the connection failed."""


class EncodeError(SendError):
    """The command could not be serialized for the wire."""


class ReadError(CGMinerError):
    """The response stream ended or timed out before the null terminator."""


class ProtocolError(CGMinerError):
    """The response is structurally unparseable."""


class APIError(CGMinerError):
    """cgminer answered with an error status for the command."""

    def __init__(self, status: str, code: int | None, message: str) -> None:
        super().__init__(f"cgminer API error {status}/{code}: {message}")
        self.status = status
        self.code = code
        self.description = message


class DecodeError(CGMinerError):
    """A response value does not fit the destination field type."""

    def __init__(
        self,
        field: str,
        key: str,
        value: object,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            f"cannot decode {key!r}={value!r} into field {field!r}", cause
        )
        self.field = field
        self.key = key
        self.value = value
