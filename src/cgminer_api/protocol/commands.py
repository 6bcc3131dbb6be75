"""Command descriptor, request encoding and the well-known command builders.

Each command is identified by its name and answered under a result key,
usually the upper-cased name (``summary`` -> ``SUMMARY``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from ..errors import EncodeError
from .parser import ESCAPE, split_escaped, unescape

PARAM_SEPARATOR = ","


@dataclass(frozen=True)
class Command:
    """A named cgminer request with optional ordered parameters."""

    name: str
    parameters: tuple[str, ...] = ()
    result_key: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "parameters", tuple(str(p) for p in self.parameters)
        )
        if not self.result_key:
            object.__setattr__(self, "result_key", self.name.upper())

    def joined_parameters(self) -> str:
        """Parameters as a single comma-joined string, commas escaped."""
        return PARAM_SEPARATOR.join(_escape(p) for p in self.parameters)

    def __repr__(self) -> str:
        if not self.parameters:
            return f"Command({self.name!r})"
        return f"Command({self.name!r}, parameters={self.parameters!r})"


def _escape(param: str) -> str:
    return param.replace(ESCAPE, ESCAPE * 2).replace(
        PARAM_SEPARATOR, ESCAPE + PARAM_SEPARATOR
    )


def split_parameters(joined: str) -> list[str]:
    """Split a comma-joined parameter string, honouring backslash escapes."""
    return [unescape(p) for p in split_escaped(joined, PARAM_SEPARATOR)]


def _check_name(command: Command) -> None:
    if not command.name or PARAM_SEPARATOR in command.name:
        raise EncodeError(f"invalid command name {command.name!r}")


def encode_json(command: Command) -> bytes:
    """Encode a command as ``{"command": ..., "parameter": ...}``.

    The ``parameter`` key is omitted for commands without parameters.
    """
    _check_name(command)
    request = {"command": command.name}
    if command.parameters:
        request["parameter"] = command.joined_parameters()
    try:
        return json.dumps(request).encode("utf-8")
    except (TypeError, ValueError, UnicodeEncodeError) as e:
        raise EncodeError(f"cannot encode {command!r}", e) from e


def encode_text(command: Command) -> bytes:
    """Encode a command as ``name`` or ``name,p1,p2``."""
    _check_name(command)
    text = command.name
    if command.parameters:
        text += PARAM_SEPARATOR + command.joined_parameters()
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeError(f"cannot encode {command!r}", e) from e


def parse_request(data: bytes) -> Command:
    """Decode a request the way the cgminer daemon reads it.

    Accepts both the JSON and the plain-text request forms.

    Raises:
        ValueError: If the request is empty or malformed.
    """
    text = data.rstrip(b"\x00").decode("utf-8").strip()
    if not text:
        raise ValueError("empty request")

    if text.startswith("{"):
        request = json.loads(text)
        if not isinstance(request, dict) or not request.get("command"):
            raise ValueError(f"request has no command: {text!r}")
        joined = request.get("parameter")
        params = split_parameters(str(joined)) if joined is not None else []
        return Command(str(request["command"]), tuple(params))

    name, sep, rest = text.partition(PARAM_SEPARATOR)
    params = split_parameters(rest) if sep else []
    return Command(name, tuple(params))


def _pool_index(index: int) -> int:
    if index < 0:
        raise ValueError(f"Pool index must be >= 0, got {index}")
    return index


def summary() -> Command:
    """Summary of the miner's work and hashrate."""
    return Command("summary")


def devs() -> Command:
    """Per-device (ASC/PGA/GPU) statistics."""
    return Command("devs")


def pools() -> Command:
    return Command("pools")


def version() -> Command:
    return Command("version")


def stats() -> Command:
    return Command("stats")


def config() -> Command:
    return Command("config")


def coin() -> Command:
    return Command("coin")


def devdetails() -> Command:
    return Command("devdetails")


def switchpool(index: int) -> Command:
    """Make pool ``index`` the highest priority pool."""
    return Command("switchpool", (str(_pool_index(index)),))


def enablepool(index: int) -> Command:
    return Command("enablepool", (str(_pool_index(index)),))


def disablepool(index: int) -> Command:
    return Command("disablepool", (str(_pool_index(index)),))


def removepool(index: int) -> Command:
    return Command("removepool", (str(_pool_index(index)),))


def addpool(url: str, user: str, password: str) -> Command:
    """Add a pool. Commas in the credentials are escaped on the wire."""
    if not url:
        raise ValueError("Pool URL must not be empty")
    return Command("addpool", (url, user, password))


def restart() -> Command:
    return Command("restart")


def shutdown() -> Command:
    """Ask cgminer to exit (the ``quit`` command)."""
    return Command("quit")
