"""Client library for the cgminer mining daemon TCP API."""

from .client import CGMiner
from .context import Context, ContextCancelled
from .errors import (
    APIError,
    CGMinerError,
    ConnectError,
    DecodeError,
    EncodeError,
    ProtocolError,
    ReadError,
    SendError,
)
from .models import Device, Pool, Response, Status, Summary, Version
from .protocol import Command
from .transport import JSONTransport, TCPDialer, TextTransport
