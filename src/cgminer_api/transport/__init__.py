"""Transport layer: connections, dialing and the two wire encodings."""

from .base import Transport
from .connection import Connection, Dialer, SocketConnection, TCPDialer
from .json_transport import JSONTransport
from .text_transport import TextTransport

TRANSPORTS = {
    JSONTransport.name: JSONTransport,
    TextTransport.name: TextTransport,
}


def get_transport(name: str) -> Transport:
    """Instantiate a transport by name (``json`` or ``text``)."""
    try:
        return TRANSPORTS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown transport '{name}'. Valid: {list(TRANSPORTS)}"
        ) from None
