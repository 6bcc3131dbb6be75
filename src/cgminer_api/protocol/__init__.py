"""Protocol layer: command descriptors and builders, framing, text parsing."""

from .commands import (
    Command,
    addpool,
    coin,
    config,
    devdetails,
    devs,
    disablepool,
    enablepool,
    encode_json,
    encode_text,
    parse_request,
    pools,
    removepool,
    restart,
    shutdown,
    stats,
    summary,
    switchpool,
    version,
)
from .framing import read_with_null_terminator
