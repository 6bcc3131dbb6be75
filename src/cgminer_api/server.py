"""MCP server entry point for cgminer rigs.

Exposes the cgminer API client as tools via the Model Context Protocol
using the official Python MCP SDK with stdio transport.

Defaults for the target rig come from the environment::

    CGMINER_HOST       (no default; use the ``configure`` tool otherwise)
    CGMINER_PORT       4028
    CGMINER_TIMEOUT    5.0 seconds
    CGMINER_TRANSPORT  json | text
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import DEFAULT_TIMEOUT, CGMiner
from .context import Context
from .errors import APIError
from .protocol.commands import Command
from .protocol.parser import parse_sections
from .transport import get_transport
from .transport.connection import DEFAULT_PORT, TCPDialer, join_address
from .transport.json_transport import loads_response, status_from_body

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "cgminer",
    instructions="MCP server for querying and controlling cgminer mining rigs",
)

# Global client state
_client: CGMiner | None = None


def build_client(
    host: str,
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
    transport: str = "json",
) -> CGMiner:
    """Build a client for ``host`` with the named transport."""
    return CGMiner(
        address=join_address(host, port),
        timeout=timeout,
        dialer=TCPDialer(timeout=timeout),
        transport=get_transport(transport),
    )


def client_from_env(environ: dict[str, str] | None = None) -> CGMiner | None:
    """Build a client from ``CGMINER_*`` variables, or None without a host."""
    env = os.environ if environ is None else environ
    host = env.get("CGMINER_HOST")
    if not host:
        return None
    return build_client(
        host,
        port=int(env.get("CGMINER_PORT", DEFAULT_PORT)),
        timeout=float(env.get("CGMINER_TIMEOUT", DEFAULT_TIMEOUT)),
        transport=env.get("CGMINER_TRANSPORT", "json"),
    )


def _get_client() -> CGMiner:
    """Get the configured client, raising if no rig is configured."""
    global _client
    if _client is None:
        _client = client_from_env()
    if _client is None:
        raise RuntimeError(
            "No rig configured. Set CGMINER_HOST or use the 'configure' tool first."
        )
    return _client


def _api_error(e: APIError) -> dict[str, Any]:
    return {"error": e.description, "status": e.status, "code": e.code}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def configure(
    host: str,
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
    transport: str = "json",
) -> dict[str, Any]:
    """Point the server at a cgminer rig.

    Args:
        host: Hostname or IP address of the rig.
        port: cgminer API port (default 4028).
        timeout: Per-call timeout in seconds.
        transport: Wire format, "json" (default) or "text".
    """
    global _client
    _client = build_client(host, port, timeout, transport)
    logger.info("Configured %r", _client)
    return {
        "address": _client.address,
        "timeout": _client.timeout,
        "transport": _client.transport.name,
    }


@mcp.tool()
def get_version() -> dict[str, Any]:
    """Retrieve the miner software and API versions."""
    try:
        ver = _get_client().version()
    except APIError as e:
        return _api_error(e)
    if ver is None:
        return {"error": "No version in response"}
    return {**asdict(ver), "software": ver.software}


# ─── MONITORING TOOLS ────────────────────────────────────────────────

@mcp.tool()
def get_summary() -> dict[str, Any]:
    """Retrieve hashrate, share counts and error counters for the rig."""
    try:
        summary = _get_client().summary()
    except APIError as e:
        return _api_error(e)
    if summary is None:
        return {"error": "No summary in response"}
    return {**asdict(summary), "hashrate_ghs": summary.hashrate_ghs}


@mcp.tool()
def list_devices() -> dict[str, Any]:
    """List the rig's mining devices with their status and hashrate."""
    try:
        devices = _get_client().devs()
    except APIError as e:
        return _api_error(e)
    return {
        "count": len(devices),
        "devices": [
            {**asdict(d), "index": d.index, "alive": d.alive} for d in devices
        ],
    }


@mcp.tool()
def list_pools() -> dict[str, Any]:
    """List configured pools in priority order."""
    try:
        pools = _get_client().pools()
    except APIError as e:
        return _api_error(e)
    pools = sorted(pools, key=lambda p: p.priority)
    return {"count": len(pools), "pools": [asdict(p) for p in pools]}


# ─── POOL CONTROL TOOLS ──────────────────────────────────────────────

@mcp.tool()
def switch_pool(index: int) -> dict[str, Any]:
    """Make a pool the highest priority pool.

    Args:
        index: Pool index as reported by list_pools.
    """
    try:
        _get_client().switch_pool(index)
    except APIError as e:
        return _api_error(e)
    return {"success": True, "pool": index}


@mcp.tool()
def enable_pool(index: int) -> dict[str, Any]:
    """Enable a pool.

    Args:
        index: Pool index as reported by list_pools.
    """
    try:
        _get_client().enable_pool(index)
    except APIError as e:
        return _api_error(e)
    return {"success": True, "pool": index}


@mcp.tool()
def disable_pool(index: int) -> dict[str, Any]:
    """Disable a pool.

    Args:
        index: Pool index as reported by list_pools.
    """
    try:
        _get_client().disable_pool(index)
    except APIError as e:
        return _api_error(e)
    return {"success": True, "pool": index}


# ─── RAW ACCESS ──────────────────────────────────────────────────────

@mcp.tool()
def raw_command(command: str, parameters: list[str] | None = None) -> dict[str, Any]:
    """Send any cgminer API command and return the undecoded response.

    The JSON transport response is returned parsed; the text transport
    response is returned as a list of sections.

    Args:
        command: cgminer API command name, e.g. "estats".
        parameters: Optional ordered command parameters.
    """
    client = _get_client()
    cmd = Command(command, tuple(parameters or ()))
    data = client.raw_call(Context.with_timeout(client.timeout), cmd)

    if client.transport.name == "json":
        body = loads_response(data)
        status = status_from_body(body)
        return {"status": status.status, "message": status.message, "response": body}

    sections = parse_sections(data.decode("utf-8", errors="replace"))
    return {
        "sections": [{"tag": s.tag, "fields": s.fields} for s in sections],
    }


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
