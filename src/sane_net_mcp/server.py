"""MCP server entry point for inspecting SANE network daemon replies.

Exposes the reply decoders as tools, plus protocol reference resources,
via the Model Context Protocol using the official Python MCP SDK with
stdio transport. Replies are passed in as hex, typically copied from a
packet capture of a ``saned`` session.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .constants import (
    SANE_DEFAULT_PORT,
    SANE_NET_PROTOCOL_VERSION,
    STRING_ENCODING,
    WORD_BYTE_ORDER,
    WORD_SIZE,
    FrameType,
    Status,
)
from .errors import SaneProtocolError
from .models.device import DeviceRecord
from .protocol.codec import read_string, read_word
from .protocol.parser import build_device_list, read_device_list, read_parameters
from .transport.byte_source import BufferSource

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "sane-net",
    instructions="Decode replies captured from a SANE network scanner daemon",
)


def _source_from_hex(hex_data: str) -> BufferSource:
    """Parse hex text (whitespace allowed) into a buffer source."""
    return BufferSource(bytes.fromhex("".join(hex_data.split())))


def _error(e: Exception) -> dict[str, Any]:
    logger.info("Decode failed: %s", e)
    return {"error": str(e), "kind": type(e).__name__}


# ─── DECODE TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def decode_word(hex_data: str) -> dict[str, Any]:
    """Decode the first 4-byte word of a hex buffer.

    Args:
        hex_data: Hex bytes, e.g. "00 00 00 2a".
    """
    try:
        source = _source_from_hex(hex_data)
        word = read_word(source)
    except (ValueError, SaneProtocolError) as e:
        return _error(e)

    return {
        "value": word.value,
        "unsigned": word.unsigned,
        "fixed": word.fixed,
        "consumed": source.position,
    }


@mcp.tool()
def decode_string(hex_data: str) -> dict[str, Any]:
    """Decode a length-prefixed, NUL-terminated string from a hex buffer."""
    try:
        source = _source_from_hex(hex_data)
        value = read_string(source)
    except (ValueError, SaneProtocolError) as e:
        return _error(e)

    return {"value": value, "consumed": source.position}


@mcp.tool()
def decode_device_list(hex_data: str, session_id: str | None = None) -> dict[str, Any]:
    """Decode a device list reply (reply to SANE_NET_GET_DEVICES).

    Args:
        hex_data: The full reply as hex, starting at the status word.
        session_id: Optional label attached to each decoded device.
    """
    try:
        source = _source_from_hex(hex_data)
        devices = read_device_list(source, session_id)
    except (ValueError, SaneProtocolError) as e:
        return _error(e)

    return {
        "devices": [dict(d.to_dict(), session_id=d.session_id) for d in devices],
        "count": len(devices),
        "consumed": source.position,
        "remaining": source.remaining,
    }


@mcp.tool()
def decode_parameters(hex_data: str) -> dict[str, Any]:
    """Decode a frame parameters reply (six words)."""
    try:
        source = _source_from_hex(hex_data)
        params = read_parameters(source)
    except (ValueError, SaneProtocolError) as e:
        return _error(e)

    result = params.to_dict()
    result["image_size"] = params.image_size
    result["consumed"] = source.position
    return result


@mcp.tool()
def encode_device_list(devices: list[dict[str, str]], status: int = 0) -> dict[str, Any]:
    """Build a device list reply, e.g. to compare against a capture.

    Args:
        devices: Objects with name, vendor, model and type keys.
        status: Status word to place at the front of the reply.
    """
    try:
        records = [
            DeviceRecord(
                name=d.get("name", ""),
                vendor=d.get("vendor", ""),
                model=d.get("model", ""),
                type=d.get("type", ""),
            )
            for d in devices
        ]
        data = build_device_list(records, status=status)
    except ValueError as e:
        return _error(e)

    return {"hex": data.hex(" "), "length": len(data)}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("sane://protocol/info")
def resource_protocol_info() -> str:
    """Network protocol constants."""
    return json.dumps({
        "default_port": SANE_DEFAULT_PORT,
        "protocol_version": SANE_NET_PROTOCOL_VERSION,
        "word_size": WORD_SIZE,
        "byte_order": WORD_BYTE_ORDER,
        "string_encoding": STRING_ENCODING,
    })


@mcp.resource("sane://protocol/status-codes")
def resource_status_codes() -> str:
    """SANE_Status codes that can appear in a reply's status word."""
    codes = [{"code": s.value, "name": s.name} for s in Status]
    return json.dumps({"status_codes": codes})


@mcp.resource("sane://protocol/frame-types")
def resource_frame_types() -> str:
    """SANE_Frame values used in frame parameters."""
    frames = [{"id": f.value, "name": f.name} for f in FrameType]
    return json.dumps({"frame_types": frames})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def analyze_capture(hex_data: str) -> str:
    """Guide the AI through decoding a captured daemon reply.

    Args:
        hex_data: Reply bytes as hex.
    """
    return f"""Decode this SANE network daemon reply:

{hex_data}

Try decode_device_list first, then decode_parameters.
Check "consumed" against the capture length: leftover bytes usually mean
the reply belongs to a different request, or that a previous read on the
connection went out of alignment.
Report each decoded device (name, vendor, model, type) or the frame geometry."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
