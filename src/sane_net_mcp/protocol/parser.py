"""Decoders for structured daemon replies.

Device list reply::

    +--------+-----------+------------------------------------------+----------+
    | Status | Raw count | Elements (raw count - 1 of them)         | Trailing |
    | word   | word      | pointer word + name, vendor, model, type | word     |
    +--------+-----------+------------------------------------------+----------+

- the raw count includes the NULL entry that ends the daemon's array
- when raw count - 1 <= 0 nothing follows the count, not even the trailing word

Frame parameters reply::

    +-------+------------+----------------+-----------------+-------+-------+
    | frame | last frame | bytes per line | pixels per line | lines | depth |
    +-------+------------+----------------+-----------------+-------+-------+

- six words, no optional fields; last frame is true only when the word is 1
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..constants import Status
from ..errors import ProtocolConsistencyError
from ..models.device import DeviceRecord
from ..models.parameters import FrameParameters
from ..transport.byte_source import ByteSource, SourceLike, as_source
from .codec import Word, encode_string, encode_word, read_string, read_word

logger = logging.getLogger(__name__)


def read_pointer(source: SourceLike) -> bool:
    """Read a pointer marker and return True if it is non-null."""
    return read_word(source).value != 0


def read_device(source: SourceLike, session_id: str | None = None) -> DeviceRecord:
    """Read the four strings of one device record."""
    source = as_source(source)
    name = read_string(source)
    vendor = read_string(source)
    model = read_string(source)
    device_type = read_string(source)
    return DeviceRecord(
        name=name,
        vendor=vendor,
        model=model,
        type=device_type,
        session_id=session_id,
    )


def read_device_pointer(
    source: SourceLike,
    session_id: str | None = None,
    skip_null: bool = False,
) -> DeviceRecord | None:
    """Read a pointer marker and the device record it announces.

    The daemon has been observed to send a null marker in front of records
    that are nonetheless present, so by default the record is decoded
    whatever the marker says. With ``skip_null`` a null marker yields None
    and no record bytes are consumed.
    """
    source = as_source(source)
    if not read_pointer(source):
        if skip_null:
            return None
        logger.debug("Null pointer marker before device record, decoding anyway")
    return read_device(source, session_id)


def read_device_list(
    source: SourceLike,
    session_id: str | None = None,
    skip_null: bool = False,
) -> tuple[DeviceRecord, ...]:
    """Decode a device list reply.

    Args:
        source: Bytes, a file-like stream, or a ByteSource.
        session_id: Opaque identifier stamped on every decoded record.
        skip_null: Honour null pointer markers instead of always decoding.

    Returns:
        The devices in wire order. Empty if the logical count is <= 0.

    Raises:
        TruncatedInputError: If the reply ends early.
        ProtocolConsistencyError: If an element turns out to be null.
    """
    source = as_source(source)

    # the status is reported by whoever issued the request
    status = read_word(source).value
    if status != Status.GOOD:
        logger.debug("Device list reply carries status %d", status)

    length = read_word(source).value - 1
    if length <= 0:
        return ()

    devices: list[DeviceRecord] = []
    for index in range(length):
        device = read_device_pointer(source, session_id, skip_null=skip_null)
        if device is None:
            raise ProtocolConsistencyError(
                f"null device pointer at index {index} of {length}"
            )
        devices.append(device)

    # trailing word, value unused
    read_word(source)

    logger.debug("Decoded %d device(s)", len(devices))
    return tuple(devices)


def read_parameters(source: SourceLike) -> FrameParameters:
    """Decode a frame parameters reply (six words)."""
    source = as_source(source)
    frame = read_word(source).value
    last_frame = read_word(source).value == 1
    bytes_per_line = read_word(source).value
    pixels_per_line = read_word(source).value
    lines = read_word(source).value
    depth = read_word(source).value

    return FrameParameters(
        frame_type=frame,
        is_last_frame=last_frame,
        bytes_per_line=bytes_per_line,
        pixels_per_line=pixels_per_line,
        line_count=lines,
        bit_depth=depth,
    )


class ResponseReader:
    """Decodes successive replies from one session's byte source.

    The reader holds the source rather than being one, so the same decoders
    work over sockets, files, and captured buffers.

    Usage::

        reader = ResponseReader(sock.makefile("rb"), session_id="scanner-host")
        devices = reader.read_device_list()
    """

    def __init__(self, source: SourceLike, session_id: str | None = None) -> None:
        self._source: ByteSource = as_source(source)
        self._session_id = session_id

    @property
    def source(self) -> ByteSource:
        return self._source

    @property
    def session_id(self) -> str | None:
        return self._session_id

    def read_word(self) -> Word:
        return read_word(self._source)

    def read_string(self) -> str:
        return read_string(self._source)

    def read_device_list(self) -> tuple[DeviceRecord, ...]:
        return read_device_list(self._source, self._session_id)

    def read_parameters(self) -> FrameParameters:
        return read_parameters(self._source)


# ─── RESPONSE BUILDERS ───────────────────────────────────────────────

def build_device(device: DeviceRecord) -> bytes:
    """Encode the four strings of a device record."""
    return b"".join(
        encode_string(field)
        for field in (device.name, device.vendor, device.model, device.type)
    )


def build_device_list(
    devices: Iterable[DeviceRecord], status: int = Status.GOOD
) -> bytes:
    """Build a device list reply in the shape the daemon sends.

    Each element gets a non-null pointer marker and the list is closed by
    a zero trailing word. An empty list stops after the count word, which
    is all :func:`read_device_list` consumes for it.
    """
    devices = list(devices)
    out = encode_word(status) + encode_word(len(devices) + 1)
    if not devices:
        return out
    for device in devices:
        out += encode_word(1) + build_device(device)
    return out + encode_word(0)


def build_parameters(params: FrameParameters) -> bytes:
    """Build a frame parameters reply."""
    return b"".join(
        encode_word(value)
        for value in (
            params.frame_type,
            1 if params.is_last_frame else 0,
            params.bytes_per_line,
            params.pixels_per_line,
            params.line_count,
            params.bit_depth,
        )
    )
