"""Wire-level constants of the SANE network protocol."""

from __future__ import annotations

from enum import IntEnum

WORD_SIZE = 4
WORD_BYTE_ORDER = "big"
STRING_ENCODING = "latin-1"
STRING_TERMINATOR = b"\x00"

# SANE_Fixed is a 16.16 fixed-point number carried in a word
FIXED_SCALE = 1 << 16

SANE_DEFAULT_PORT = 6566
SANE_NET_PROTOCOL_VERSION = 3

INT32_MIN = -(1 << 31)
UINT32_MAX = (1 << 32) - 1


class Status(IntEnum):
    """SANE_Status codes carried in the status word of a reply."""

    GOOD = 0
    UNSUPPORTED = 1
    CANCELLED = 2
    DEVICE_BUSY = 3
    INVAL = 4
    EOF = 5
    JAMMED = 6
    NO_DOCS = 7
    COVER_OPEN = 8
    IO_ERROR = 9
    NO_MEM = 10
    ACCESS_DENIED = 11


class FrameType(IntEnum):
    """SANE_Frame values describing what one frame of image data holds."""

    GRAY = 0
    RGB = 1
    RED = 2
    GREEN = 3
    BLUE = 4
