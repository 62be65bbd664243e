"""Word and string primitives of the SANE network protocol.

Word layout::

    +----------------------------+
    | value (big-endian, signed) |
    | 4 bytes                    |
    +----------------------------+

String layout::

    +--------+--------------------------+------+
    | length | Latin-1 text             | NUL  |
    | word   | length - 1 bytes         | 1 B  |
    +--------+--------------------------+------+

- length counts the terminator; a length of 0 means nothing follows
- the terminator is dropped on decode without being checked
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ProtocolConsistencyError, TruncatedInputError
from ..transport.byte_source import SourceLike, as_source
from ..constants import (
    FIXED_SCALE,
    INT32_MIN,
    STRING_ENCODING,
    STRING_TERMINATOR,
    UINT32_MAX,
    WORD_BYTE_ORDER,
    WORD_SIZE,
)


@dataclass(frozen=True)
class Word:
    """A single protocol word, kept as its 4 raw bytes."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != WORD_SIZE:
            raise ValueError(f"Word must be {WORD_SIZE} bytes, got {len(self.raw)}")

    @classmethod
    def from_bytes(cls, data: bytes) -> Word:
        return cls(raw=bytes(data))

    @classmethod
    def from_int(cls, value: int) -> Word:
        """Build a word from a signed or unsigned 32-bit integer."""
        return cls(raw=encode_word(value))

    @classmethod
    def from_fixed(cls, value: float) -> Word:
        """Build a word holding a SANE_Fixed (16.16) value."""
        return cls.from_int(round(value * FIXED_SCALE))

    @property
    def value(self) -> int:
        """Signed (two's-complement) view."""
        return int.from_bytes(self.raw, WORD_BYTE_ORDER, signed=True)

    @property
    def unsigned(self) -> int:
        return int.from_bytes(self.raw, WORD_BYTE_ORDER, signed=False)

    @property
    def fixed(self) -> float:
        """SANE_Fixed view: the signed value scaled down by 2**16."""
        return self.value / FIXED_SCALE

    def to_bytes(self) -> bytes:
        return self.raw

    def __repr__(self) -> str:
        return f"Word({self.value}, raw={self.raw.hex()})"


def encode_word(value: int) -> bytes:
    """Encode an integer as a 4-byte big-endian word.

    Accepts anything in the signed or unsigned 32-bit range, so both
    ``-1`` and ``0xFFFFFFFF`` encode to ``ff ff ff ff``.
    """
    if not INT32_MIN <= value <= UINT32_MAX:
        raise ValueError(f"Word value out of 32-bit range: {value}")
    return (value & UINT32_MAX).to_bytes(WORD_SIZE, WORD_BYTE_ORDER)


def read_word(source: SourceLike) -> Word:
    """Read exactly one word.

    Raises:
        TruncatedInputError: If fewer than 4 bytes are available.
    """
    return Word.from_bytes(as_source(source).read_exactly(WORD_SIZE))


def encode_string(text: str) -> bytes:
    """Encode text the way the daemon sends it: length word, Latin-1 bytes, NUL.

    The empty string is sent as a lone terminator (length 1).
    """
    body = text.encode(STRING_ENCODING) + STRING_TERMINATOR
    return encode_word(len(body)) + body


def read_string(source: SourceLike) -> str:
    """Read one length-prefixed, NUL-terminated Latin-1 string.

    Raises:
        TruncatedInputError: If the stream ends inside the length or the text.
        ProtocolConsistencyError: If the length word is negative.
    """
    source = as_source(source)
    length = read_word(source).value

    if length == 0:
        return ""
    if length < 0:
        raise ProtocolConsistencyError(f"negative string length {length}")

    try:
        data = source.read_exactly(length)
    except TruncatedInputError as e:
        raise TruncatedInputError(e.expected, e.received, what="string") from e

    # skip the terminator
    return data[:-1].decode(STRING_ENCODING)
