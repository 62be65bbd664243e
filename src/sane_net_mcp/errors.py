"""Exceptions raised while decoding daemon responses."""

from __future__ import annotations


class SaneProtocolError(Exception):
    """Base class for all response decoding failures."""


class TruncatedInputError(SaneProtocolError, EOFError):
    """The stream ended before a decode step had all the bytes it needs.

    Attributes:
        expected: Number of bytes the decode step asked for.
        received: Number of bytes actually available before end of stream.
    """

    def __init__(self, expected: int, received: int, what: str = "input") -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"truncated {what}: expected {expected} bytes, got {received}"
        )


class ProtocolConsistencyError(SaneProtocolError):
    """A value the wire format guarantees to be present is missing or invalid."""
