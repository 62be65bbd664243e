"""Byte sources for the response decoders.

A decoder never owns the connection. It is handed something that can
"read exactly N bytes, or fail", and consumes precisely what each field
needs. Two implementations are provided:

- :class:`BufferSource` over bytes already in memory (captures, tests).
- :class:`StreamSource` over any blocking binary file-like object, such as
  ``socket.makefile("rb")`` on a connection opened by the session layer.

Sources are not thread-safe. One source belongs to one session.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Protocol, Union, runtime_checkable

from ..errors import TruncatedInputError

logger = logging.getLogger(__name__)


@runtime_checkable
class ByteSource(Protocol):
    """Anything that can hand out an exact number of bytes."""

    def read_exactly(self, n: int) -> bytes:
        """Return exactly ``n`` bytes or raise :class:`TruncatedInputError`."""
        ...


class BufferSource:
    """Reads from an in-memory buffer, tracking how much has been consumed.

    Usage::

        source = BufferSource(captured_bytes)
        devices = read_device_list(source)
        assert source.remaining == 0
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read_exactly(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"Byte count must be non-negative, got {n}")
        if n > self.remaining:
            raise TruncatedInputError(n, self.remaining)
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def __repr__(self) -> str:
        return f"BufferSource(position={self._pos}, remaining={self.remaining})"


class StreamSource:
    """Reads from a blocking binary stream.

    ``read`` may return fewer bytes than asked for (sockets do), so reads
    are repeated until the request is satisfied. An empty read means the
    peer closed the stream. Errors raised by the stream itself, for example
    after the owning session closed it, propagate unchanged.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._consumed = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._consumed

    def read_exactly(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"Byte count must be non-negative, got {n}")
        buf = bytearray()
        while len(buf) < n:
            chunk = self._stream.read(n - len(buf))
            if not chunk:
                logger.debug("Stream ended after %d of %d bytes", len(buf), n)
                raise TruncatedInputError(n, len(buf))
            buf += chunk
        self._consumed += n
        return bytes(buf)


SourceLike = Union[ByteSource, bytes, bytearray, memoryview, BinaryIO]


def as_source(obj: SourceLike) -> ByteSource:
    """Coerce raw bytes, a file-like stream, or an existing source to a ByteSource."""
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BufferSource(obj)
    if isinstance(obj, ByteSource):
        return obj
    if hasattr(obj, "read"):
        return StreamSource(obj)
    raise TypeError(f"Cannot read SANE data from {type(obj).__name__}")
