"""Byte sources the protocol decoders read from."""

from .byte_source import ByteSource, BufferSource, StreamSource, as_source
