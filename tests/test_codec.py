"""Tests for word and string decoding."""

import pytest

from sane_net_mcp.errors import ProtocolConsistencyError, TruncatedInputError
from sane_net_mcp.protocol.codec import (
    Word,
    encode_string,
    encode_word,
    read_string,
    read_word,
)
from sane_net_mcp.transport.byte_source import BufferSource


def test_read_word_big_endian():
    """Bytes are read most significant first."""
    word = read_word(b"\x00\x00\x01\x02")
    assert word.value == 0x0102


def test_read_word_signed_and_unsigned():
    """All-ones is -1 signed and 0xFFFFFFFF unsigned."""
    word = read_word(b"\xff\xff\xff\xff")
    assert word.value == -1
    assert word.unsigned == 0xFFFFFFFF


def test_read_word_consumes_four_bytes():
    source = BufferSource(b"\x00\x00\x00\x07\x00\x00\x00\x08")
    assert read_word(source).value == 7
    assert source.position == 4
    assert read_word(source).value == 8


@pytest.mark.parametrize(
    "raw",
    [
        b"\x00\x00\x00\x00",
        b"\x7f\xff\xff\xff",
        b"\x80\x00\x00\x00",
        b"\x12\x34\x56\x78",
        b"\xff\xff\xff\xff",
        b"\xff\xff\xff\xfe",
    ],
)
def test_word_reencodes_to_same_bytes(raw):
    """A decoded word encodes back to the bytes it came from."""
    word = read_word(raw)
    assert word.to_bytes() == raw
    assert encode_word(word.value) == raw
    assert encode_word(word.unsigned) == raw


def test_read_word_truncated():
    """Three bytes are not enough for a word."""
    with pytest.raises(TruncatedInputError) as exc:
        read_word(b"\x00\x00\x01")
    assert exc.value.expected == 4
    assert exc.value.received == 3


def test_encode_word_out_of_range():
    with pytest.raises(ValueError):
        encode_word(1 << 32)
    with pytest.raises(ValueError):
        encode_word(-(1 << 31) - 1)


def test_word_fixed_point():
    """SANE_Fixed is 16.16."""
    assert read_word(b"\x00\x01\x80\x00").fixed == 1.5
    assert Word.from_fixed(-2.25).value == -2.25 * 65536


def test_word_from_bytes_copies_input():
    """Words built from a mutable buffer keep their own bytes."""
    buf = bytearray(b"\x00\x00\x00\x2a")
    word = Word.from_bytes(buf)
    buf[3] = 0
    assert word.value == 42
    assert word == read_word(b"\x00\x00\x00\x2a")


def test_word_requires_four_bytes():
    with pytest.raises(ValueError):
        Word(b"\x00\x00")


def test_read_string_zero_length():
    """Length 0 yields an empty string and nothing else is read."""
    source = BufferSource(b"\x00\x00\x00\x00" + b"\xaa")
    assert read_string(source) == ""
    assert source.position == 4


def test_read_string_drops_terminator():
    source = BufferSource(b"\x00\x00\x00\x05abcd\x00")
    assert read_string(source) == "abcd"
    assert source.position == 9
    assert source.remaining == 0


def test_read_string_length_one():
    """A lone terminator is an empty string but still consumes its byte."""
    source = BufferSource(b"\x00\x00\x00\x01\x00")
    assert read_string(source) == ""
    assert source.position == 5


def test_read_string_terminator_not_checked():
    """Whatever the last byte is, it is dropped."""
    assert read_string(b"\x00\x00\x00\x03hiX") == "hi"


def test_read_string_latin1():
    """Bytes above 0x7F map straight to Latin-1 code points."""
    assert read_string(b"\x00\x00\x00\x03\xe9\xfc\x00") == "éü"


def test_read_string_truncated_body():
    with pytest.raises(TruncatedInputError) as exc:
        read_string(b"\x00\x00\x00\x05ab")
    assert exc.value.expected == 5
    assert exc.value.received == 2


def test_read_string_truncated_length():
    with pytest.raises(TruncatedInputError):
        read_string(b"\x00\x00")


def test_read_string_negative_length():
    with pytest.raises(ProtocolConsistencyError):
        read_string(b"\xff\xff\xff\xfe")


def test_encode_string():
    assert encode_string("abcd") == b"\x00\x00\x00\x05abcd\x00"
    assert encode_string("") == b"\x00\x00\x00\x01\x00"


def test_encode_string_rejects_non_latin1():
    with pytest.raises(ValueError):
        encode_string("€")
