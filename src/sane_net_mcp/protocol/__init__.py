"""Protocol layer: word and string codec, structured reply decoders."""

from .codec import Word, read_word, read_string, encode_word, encode_string
from .parser import (
    ResponseReader,
    read_device_list,
    read_parameters,
    build_device_list,
    build_parameters,
)
