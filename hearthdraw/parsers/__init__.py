from hearthdraw.parsers.deck_code import decode, decode_or_raise, encode, encode_to_bytes
from hearthdraw.parsers.varint import read_varint, write_varint

__all__ = [
    "decode",
    "decode_or_raise",
    "encode",
    "encode_to_bytes",
    "read_varint",
    "write_varint",
]
