"""
Unsigned LEB128 VarInt encoding.

Each byte carries 7 payload bits, least-significant group first. The high bit
is set on every byte except the last.

Example:
    300 -> b"\\xac\\x02"
"""

from hearthdraw.models.errors import VarIntError

_PAYLOAD_MASK = 0x7F
_CONTINUATION = 0x80


def write_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as a VarInt.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"VarInt value must be non-negative, got {value}")

    out = bytearray()
    while value >= _CONTINUATION:
        out.append((value & _PAYLOAD_MASK) | _CONTINUATION)
        value >>= 7
    out.append(value & _PAYLOAD_MASK)
    return bytes(out)


def read_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a VarInt starting at offset.

    Args:
        data: Buffer to read from
        offset: Index of the VarInt's first byte

    Returns:
        Tuple of (value, offset of the next unread byte)

    Raises:
        VarIntError: If the buffer ends before a terminating byte
    """
    result = 0
    shift = 0

    while True:
        if offset >= len(data):
            raise VarIntError(f"VarInt overruns buffer at offset {offset}")
        byte = data[offset]
        offset += 1
        result |= (byte & _PAYLOAD_MASK) << shift
        if not byte & _CONTINUATION:
            return result, offset
        shift += 7
