"""
Codec for the game client's deck code format.

A deck code is standard Base64 (with padding) over this byte layout,
every integer a VarInt:

    0x00                      reserved
    version                   always 1
    format                    deck format tag
    hero_count, hero...       hero dbfIds
    n1, dbf_id...             cards with one copy, ascending
    n2, dbf_id...             cards with two copies, ascending
    nN, (dbf_id, count)...    cards with more than two copies

Singles and doubles must be sorted for the client to accept the code as
canonical.
"""

import base64
import binascii
import logging
from collections.abc import Iterable

from hearthdraw.config import DECK_CODE_VERSION, DECK_FORMAT_TAG
from hearthdraw.models.deck import DecodedDeck
from hearthdraw.models.errors import (
    DeckCodeError,
    InvalidFormatError,
    UnsupportedVersionError,
)
from hearthdraw.parsers.varint import read_varint, write_varint

logger = logging.getLogger(__name__)

RESERVED_BYTE = 0


class _ByteReader:
    """Sequential VarInt reader over a decoded deck code."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def varint(self) -> int:
        value, self.offset = read_varint(self.data, self.offset)
        return value

    def varint_list(self) -> list[int]:
        """Read a length-prefixed list of VarInts."""
        return [self.varint() for _ in range(self.varint())]


def _partition(
    cards: Iterable[tuple[int, int]],
) -> tuple[list[int], list[int], list[tuple[int, int]]]:
    singles: list[int] = []
    doubles: list[int] = []
    multiples: list[tuple[int, int]] = []

    for dbf_id, count in cards:
        if count <= 0:
            raise ValueError(f"Card {dbf_id} has invalid count {count}")
        if count == 1:
            singles.append(dbf_id)
        elif count == 2:
            doubles.append(dbf_id)
        else:
            multiples.append((dbf_id, count))

    return sorted(singles), sorted(doubles), multiples


def encode_to_bytes(
    hero_dbf_id: int,
    cards: Iterable[tuple[int, int]],
    format_tag: int = DECK_FORMAT_TAG,
) -> bytes:
    """
    Build the raw deck code payload.

    Raises:
        ValueError: If a count is not positive or an id is negative
    """
    singles, doubles, multiples = _partition(cards)

    out = bytearray([RESERVED_BYTE])
    out += write_varint(DECK_CODE_VERSION)
    out += write_varint(format_tag)

    out += write_varint(1)
    out += write_varint(hero_dbf_id)

    out += write_varint(len(singles))
    for dbf_id in singles:
        out += write_varint(dbf_id)

    out += write_varint(len(doubles))
    for dbf_id in doubles:
        out += write_varint(dbf_id)

    out += write_varint(len(multiples))
    for dbf_id, count in multiples:
        out += write_varint(dbf_id)
        out += write_varint(count)

    return bytes(out)


def encode(hero_dbf_id: int, cards: Iterable[tuple[int, int]]) -> str:
    """
    Encode a deck as a deck code string.

    Args:
        hero_dbf_id: Hero dbfId
        cards: (dbf_id, count) pairs

    Returns:
        Base64 deck code, or "" if the deck could not be encoded.
        Callers must check for the empty string.
    """
    try:
        payload = encode_to_bytes(hero_dbf_id, cards)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to encode deck for hero %s: %s", hero_dbf_id, e)
        return ""

    return base64.b64encode(payload).decode("ascii")


def decode_or_raise(code: str) -> DecodedDeck:
    """
    Parse a deck code.

    Raises:
        InvalidFormatError: Not Base64, or missing the reserved zero byte
        UnsupportedVersionError: Version other than 1
        VarIntError: Any read past the end of the payload
    """
    try:
        data = base64.b64decode(code.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidFormatError(f"Deck code is not valid Base64: {e}") from e

    if not data or data[0] != RESERVED_BYTE:
        raise InvalidFormatError("Deck code does not start with the reserved byte")

    reader = _ByteReader(data)
    reader.offset = 1

    version = reader.varint()
    if version != DECK_CODE_VERSION:
        raise UnsupportedVersionError(version)

    format_tag = reader.varint()
    heroes = reader.varint_list()

    cards: list[tuple[int, int]] = [(dbf_id, 1) for dbf_id in reader.varint_list()]
    cards.extend((dbf_id, 2) for dbf_id in reader.varint_list())
    for _ in range(reader.varint()):
        dbf_id = reader.varint()
        cards.append((dbf_id, reader.varint()))

    return DecodedDeck(format_tag=format_tag, heroes=heroes, cards=cards)


def decode(code: str) -> DecodedDeck | None:
    """
    Parse a deck code, returning None if it is invalid.

    Decoding is all-or-nothing: a code that fails anywhere yields None,
    never a partially populated deck.
    """
    try:
        return decode_or_raise(code)
    except DeckCodeError as e:
        logger.info("Rejected deck code: %s", e)
        return None
