"""Tests for the deck code codec."""

import base64

import pytest

from hearthdraw.models.errors import (
    InvalidFormatError,
    UnsupportedVersionError,
    VarIntError,
)
from hearthdraw.parsers.deck_code import decode, decode_or_raise, encode, encode_to_bytes


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class TestEncode:
    def test_layout_of_mixed_deck(self) -> None:
        """Singles, doubles and N-copy cards land in their own sections."""
        code = encode(637, [(1001, 1), (1002, 2), (1003, 3)])

        assert base64.b64decode(code) == bytes(
            [
                0x00,  # reserved
                0x01,  # version
                0x02,  # format
                0x01, 0xFD, 0x04,  # one hero: 637
                0x01, 0xE9, 0x07,  # singles: 1001
                0x01, 0xEA, 0x07,  # doubles: 1002
                0x01, 0xEB, 0x07, 0x03,  # N-cards: 1003 x3
            ]
        )  # fmt: skip

    def test_empty_deck_code(self) -> None:
        """A hero with no cards encodes to the canonical padded string."""
        assert encode(7, []) == "AAECAQcAAAA="

    def test_singles_and_doubles_sorted(self) -> None:
        """Singles and doubles are written in ascending dbfId order."""
        payload = encode_to_bytes(7, [(300, 1), (5, 2), (200, 1), (1, 2), (100, 1)])

        decoded = decode(_b64(payload))

        assert decoded is not None
        assert decoded.cards == [(100, 1), (200, 1), (300, 1), (1, 2), (5, 2)]

    def test_multiples_keep_input_order(self) -> None:
        """N-copy cards are written in the order given."""
        decoded = decode(encode(7, [(900, 4), (10, 3), (500, 5)]))

        assert decoded is not None
        assert decoded.cards == [(900, 4), (10, 3), (500, 5)]

    def test_standard_base64_alphabet(self) -> None:
        """Codes use the standard alphabet with padding, not the URL-safe one."""
        code = encode(2**20, [(2**20 + 1, 1)])

        assert base64.b64decode(code, validate=True)
        assert "-" not in code and "_" not in code
        assert len(code) % 4 == 0

    @pytest.mark.parametrize("count", [0, -1])
    def test_invalid_count_returns_empty(self, count: int) -> None:
        """Non-positive counts fail encoding with an empty result."""
        assert encode(637, [(1001, 1), (1002, count)]) == ""

    def test_negative_hero_returns_empty(self) -> None:
        """Encoding never raises, even for ids that cannot be written."""
        assert encode(-5, [(1001, 1)]) == ""

    def test_encode_to_bytes_raises(self) -> None:
        """The byte-level encoder reports invalid input by raising."""
        with pytest.raises(ValueError, match="invalid count"):
            encode_to_bytes(637, [(1001, 0)])


class TestDecode:
    def test_concrete_round_trip(self) -> None:
        """Hero and all three card sections survive a round trip."""
        decoded = decode(encode(637, [(1001, 1), (1002, 2), (1003, 3)]))

        assert decoded is not None
        assert decoded.format_tag == 2
        assert decoded.heroes == [637]
        assert decoded.hero == 637
        assert decoded.cards == [(1001, 1), (1002, 2), (1003, 3)]
        assert decoded.total_cards() == 6

    def test_round_trip_full_deck(self) -> None:
        """A 30-card deck decodes to the same multiset."""
        cards = [(dbf_id, 2) for dbf_id in range(40000, 40014)] + [(1080, 1), (315, 1)]

        decoded = decode(encode(637, cards))

        assert decoded is not None
        assert decoded.total_cards() == 30
        assert decoded.as_counts() == dict(cards)

    def test_known_code(self) -> None:
        """A client-produced code with an empty card list decodes."""
        decoded = decode("AAECAQcAAAAA")

        assert decoded is not None
        assert decoded.heroes == [7]
        assert decoded.cards == []

    def test_multiple_heroes(self) -> None:
        """All declared heroes are returned in wire order."""
        payload = bytes([0, 1, 2, 2, 7, 0x8D, 0x06, 0, 0, 0])

        decoded = decode(_b64(payload))

        assert decoded is not None
        assert decoded.heroes == [7, 781]

    def test_surrounding_whitespace_ignored(self) -> None:
        """Pasted codes with trailing newlines still decode."""
        assert decode("  AAECAQcAAAA=\n") is not None

    def test_nonzero_first_byte(self) -> None:
        """A code not starting with the reserved byte is rejected."""
        code = _b64(bytes([1, 1, 2, 1, 7, 0, 0, 0]))

        assert decode(code) is None
        with pytest.raises(InvalidFormatError):
            decode_or_raise(code)

    def test_unsupported_version(self) -> None:
        """Only version 1 is understood."""
        code = _b64(bytes([0, 2, 2, 1, 7, 0, 0, 0]))

        assert decode(code) is None
        with pytest.raises(UnsupportedVersionError) as exc_info:
            decode_or_raise(code)
        assert exc_info.value.version == 2

    @pytest.mark.parametrize(
        "payload",
        [
            bytes([0, 1, 2, 1]),  # hero count without hero
            bytes([0, 1, 2, 1, 7, 3, 10, 11]),  # three singles declared, two present
            bytes([0, 1, 2, 1, 7, 0, 0, 1, 50]),  # N-card without its count
            bytes([0, 1, 2, 1, 7, 0, 0]),  # missing N section
            bytes([0, 1, 2, 1, 0x80]),  # dangling continuation bit
            bytes([0]),  # reserved byte only
        ],
    )
    def test_truncated_payloads(self, payload: bytes) -> None:
        """Overruns return None instead of a partial deck."""
        code = _b64(payload)

        assert decode(code) is None
        with pytest.raises(VarIntError):
            decode_or_raise(code)

    @pytest.mark.parametrize("code", ["", "not a deck code!", "AAECAQcAAAA", "****"])
    def test_not_base64(self, code: str) -> None:
        """Strings that are not valid padded Base64 are invalid format."""
        assert decode(code) is None
        with pytest.raises(InvalidFormatError):
            decode_or_raise(code)
