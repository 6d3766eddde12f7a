"""
Domain errors.

Simulator errors are structural preconditions and propagate to the caller.
Deck-code errors are local: the codec's public functions turn them into
sentinel results, and only ``decode_or_raise`` lets them escape.
"""


class SetNotLoadedError(Exception):
    """Raised when a pack is opened for a set that was never loaded."""

    def __init__(self, set_id: str):
        self.set_id = set_id
        super().__init__(f"Card set '{set_id}' is not loaded")


class NoCardsForSetError(Exception):
    """Raised when a set has no collectible cards to draw from."""

    def __init__(self, set_id: str):
        self.set_id = set_id
        super().__init__(f"Card set '{set_id}' has no collectible cards")


class DeckCodeError(Exception):
    """Base class for deck code parse failures."""


class InvalidFormatError(DeckCodeError):
    """The code is not Base64 or does not start with the reserved zero byte."""


class UnsupportedVersionError(DeckCodeError):
    """The code declares a version this codec does not understand."""

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Unsupported deck code version: {version}")


class VarIntError(DeckCodeError):
    """A VarInt ran past the end of the buffer."""
