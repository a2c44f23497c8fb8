"""Exceptions raised by the Codecks tracker extension."""

from __future__ import annotations


class CodecksTrackerError(Exception):
    """Base class for all errors raised by this package."""


class CardLabelError(CodecksTrackerError, ValueError):
    """A card label or sequence number could not be converted."""


class EmptyLabelError(CardLabelError):
    """An empty string was passed where a card label was expected."""

    def __init__(self) -> None:
        super().__init__("Card label must not be empty")


class InvalidCharacterError(CardLabelError):
    """A card label contains a character outside of the label alphabet."""

    def __init__(self, label: str, position: int, character: str) -> None:
        self.label = label
        self.position = position
        self.character = character
        super().__init__(
            f"Invalid character {character!r} at position {position} in card label {label!r}"
        )


class LabelRangeError(CardLabelError):
    """A sequence number is too small to be represented as a card label."""

    def __init__(self, seq: int, minimum: int) -> None:
        self.seq = seq
        self.minimum = minimum
        super().__init__(f"Sequence number {seq} is below the smallest encodable value {minimum}")


class ConnectionFailedError(CodecksTrackerError):
    """The card repository could not log in or authenticate."""


class CardNotFoundError(CodecksTrackerError, LookupError):
    """No card matches the requested task ID."""


class UserNotFoundError(CodecksTrackerError, LookupError):
    """No user in the account has the requested e-mail address."""


class ConfigurationError(CodecksTrackerError):
    """The extension configuration could not be loaded or is invalid."""
