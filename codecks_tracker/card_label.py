"""Conversion between Codecks card sequence numbers and card labels.

Cards in the Codecks web app show a short label such as ``1w4``. The API never
returns it; it only exposes ``accountSeq``, a number assigned to each card in
creation order. The label is a positional numeral over a custom alphabet with
a constant offset, where every digit after the first carries an implicit
``+1`` ("implicit zero"), so labels of different lengths never collide.

Python integers are unbounded, so neither direction can overflow: very large
sequence numbers simply yield longer labels.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from codecks_tracker.exceptions import EmptyLabelError, InvalidCharacterError, LabelRangeError

if TYPE_CHECKING:
    from collections.abc import Mapping

ALPHABET = "123456789acefghijkoqrsuvwxyz"
OFFSET = 28 * 29 - 1
IMPLICIT_ZERO = True


class LabelScheme(BaseModel):
    """Immutable numbering scheme used by the web app."""

    model_config = ConfigDict(frozen=True)

    alphabet: str = ALPHABET
    offset: int = OFFSET
    implicit_zero: bool = IMPLICIT_ZERO

    @field_validator("alphabet")
    @classmethod
    def check_alphabet(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("alphabet needs at least two characters")
        if len(set(v)) != len(v):
            raise ValueError("alphabet characters must be unique")
        return v

    @property
    def radix(self) -> int:
        return len(self.alphabet)


class CardLabelCodec:
    """Converts between ``accountSeq`` values and card labels."""

    def __init__(self, scheme: LabelScheme | None = None) -> None:
        self.scheme = scheme or LabelScheme()
        self._index: Mapping[str, int] = MappingProxyType(
            {char: i for i, char in enumerate(self.scheme.alphabet)}
        )

    @property
    def char_to_index(self) -> Mapping[str, int]:
        """Read-only lookup from label character to digit value."""
        return self._index

    @property
    def min_seq(self) -> int:
        """Smallest sequence number that ``encode`` accepts."""
        return -self.scheme.offset

    def decode(self, label: str) -> int:
        """
        Convert a card label to its sequence number.

        An unknown first character counts as digit 0. Any later character
        outside the alphabet raises :class:`InvalidCharacterError`. The
        result can be negative for labels that ``encode`` never produces.
        """
        if not label:
            raise EmptyLabelError()

        radix = self.scheme.radix
        value = self._index.get(label[0], 0)
        for position, char in enumerate(label[1:], start=1):
            digit = self._index.get(char)
            if digit is None:
                raise InvalidCharacterError(label, position, char)
            if self.scheme.implicit_zero:
                value += 1
            value = value * radix + digit

        return value - self.scheme.offset

    def encode(self, seq: int) -> str:
        """Convert a sequence number to its card label."""
        if isinstance(seq, bool) or not isinstance(seq, int):
            raise TypeError(f"Sequence number must be an int, got {type(seq).__name__}")
        if seq < self.min_seq:
            raise LabelRangeError(seq, self.min_seq)

        alphabet = self.scheme.alphabet
        radix = self.scheme.radix
        q = seq + self.scheme.offset
        if self.scheme.implicit_zero:
            q += 1

        digits: list[str] = []
        while True:
            if self.scheme.implicit_zero:
                q -= 1
            q, r = divmod(q, radix)
            digits.append(alphabet[r])
            if q == 0:
                break

        return "".join(reversed(digits))

    def is_valid(self, label: str) -> bool:
        """Return True if ``label`` can be decoded."""
        try:
            self.decode(label)
        except (EmptyLabelError, InvalidCharacterError):
            return False
        return True


default_codec = CardLabelCodec()


def encode_label(seq: int) -> str:
    """Encode with the default scheme."""
    return default_codec.encode(seq)


def decode_label(label: str) -> int:
    """Decode with the default scheme."""
    return default_codec.decode(label)
