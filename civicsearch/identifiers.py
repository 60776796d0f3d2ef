"""Public document identifiers derived from record ordinals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from hashids import Hashids

if TYPE_CHECKING:
    from civicsearch.config import CivicSearchSettings

IDENTIFIER_PREFIX = "cs"
DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
DEFAULT_MIN_LENGTH = 8


class IdentifierEncoder:
    """Keyed, reversible encoding of an ordinal into a short public code."""

    def __init__(
        self,
        secret: str,
        min_length: int = DEFAULT_MIN_LENGTH,
        alphabet: str = DEFAULT_ALPHABET,
        prefix: str = IDENTIFIER_PREFIX,
    ):
        self.prefix = prefix
        self._hashids = Hashids(salt=secret, min_length=min_length, alphabet=alphabet)

    @classmethod
    def from_settings(cls, settings: "CivicSearchSettings") -> "IdentifierEncoder":
        return cls(
            settings.hashid_secret,
            min_length=settings.hashid_min_length,
            alphabet=settings.hashid_alphabet,
        )

    def encode(self, ordinal: int) -> str:
        if ordinal < 0:
            raise ValueError(f"Ordinal must be non-negative, got {ordinal}")
        return self.prefix + self._hashids.encode(ordinal)

    def decode(self, identifier: str) -> Optional[int]:
        """Return the ordinal behind ``identifier`` or ``None`` if it is not ours."""

        if not identifier or not identifier.startswith(self.prefix):
            return None
        values = self._hashids.decode(identifier[len(self.prefix):])
        if len(values) != 1:
            return None
        return values[0]


__all__ = ["IdentifierEncoder", "IDENTIFIER_PREFIX", "DEFAULT_ALPHABET"]
