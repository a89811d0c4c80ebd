"""Exceptions raised by the SHE layer."""

from __future__ import annotations


class SheError(Exception):
    """Base class for every failure reported by the scheme."""


class RandomnessFailure(SheError):
    """The entropy source failed while sampling a scalar."""


class PlaintextRangeError(SheError, ValueError):
    """Message is not an integer in [-B, B]."""


class MalformedCiphertext(SheError, ValueError):
    """Ciphertext bytes have the wrong length or an invalid component."""


class MalformedKey(SheError, ValueError):
    """Key bytes have the wrong length or an invalid component."""


class PlaintextOutOfRange(SheError):
    """Discrete-log search exhausted [-B, B] without a match."""
