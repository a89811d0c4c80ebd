from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

from .errors import PlaintextRangeError
from .interfaces import PairingEngine

DEFAULT_BOUND = 1 << 20


class CurveType(IntEnum):
    """Supported pairing-friendly curves (ids follow the mcl numbering)."""

    SNARK = 4
    BLS12_381 = 5


@dataclass(frozen=True)
class Params:
    engine: PairingEngine
    sample: Callable[[], int]  # uniform scalar in [1, r)
    bound: int = DEFAULT_BOUND  # plaintexts live in [-bound, bound]

    def __post_init__(self) -> None:
        if self.bound < 1:
            raise ValueError("bound must be positive")
        if 2 * self.bound >= self.engine.order:
            raise ValueError("bound is too large for the group order")

    @property
    def order(self) -> int:
        return self.engine.order

    @property
    def sec_size(self) -> int:
        return 2 * self.engine.scalar_size

    @property
    def pub_size(self) -> int:
        return self.engine.g1.size + self.engine.g2.size

    @property
    def g1_cipher_size(self) -> int:
        return 2 * self.engine.g1.size

    @property
    def g2_cipher_size(self) -> int:
        return 2 * self.engine.g2.size

    @property
    def gt_cipher_size(self) -> int:
        return 4 * self.engine.gt.size


def check_plaintext(params: Params, m: int) -> int:
    """Return m if it is an int in [-B, B], else raise PlaintextRangeError."""
    if isinstance(m, bool) or not isinstance(m, int):
        raise PlaintextRangeError(f"plaintext must be an int, got {type(m).__name__}")
    if not -params.bound <= m <= params.bound:
        raise PlaintextRangeError(
            f"plaintext {m} outside [-{params.bound}, {params.bound}]"
        )
    return m
