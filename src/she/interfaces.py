"""Interface definitions for the pairing engine consumed by the SHE layer."""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

Elem = TypeVar("Elem")


class GroupOps(Protocol[Elem]):
    """Group law in additive notation, with a fixed generator and encoding.

    GT is written additively as well: add is the field product, neg the
    inverse and scalar_mul the power.
    """

    name: str
    size: int

    def zero(self) -> Elem:
        ...

    def generator(self) -> Elem:
        ...

    def add(self, left: Elem, right: Elem) -> Elem:
        ...

    def neg(self, value: Elem) -> Elem:
        ...

    def scalar_mul(self, k: int, value: Elem) -> Elem:
        ...

    def eq(self, left: Elem, right: Elem) -> bool:
        ...

    def encode(self, value: Elem) -> bytes:
        ...

    def decode(self, data: bytes) -> Optional[Elem]:
        """Return None as ⊥ on bad length, bad coordinates or non-membership."""
        ...


class PairingEngine(Protocol):
    """Bilinear group triple (G1, G2, GT) with e: G1 x G2 -> GT."""

    name: str
    order: int
    scalar_size: int
    g1: GroupOps
    g2: GroupOps
    gt: GroupOps

    def pairing(self, a: object, b: object) -> object:
        ...
