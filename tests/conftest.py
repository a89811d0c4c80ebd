from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from she.core import Params
from she.keys import make_sampler_zr

Q = 2**61 - 1  # prime


@dataclass(frozen=True)
class ZqOps:
    # (Z_Q, +) with a chosen generator; a bilinear toy, not a secure group.
    name: str
    gen: int
    size: int = 8

    def zero(self) -> int:
        return 0

    def generator(self) -> int:
        return self.gen

    def add(self, left: int, right: int) -> int:
        return (left + right) % Q

    def neg(self, value: int) -> int:
        return (-value) % Q

    def scalar_mul(self, k: int, value: int) -> int:
        return (k * value) % Q

    def eq(self, left: int, right: int) -> bool:
        return left % Q == right % Q

    def encode(self, value: int) -> bytes:
        return value.to_bytes(self.size, "big")

    def decode(self, data: bytes) -> Optional[int]:
        if len(data) != self.size:
            return None
        v = int.from_bytes(data, "big")
        return v if v < Q else None


@dataclass(frozen=True)
class ToyEngine:
    # e(a, b) = a * b mod Q is bilinear, so GT's generator is 3 * 5.
    name: str = "TOY"
    order: int = Q
    scalar_size: int = 8
    g1: ZqOps = ZqOps("G1", 3)
    g2: ZqOps = ZqOps("G2", 5)
    gt: ZqOps = ZqOps("GT", 15)

    def pairing(self, a: int, b: int) -> int:
        return (a * b) % Q


def make_toy_params(bound: int = 1 << 20) -> Params:
    return Params(engine=ToyEngine(), sample=make_sampler_zr(Q), bound=bound)


@pytest.fixture
def toy_params() -> Params:
    return make_toy_params()
