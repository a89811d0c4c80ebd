# src/instantiations/pyecc/inst.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import ModuleType
from typing import List, Optional

from she.core import DEFAULT_BOUND, CurveType, Params
from she.keys import make_sampler_zr

# py_ecc for G1/G2/GT group ops and the optimal ate pairing.
# Install: pip install py-ecc
try:
    from py_ecc import optimized_bls12_381, optimized_bn128
except Exception as e:  # pragma: no cover
    raise ImportError(
        "Pairing engine requires 'py-ecc'. Install via: pip install py-ecc"
    ) from e

logger = logging.getLogger(__name__)

_CURVES = {
    CurveType.SNARK: optimized_bn128,
    CurveType.BLS12_381: optimized_bls12_381,
}


# ----------------------------
# Point representation note
# - py_ecc optimized curve arithmetic expects projective points (x, y, z).
# - normalize(P) returns affine (x, y).
# We keep affine for stable equality (infinity stays Z1/Z2), and convert back
# to projective before calling add/neg/multiply/pairing.
# ----------------------------

def _to_projective(P):
    """Convert affine (x,y) to projective (x,y,1). Keep projective as-is."""
    if len(P) == 3:
        return P
    x, y = P
    return (x, y, x.one())


def _int(c) -> int:
    # FQP coefficients are ints or FQ depending on the py_ecc version
    return c if isinstance(c, int) else c.n


def _field_bytes(p: int) -> int:
    return (p.bit_length() + 7) // 8


def _split(buf: bytes, width: int) -> List[int]:
    return [int.from_bytes(buf[i:i + width], "big") for i in range(0, len(buf), width)]


# ----------------------------
# G1 / G2: elliptic-curve groups, additive
# Encoding: affine coordinates, each coefficient big-endian of field width.
#   G1 = x || y, G2 = x.c0 || x.c1 || y.c0 || y.c1, infinity = all zeros.
# ----------------------------

@dataclass(frozen=True)
class EcOps:
    name: str
    curve: ModuleType
    gen: tuple
    inf: tuple
    b: object
    degree: int  # 1 over FQ, 2 over FQ2

    @property
    def width(self) -> int:
        return _field_bytes(self.curve.field_modulus)

    @property
    def size(self) -> int:
        return 2 * self.degree * self.width

    def _canon(self, P):
        if self.curve.is_inf(P):
            return self.inf
        return self.curve.normalize(P)

    def zero(self):
        return self.inf

    def generator(self):
        return self._canon(self.gen)

    def add(self, A, B):
        return self._canon(self.curve.add(_to_projective(A), _to_projective(B)))

    def neg(self, A):
        return self._canon(self.curve.neg(_to_projective(A)))

    def scalar_mul(self, k: int, A):
        k = int(k) % self.curve.curve_order
        if k == 0 or self.curve.is_inf(_to_projective(A)):
            return self.inf
        return self._canon(self.curve.multiply(_to_projective(A), k))

    def eq(self, A, B) -> bool:
        return self.encode(A) == self.encode(B)

    def _coeffs(self, v) -> List[int]:
        if self.degree == 1:
            return [_int(v)]
        return [_int(c) for c in v.coeffs]

    def encode(self, A) -> bytes:
        if len(A) == 3:
            A = self._canon(A)
            if len(A) == 3:
                return bytes(self.size)
        p = self.curve.field_modulus
        x, y = A
        return b"".join(
            (c % p).to_bytes(self.width, "big") for c in self._coeffs(x) + self._coeffs(y)
        )

    def decode(self, buf: bytes) -> Optional[tuple]:
        if len(buf) != self.size:
            return None
        if not any(buf):
            return self.inf
        vals = _split(buf, self.width)
        if any(v >= self.curve.field_modulus for v in vals):
            return None
        if self.degree == 1:
            x, y = self.curve.FQ(vals[0]), self.curve.FQ(vals[1])
        else:
            x, y = self.curve.FQ2(vals[0:2]), self.curve.FQ2(vals[2:4])
        P = (x, y, x.one())
        if not self.curve.is_on_curve(P, self.b):
            return None
        # prime-order subgroup: r * P must be the point at infinity
        if not self.curve.is_inf(self.curve.multiply(P, self.curve.curve_order)):
            return None
        return (x, y)


# ----------------------------
# GT: order-r subgroup of FQ12^*, written additively for the SHE layer
#   add = product, neg = inverse, scalar_mul = power, zero = 1
# Encoding: the 12 FQ12 coefficients.
# ----------------------------

@dataclass(frozen=True)
class GtOps:
    curve: ModuleType
    base: object  # e(P, Q)
    name: str = "GT"

    @property
    def width(self) -> int:
        return _field_bytes(self.curve.field_modulus)

    @property
    def size(self) -> int:
        return 12 * self.width

    def zero(self):
        return self.curve.FQ12.one()

    def generator(self):
        return self.base

    def add(self, a, b_):
        return a * b_

    def neg(self, a):
        return a.inv()

    def scalar_mul(self, k: int, a):
        return a ** (int(k) % self.curve.curve_order)

    def eq(self, a, b_) -> bool:
        return self.encode(a) == self.encode(b_)

    def encode(self, a) -> bytes:
        p = self.curve.field_modulus
        return b"".join((_int(c) % p).to_bytes(self.width, "big") for c in a.coeffs)

    def decode(self, buf: bytes):
        if len(buf) != self.size:
            return None
        vals = _split(buf, self.width)
        if any(v >= self.curve.field_modulus for v in vals) or not any(vals):
            return None
        g = self.curve.FQ12(vals)
        if g ** self.curve.curve_order != self.curve.FQ12.one():
            return None
        return g


@dataclass(frozen=True)
class PyEccEngine:
    name: str
    curve: ModuleType
    order: int
    scalar_size: int
    g1: EcOps
    g2: EcOps
    gt: GtOps

    def pairing(self, a, b_):
        """e(a, b) for a in G1, b in G2 (py_ecc takes the G2 argument first)."""
        return self.curve.pairing(_to_projective(b_), _to_projective(a))


@lru_cache(maxsize=None)
def make_engine(curve: CurveType = CurveType.SNARK) -> PyEccEngine:
    """One engine per curve per process; building it costs one pairing."""
    curve = CurveType(curve)
    mod = _CURVES[curve]
    order = int(mod.curve_order)
    engine = PyEccEngine(
        name=curve.name,
        curve=mod,
        order=order,
        scalar_size=(order.bit_length() + 7) // 8,
        g1=EcOps(name="G1", curve=mod, gen=mod.G1, inf=mod.Z1, b=mod.b, degree=1),
        g2=EcOps(name="G2", curve=mod, gen=mod.G2, inf=mod.Z2, b=mod.b2, degree=2),
        gt=GtOps(curve=mod, base=mod.pairing(mod.G2, mod.G1)),
    )
    logger.debug("initialised %s pairing engine (r has %d bits)", engine.name, order.bit_length())
    return engine


def make_she_params(curve: CurveType = CurveType.SNARK, bound: int = DEFAULT_BOUND) -> Params:
    """
    Return Params for the given curve.

    - G1, G2, GT and the pairing from py_ecc's optimized curve modules
    - scalars sampled uniformly from [1, r) with `secrets`
    - plaintexts in [-bound, bound]; decryption tables scale with sqrt(bound)
    """
    engine = make_engine(CurveType(curve))
    return Params(engine=engine, sample=make_sampler_zr(engine.order), bound=bound)
