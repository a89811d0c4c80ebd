"""Decryption: blinding removal plus a bounded baby-step/giant-step search.

For a target V = m * Base with m in [-B, B], let s = ceil(sqrt(2B)). The
baby-step table maps j * Base -> j for j in [0, s). The giant walk probes
V - i*s*Base (m = i*s + j) and V + i*s*Base (m = j - i*s) for
i = 0 .. B // s + 1, so both the table and each query cost O(sqrt(B)).

Tables are built lazily once per (curve, family, bound) and shared by every
caller afterwards; they are never mutated after construction.
"""

from __future__ import annotations

import logging
import threading
import time
from math import isqrt
from typing import Dict, Generic, Tuple, TypeVar

from .codec import CipherText, CipherTextG1, CipherTextG2, CipherTextGT
from .core import Params
from .errors import PlaintextOutOfRange
from .interfaces import GroupOps
from .keys import SecretKey

logger = logging.getLogger(__name__)

Elem = TypeVar("Elem")


class DLogTable(Generic[Elem]):
    def __init__(self, ops: GroupOps[Elem], bound: int) -> None:
        self.ops = ops
        self.bound = bound
        self.stride = isqrt(2 * bound - 1) + 1  # ceil(sqrt(2B))
        self.max_giant = bound // self.stride + 1

        t0 = time.perf_counter()
        baby: Dict[bytes, int] = {}
        P = ops.zero()
        G = ops.generator()
        for j in range(self.stride):
            baby[ops.encode(P)] = j
            P = ops.add(P, G)
        self._baby = baby
        # after the loop P = s * Base
        self._giant_up = ops.neg(P)
        self._giant_down = P
        logger.debug(
            "built %s dlog table: bound=%d entries=%d in %.3fs",
            ops.name, bound, len(baby), time.perf_counter() - t0,
        )

    def __len__(self) -> int:
        return len(self._baby)

    def solve(self, target: Elem) -> int:
        """Return m in [-B, B] with target = m * Base, or raise PlaintextOutOfRange."""
        ops = self.ops
        up = target
        down = target
        for i in range(self.max_giant + 1):
            j = self._baby.get(ops.encode(up))
            if j is not None:
                return self._check(i * self.stride + j)
            # at i == 0 down is the same element as up
            j = self._baby.get(ops.encode(down)) if i else None
            if j is not None:
                return self._check(j - i * self.stride)
            up = ops.add(up, self._giant_up)
            down = ops.add(down, self._giant_down)
        raise PlaintextOutOfRange(
            f"no {ops.name} discrete log in [-{self.bound}, {self.bound}]"
        )

    def _check(self, m: int) -> int:
        if not -self.bound <= m <= self.bound:
            raise PlaintextOutOfRange(
                f"{self.ops.name} plaintext {m} outside [-{self.bound}, {self.bound}]"
            )
        return m


_tables: Dict[Tuple[str, str, bytes, int], DLogTable] = {}
_tables_lock = threading.Lock()


def get_table(params: Params, family: str) -> DLogTable:
    """Shared table for family in {"G1", "G2", "GT"}.

    Concurrent first callers may each build a table; the first one stored is
    kept and returned to all of them.
    """
    ops = _family_ops(params, family)
    key = (params.engine.name, ops.name, ops.encode(ops.generator()), params.bound)
    table = _tables.get(key)
    if table is not None:
        return table
    built = DLogTable(ops, params.bound)
    with _tables_lock:
        return _tables.setdefault(key, built)


def build_tables(params: Params) -> None:
    """Build every table up front instead of on first decryption."""
    for family in ("G1", "G2", "GT"):
        get_table(params, family)


def _family_ops(params: Params, family: str) -> GroupOps:
    eng = params.engine
    if family == "G1":
        return eng.g1
    if family == "G2":
        return eng.g2
    if family == "GT":
        return eng.gt
    raise ValueError(f"Unsupported group={family}.")


# ----------------------------
# Blinding removal
#  - G1: V = T - x*S
#  - G2: V = T - y*S
#  - GT: V = g3 - x*g1 - y*g2 + xy*g0   (written additively)
# ----------------------------

def _unblind(params: Params, sec: SecretKey, ct: CipherText) -> Tuple[str, object]:
    eng = params.engine
    if isinstance(ct, CipherTextG1):
        g1 = eng.g1
        return "G1", g1.add(ct.T, g1.scalar_mul(-sec.x, ct.S))
    if isinstance(ct, CipherTextG2):
        g2 = eng.g2
        return "G2", g2.add(ct.T, g2.scalar_mul(-sec.y, ct.S))
    if isinstance(ct, CipherTextGT):
        gt = eng.gt
        g0, g1_, g2_, g3 = ct.g
        x, y = sec.x, sec.y
        V = g3
        V = gt.add(V, gt.scalar_mul(-x, g1_))
        V = gt.add(V, gt.scalar_mul(-y, g2_))
        V = gt.add(V, gt.scalar_mul(x * y, g0))
        return "GT", V
    raise TypeError(f"not a ciphertext: {type(ct).__name__}")


def decrypt(params: Params, sec: SecretKey, ct: CipherText) -> int:
    family, V = _unblind(params, sec, ct)
    return get_table(params, family).solve(V)


def decrypt_g1(params: Params, sec: SecretKey, ct: CipherTextG1) -> int:
    if not isinstance(ct, CipherTextG1):
        raise TypeError("decrypt_g1 expects a CipherTextG1")
    return decrypt(params, sec, ct)


def decrypt_g2(params: Params, sec: SecretKey, ct: CipherTextG2) -> int:
    if not isinstance(ct, CipherTextG2):
        raise TypeError("decrypt_g2 expects a CipherTextG2")
    return decrypt(params, sec, ct)


def decrypt_gt(params: Params, sec: SecretKey, ct: CipherTextGT) -> int:
    if not isinstance(ct, CipherTextGT):
        raise TypeError("decrypt_gt expects a CipherTextGT")
    return decrypt(params, sec, ct)


def is_zero(params: Params, sec: SecretKey, ct: CipherText) -> bool:
    """True iff ct encrypts 0; needs no table and works for any message size."""
    family, V = _unblind(params, sec, ct)
    ops = _family_ops(params, family)
    return ops.eq(V, ops.zero())
