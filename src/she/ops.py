"""Homomorphic operations on ciphertexts.

None of these need a key. Combining ciphertexts made under different key
pairs is allowed here but the result will not decrypt; keeping to one key
pair is the caller's job.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from .codec import (
    CipherText,
    CipherTextG1,
    CipherTextG2,
    CipherTextGT,
    encrypt_g1,
    encrypt_g2,
    encrypt_gt,
)
from .core import Params
from .interfaces import GroupOps
from .keys import AnyPublicKey

C = TypeVar("C", CipherTextG1, CipherTextG2, CipherTextGT)


def _map(params: Params, ct: C, fn: Callable[[GroupOps, object], object]) -> C:
    eng = params.engine
    if isinstance(ct, CipherTextG1):
        return CipherTextG1(S=fn(eng.g1, ct.S), T=fn(eng.g1, ct.T))
    if isinstance(ct, CipherTextG2):
        return CipherTextG2(S=fn(eng.g2, ct.S), T=fn(eng.g2, ct.T))
    if isinstance(ct, CipherTextGT):
        return CipherTextGT(g=tuple(fn(eng.gt, g) for g in ct.g))
    raise TypeError(f"not a ciphertext: {type(ct).__name__}")


def _zip(params: Params, x: C, y: C, fn: Callable[[GroupOps, object, object], object]) -> C:
    if type(x) is not type(y):
        raise TypeError(
            f"cannot combine {type(x).__name__} with {type(y).__name__}"
        )
    eng = params.engine
    if isinstance(x, CipherTextG1):
        return CipherTextG1(S=fn(eng.g1, x.S, y.S), T=fn(eng.g1, x.T, y.T))
    if isinstance(x, CipherTextG2):
        return CipherTextG2(S=fn(eng.g2, x.S, y.S), T=fn(eng.g2, x.T, y.T))
    if isinstance(x, CipherTextGT):
        return CipherTextGT(g=tuple(fn(eng.gt, a, b) for a, b in zip(x.g, y.g)))
    raise TypeError(f"not a ciphertext: {type(x).__name__}")


def add(params: Params, x: C, y: C) -> C:
    """Dec(add(x, y)) = Dec(x) + Dec(y)."""
    return _zip(params, x, y, lambda ops, a, b: ops.add(a, b))


def neg(params: Params, x: C) -> C:
    return _map(params, x, lambda ops, a: ops.neg(a))


def sub(params: Params, x: C, y: C) -> C:
    """Dec(sub(x, y)) = Dec(x) - Dec(y)."""
    return add(params, x, neg(params, y))


def mul(params: Params, x: C, k: int) -> C:
    """Dec(mul(x, k)) = k * Dec(x) for a public integer k."""
    if isinstance(k, bool) or not isinstance(k, int):
        raise TypeError(f"scalar must be an int, got {type(k).__name__}")
    return _map(params, x, lambda ops, a: ops.scalar_mul(k, a))


def pairing_mul(params: Params, x: CipherTextG1, y: CipherTextG2) -> CipherTextGT:
    """Lift (G1, G2) into GT: Dec(pairing_mul(x, y)) = Dec(x) * Dec(y).

    (g0, g1, g2, g3) := (e(Sx, Sy), e(Sx, Ty), e(Tx, Sy), e(Tx, Ty))
    """
    if not isinstance(x, CipherTextG1) or not isinstance(y, CipherTextG2):
        raise TypeError("pairing_mul expects (CipherTextG1, CipherTextG2)")
    e = params.engine.pairing
    return CipherTextGT(g=(e(x.S, y.S), e(x.S, y.T), e(x.T, y.S), e(x.T, y.T)))


def convert_g1(params: Params, x: CipherTextG1) -> CipherTextGT:
    """Move a G1 ciphertext into GT keeping its message (pairs with Enc_G2(1), r=0)."""
    g2 = params.engine.g2
    return pairing_mul(params, x, CipherTextG2(S=g2.zero(), T=g2.generator()))


def convert_g2(params: Params, y: CipherTextG2) -> CipherTextGT:
    """Move a G2 ciphertext into GT keeping its message (pairs with Enc_G1(1), r=0)."""
    g1 = params.engine.g1
    return pairing_mul(params, CipherTextG1(S=g1.zero(), T=g1.generator()), y)


def rerandomize(params: Params, pub: AnyPublicKey, x: CipherText) -> CipherText:
    """Refresh the blinding of x by adding a new encryption of 0."""
    if isinstance(x, CipherTextG1):
        return add(params, x, encrypt_g1(params, pub, 0))
    if isinstance(x, CipherTextG2):
        return add(params, x, encrypt_g2(params, pub, 0))
    if isinstance(x, CipherTextGT):
        return add(params, x, encrypt_gt(params, pub, 0))
    raise TypeError(f"not a ciphertext: {type(x).__name__}")
