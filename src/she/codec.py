"""Ciphertext types, encryption and the fixed-width ciphertext codec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .core import Params, check_plaintext
from .errors import MalformedCiphertext
from .interfaces import GroupOps
from .keys import AnyPublicKey, precompute, public_part


@dataclass(frozen=True)
class CipherTextG1:
    S: object  # r * P
    T: object  # m * P + r * xP


@dataclass(frozen=True)
class CipherTextG2:
    S: object  # r * Q
    T: object  # m * Q + r * yQ


@dataclass(frozen=True)
class CipherTextGT:
    g: Tuple[object, object, object, object]


CipherText = Union[CipherTextG1, CipherTextG2, CipherTextGT]


def _enc_ec(ops: GroupOps, blind_base: object, r: int, m: int) -> Tuple[object, object]:
    S = ops.scalar_mul(r, ops.generator())
    T = ops.add(ops.scalar_mul(m, ops.generator()), ops.scalar_mul(r, blind_base))
    return S, T


def encrypt_g1(params: Params, pub: AnyPublicKey, m: int) -> CipherTextG1:
    check_plaintext(params, m)
    S, T = _enc_ec(params.engine.g1, public_part(pub).xP, params.sample(), m)
    return CipherTextG1(S=S, T=T)


def encrypt_g2(params: Params, pub: AnyPublicKey, m: int) -> CipherTextG2:
    check_plaintext(params, m)
    S, T = _enc_ec(params.engine.g2, public_part(pub).yQ, params.sample(), m)
    return CipherTextG2(S=S, T=T)


def encrypt_gt(params: Params, pub: AnyPublicKey, m: int) -> CipherTextGT:
    """Encrypt directly in GT.

    With e = e(P, Q) and fresh a, b, c:
      g0 = e^c
      g1 = e^a (e^y)^c
      g2 = e^b (e^x)^c
      g3 = e^m (e^x)^a (e^y)^b (e^xy)^c
    which has the same shape as pairing_mul's output, so g3 g1^-x g2^-y g0^xy = e^m.
    Passing a PrecomputedPublicKey avoids three pairings per call.
    """
    check_plaintext(params, m)
    ppub = precompute(params, pub)
    gt = params.engine.gt
    e = gt.generator()
    a, b, c = params.sample(), params.sample(), params.sample()

    g0 = gt.scalar_mul(c, e)
    g1 = gt.add(gt.scalar_mul(a, e), gt.scalar_mul(c, ppub.ey))
    g2 = gt.add(gt.scalar_mul(b, e), gt.scalar_mul(c, ppub.ex))
    g3 = gt.scalar_mul(m, e)
    for k, base in ((a, ppub.ex), (b, ppub.ey), (c, ppub.exy)):
        g3 = gt.add(g3, gt.scalar_mul(k, base))
    return CipherTextGT(g=(g0, g1, g2, g3))


def encrypt(params: Params, pub: AnyPublicKey, m: int, group: str = "G1") -> CipherText:
    if group == "G1":
        return encrypt_g1(params, pub, m)
    if group == "G2":
        return encrypt_g2(params, pub, m)
    if group == "GT":
        return encrypt_gt(params, pub, m)
    raise ValueError(f"Unsupported group={group}.")


# ----------------------------
# Serialization
#  - G1/G2: enc(S) || enc(T)
#  - GT:    enc(g0) || enc(g1) || enc(g2) || enc(g3)
# ----------------------------

def serialize(params: Params, ct: CipherText) -> bytes:
    eng = params.engine
    if isinstance(ct, CipherTextG1):
        return eng.g1.encode(ct.S) + eng.g1.encode(ct.T)
    if isinstance(ct, CipherTextG2):
        return eng.g2.encode(ct.S) + eng.g2.encode(ct.T)
    if isinstance(ct, CipherTextGT):
        return b"".join(eng.gt.encode(g) for g in ct.g)
    raise TypeError(f"not a ciphertext: {type(ct).__name__}")


def _decode_parts(ops: GroupOps, data: bytes, count: int) -> list:
    if len(data) != count * ops.size:
        raise MalformedCiphertext(
            f"{ops.name} ciphertext must be {count * ops.size} bytes, got {len(data)}"
        )
    parts = []
    for i in range(count):
        v = ops.decode(data[i * ops.size:(i + 1) * ops.size])
        if v is None:
            raise MalformedCiphertext(f"component {i} is not a valid {ops.name} element")
        parts.append(v)
    return parts


def deserialize_g1(params: Params, data: bytes) -> CipherTextG1:
    S, T = _decode_parts(params.engine.g1, data, 2)
    return CipherTextG1(S=S, T=T)


def deserialize_g2(params: Params, data: bytes) -> CipherTextG2:
    S, T = _decode_parts(params.engine.g2, data, 2)
    return CipherTextG2(S=S, T=T)


def deserialize_gt(params: Params, data: bytes) -> CipherTextGT:
    return CipherTextGT(g=tuple(_decode_parts(params.engine.gt, data, 4)))
