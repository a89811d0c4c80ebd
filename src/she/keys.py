"""Key generation and the key codec."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Callable, Union

from .core import Params
from .errors import MalformedKey, RandomnessFailure


def make_sampler_zr(q: int) -> Callable[[], int]:
    def sample() -> int:
        try:
            return secrets.randbelow(q - 1) + 1
        except OSError as e:
            raise RandomnessFailure("entropy source unavailable") from e
    return sample


class SecretKey:
    """Secret scalar pair (x, y).

    x removes the blinding of G1 ciphertexts, y that of G2 ciphertexts and
    both together that of GT ciphertexts.

    The handle is not copyable through ``copy``/``pickle``; use :meth:`copy`
    when a second owner is really needed. :meth:`clear` zeroes the scalars and
    runs on destruction.
    """

    __slots__ = ("_x", "_y")

    def __init__(self, x: int, y: int) -> None:
        self._x = x
        self._y = y

    @property
    def cleared(self) -> bool:
        return self._x == 0

    @property
    def x(self) -> int:
        self._check()
        return self._x

    @property
    def y(self) -> int:
        self._check()
        return self._y

    def _check(self) -> None:
        if self._x == 0:
            raise ValueError("secret key has been cleared")

    def copy(self) -> "SecretKey":
        self._check()
        return SecretKey(self._x, self._y)

    def clear(self) -> None:
        self._x = 0
        self._y = 0

    def __copy__(self):
        raise TypeError("SecretKey is not implicitly copyable; use SecretKey.copy()")

    def __deepcopy__(self, memo):
        raise TypeError("SecretKey is not implicitly copyable; use SecretKey.copy()")

    def __reduce__(self):
        raise TypeError("SecretKey cannot be pickled; use serialize_secret_key()")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return NotImplemented
        return secrets.compare_digest(
            b"%x:%x" % (self._x, self._y), b"%x:%x" % (other._x, other._y)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "SecretKey(<cleared>)" if self.cleared else "SecretKey(<redacted>)"

    def __del__(self) -> None:
        self.clear()


@dataclass(frozen=True)
class PublicKey:
    xP: object  # x * P in G1
    yQ: object  # y * Q in G2


@dataclass(frozen=True)
class PrecomputedPublicKey:
    """PublicKey plus the GT images needed by GT encryption."""

    pub: PublicKey
    ex: object   # e(xP, Q)
    ey: object   # e(P, yQ)
    exy: object  # e(xP, yQ)


AnyPublicKey = Union[PublicKey, PrecomputedPublicKey]


def keygen(params: Params) -> SecretKey:
    """Draw two independent scalars from the CSPRNG."""
    return SecretKey(params.sample(), params.sample())


def get_public_key(params: Params, sec: SecretKey) -> PublicKey:
    """pub := (x * P, y * Q)."""
    eng = params.engine
    return PublicKey(
        xP=eng.g1.scalar_mul(sec.x, eng.g1.generator()),
        yQ=eng.g2.scalar_mul(sec.y, eng.g2.generator()),
    )


def precompute(params: Params, pub: AnyPublicKey) -> PrecomputedPublicKey:
    if isinstance(pub, PrecomputedPublicKey):
        return pub
    eng = params.engine
    return PrecomputedPublicKey(
        pub=pub,
        ex=eng.pairing(pub.xP, eng.g2.generator()),
        ey=eng.pairing(eng.g1.generator(), pub.yQ),
        exy=eng.pairing(pub.xP, pub.yQ),
    )


def public_part(pub: AnyPublicKey) -> PublicKey:
    return pub.pub if isinstance(pub, PrecomputedPublicKey) else pub


# ----------------------------
# Key codec
#  - SecretKey: x || y, each scalar_size bytes big-endian
#  - PublicKey: enc(xP) || enc(yQ)
# ----------------------------

def serialize_secret_key(params: Params, sec: SecretKey) -> bytes:
    n = params.engine.scalar_size
    return sec.x.to_bytes(n, "big") + sec.y.to_bytes(n, "big")


def deserialize_secret_key(params: Params, data: bytes) -> SecretKey:
    if len(data) != params.sec_size:
        raise MalformedKey(f"secret key must be {params.sec_size} bytes, got {len(data)}")
    n = params.engine.scalar_size
    x = int.from_bytes(data[:n], "big")
    y = int.from_bytes(data[n:], "big")
    for s in (x, y):
        if not 0 < s < params.order:
            raise MalformedKey("secret scalar outside [1, r)")
    return SecretKey(x, y)


def serialize_public_key(params: Params, pub: AnyPublicKey) -> bytes:
    pub = public_part(pub)
    eng = params.engine
    return eng.g1.encode(pub.xP) + eng.g2.encode(pub.yQ)


def deserialize_public_key(params: Params, data: bytes) -> PublicKey:
    if len(data) != params.pub_size:
        raise MalformedKey(f"public key must be {params.pub_size} bytes, got {len(data)}")
    eng = params.engine
    xP = eng.g1.decode(data[: eng.g1.size])
    yQ = eng.g2.decode(data[eng.g1.size:])
    if xP is None or yQ is None:
        raise MalformedKey("public key component is not a valid group element")
    if eng.g1.eq(xP, eng.g1.zero()) or eng.g2.eq(yQ, eng.g2.zero()):
        raise MalformedKey("public key component is the identity")
    return PublicKey(xP=xP, yQ=yQ)

