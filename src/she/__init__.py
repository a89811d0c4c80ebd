"""Somewhat homomorphic encryption over pairing-friendly curves.

Additively homomorphic ciphertexts in G1, G2 and GT, plus one multiplication
G1 x G2 -> GT through the pairing. The curve arithmetic itself is supplied by
a PairingEngine (see ``instantiations.pyecc``).
"""

from .codec import (
    CipherText,
    CipherTextG1,
    CipherTextG2,
    CipherTextGT,
    deserialize_g1,
    deserialize_g2,
    deserialize_gt,
    encrypt,
    encrypt_g1,
    encrypt_g2,
    encrypt_gt,
    serialize,
)
from .core import DEFAULT_BOUND, CurveType, Params, check_plaintext
from .dlog import (
    DLogTable,
    build_tables,
    decrypt,
    decrypt_g1,
    decrypt_g2,
    decrypt_gt,
    get_table,
    is_zero,
)
from .errors import (
    MalformedCiphertext,
    MalformedKey,
    PlaintextOutOfRange,
    PlaintextRangeError,
    RandomnessFailure,
    SheError,
)
from .interfaces import GroupOps, PairingEngine
from .keys import (
    PrecomputedPublicKey,
    PublicKey,
    SecretKey,
    deserialize_public_key,
    deserialize_secret_key,
    get_public_key,
    keygen,
    make_sampler_zr,
    precompute,
    serialize_public_key,
    serialize_secret_key,
)
from .ops import add, convert_g1, convert_g2, mul, neg, pairing_mul, rerandomize, sub

__all__ = [
    "CipherText",
    "CipherTextG1",
    "CipherTextG2",
    "CipherTextGT",
    "CurveType",
    "DEFAULT_BOUND",
    "DLogTable",
    "GroupOps",
    "MalformedCiphertext",
    "MalformedKey",
    "PairingEngine",
    "Params",
    "PlaintextOutOfRange",
    "PlaintextRangeError",
    "PrecomputedPublicKey",
    "PublicKey",
    "RandomnessFailure",
    "SecretKey",
    "SheError",
    "add",
    "build_tables",
    "check_plaintext",
    "convert_g1",
    "convert_g2",
    "decrypt",
    "decrypt_g1",
    "decrypt_g2",
    "decrypt_gt",
    "deserialize_g1",
    "deserialize_g2",
    "deserialize_gt",
    "deserialize_public_key",
    "deserialize_secret_key",
    "encrypt",
    "encrypt_g1",
    "encrypt_g2",
    "encrypt_gt",
    "get_public_key",
    "get_table",
    "is_zero",
    "keygen",
    "make_sampler_zr",
    "mul",
    "neg",
    "pairing_mul",
    "precompute",
    "rerandomize",
    "serialize",
    "serialize_public_key",
    "serialize_secret_key",
    "sub",
]
