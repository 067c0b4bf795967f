"""
Cryptographic primitives for K1 signatures

This module provides SHA-256 and RIPEMD-160 hashing and the secp256k1
signing, verification and public key recovery routines.
"""

from .hash import Hasher, HashResult, sha256, ripemd160
from .secp256k1 import K1Curve, is_canonical, recover_point, sign, verify

__all__ = [
    'Hasher',
    'HashResult',
    'sha256',
    'ripemd160',
    'K1Curve',
    'is_canonical',
    'recover_point',
    'sign',
    'verify',
]
