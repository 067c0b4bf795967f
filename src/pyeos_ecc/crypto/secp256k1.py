"""
secp256k1 signing, verification and public key recovery

The group arithmetic is provided by the ecdsa library. This module only
adds the pieces the signature format needs on top of it: low-s enforcement,
recovery-id selection and recovery of a point from (r, s, selector).
"""

import hashlib
from typing import Tuple

import structlog
from ecdsa import SECP256k1, SigningKey
from ecdsa import ellipticcurve, numbertheory
from ecdsa.ecdsa import Public_key, Signature as RawSignature
from ecdsa.errors import MalformedPointError
from ecdsa.util import sigencode_strings_canonize

from ..errors import (
    DigestLengthError,
    InvalidPrivateKeyError,
    NonCanonicalSignatureError,
    PointRecoveryError,
)

logger = structlog.get_logger("pyeos_ecc.crypto.secp256k1")


class K1Curve:
    """secp256k1 curve parameters"""

    # Curve field prime (p)
    P = 0xfffffffffffffffffffffffffffffffffffffffffffffffffffffffefffffc2f

    # Scalar field prime (n) - order of the base point
    N = 0xfffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141

    # Curve parameters for y^2 = x^3 + ax + b
    A = 0
    B = 7

    # Generator point coordinates
    G_X = 0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798
    G_Y = 0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8

    # Coordinate byte length
    COORD_BYTES = 32

    # Largest s accepted as canonical
    HALF_N = N // 2


def is_canonical(s: int) -> bool:
    """Check that s lies in the lower half of the scalar range"""
    return 0 < s <= K1Curve.HALF_N


def _check_digest(digest: bytes):
    if len(digest) != K1Curve.COORD_BYTES:
        raise DigestLengthError("digest: 32 bytes required")


def signing_key(secret: int) -> SigningKey:
    """Build an ecdsa SigningKey for a secret scalar"""
    try:
        return SigningKey.from_secret_exponent(
            secret, curve=SECP256k1, hashfunc=hashlib.sha256
        )
    except MalformedPointError as exc:
        raise InvalidPrivateKeyError("Secret scalar outside curve order") from exc


def public_point(secret: int) -> ellipticcurve.Point:
    """Compute the public point secret * G in affine coordinates"""
    return signing_key(secret).get_verifying_key().pubkey.point.to_affine()


def _same_point(a, b) -> bool:
    return a.x() == b.x() and a.y() == b.y()


def recover_point(digest: bytes, r: int, s: int, selector: int) -> ellipticcurve.Point:
    """
    Recover the public point which produced (r, s) over digest.

    Args:
        digest: 32-byte message digest
        r, s: Signature components
        selector: 2-bit recovery selector. Bit 0 picks the odd y coordinate
            of R, bit 1 picks x = r + n instead of x = r.

    Returns:
        The recovered point in affine coordinates

    Raises:
        PointRecoveryError: If no point can be recovered for the selector
    """
    _check_digest(digest)
    if not 0 <= selector <= 3:
        raise PointRecoveryError(f"Recovery selector out of range: {selector}")

    n = K1Curve.N
    p = K1Curve.P
    if not 0 < r < n or not 0 < s < n:
        raise PointRecoveryError("Signature components outside curve order")

    x = r + (selector >> 1) * n
    if x >= p:
        raise PointRecoveryError("Candidate x coordinate beyond field prime")

    alpha = (pow(x, 3, p) + K1Curve.A * x + K1Curve.B) % p
    try:
        beta = numbertheory.square_root_mod_prime(alpha, p)
    except numbertheory.SquareRootError as exc:
        raise PointRecoveryError("Candidate x coordinate not on curve") from exc

    y = beta if (beta & 1) == (selector & 1) else p - beta
    big_r = ellipticcurve.PointJacobi(SECP256k1.curve, x, y, 1, n)

    e = int.from_bytes(digest, byteorder='big')
    r_inv = numbertheory.inverse_mod(r, n)

    # Q = r^-1 (sR - eG)
    q = (big_r * s + SECP256k1.generator * ((-e) % n)) * r_inv
    if q == ellipticcurve.INFINITY:
        raise PointRecoveryError("Recovered point is at infinity")

    return q.to_affine()


def _find_recovery_param(digest: bytes, r: int, s: int, point) -> int:
    for selector in range(4):
        try:
            candidate = recover_point(digest, r, s, selector)
        except PointRecoveryError:
            continue
        if _same_point(candidate, point):
            return selector
    raise PointRecoveryError("No recovery selector fits the signing key")


def sign(secret: int, digest: bytes) -> Tuple[int, int, int]:
    """
    Produce a canonical (low-s) deterministic ECDSA signature over digest.

    The nonce is derived with RFC 6979 over SHA-256.

    Args:
        secret: Private scalar in [1, n-1]
        digest: 32-byte message digest

    Returns:
        Tuple of (r, s, recovery_param) with recovery_param in 0..3
    """
    _check_digest(digest)
    key = signing_key(secret)

    r_bytes, s_bytes = key.sign_digest_deterministic(
        digest, hashfunc=hashlib.sha256, sigencode=sigencode_strings_canonize
    )
    r = int.from_bytes(r_bytes, byteorder='big')
    s = int.from_bytes(s_bytes, byteorder='big')

    if not is_canonical(s):
        raise NonCanonicalSignatureError("Signer returned s above half the curve order")

    point = key.get_verifying_key().pubkey.point
    recovery_param = _find_recovery_param(digest, r, s, point)
    logger.debug("digest_signed", recovery_param=recovery_param)
    return r, s, recovery_param


def verify(digest: bytes, r: int, s: int, point) -> bool:
    """
    Validates (r, s) over digest against the given public point.

    Non-canonical (high-s) signatures are accepted.

    Returns:
        True if signature is valid, False otherwise
    """
    _check_digest(digest)
    e = int.from_bytes(digest, byteorder='big')
    public_key = Public_key(SECP256k1.generator, point)
    return public_key.verifies(e, RawSignature(r, s))
