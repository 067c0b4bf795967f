"""
Public and private key values for the K1 (secp256k1) curve

Keys only need to do what signatures ask of them: resolve the key-like values
callers pass in (strings, raw bytes, scalars or ecdsa key objects) into curve
points and scalars, and wrap recovered points back into a key value.

Text forms:
    PUB_K1_<base58check(compressed33, "K1")>
    EOS<base58check(compressed33)>               legacy public key
    PVT_K1_<base58check(scalar32, "K1")>
    5...<base58(0x80 | scalar32 | sha256d[:4])>  legacy WIF private key
"""

import re
from typing import Union

from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.errors import MalformedPointError

from .base58check import check_decode, check_encode, wif_decode, wif_encode
from .crypto import secp256k1
from .crypto.secp256k1 import K1Curve
from .errors import (
    EccError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    UnsupportedCurveTypeError,
)

KEY_TYPE = "K1"
PUBLIC_PREFIX = "PUB_"
PRIVATE_PREFIX = "PVT_"
LEGACY_PUBLIC_PREFIX = "EOS"

# Version byte of legacy WIF private keys
WIF_VERSION = 0x80

_PUBLIC_RE = re.compile(r"^PUB_([A-Za-z0-9]+)_([A-Za-z0-9]+)$")
_PRIVATE_RE = re.compile(r"^PVT_([A-Za-z0-9]+)_([A-Za-z0-9]+)$")


def _split_typed(pattern, text: str, error_cls):
    match = pattern.match(text)
    if match is None:
        raise error_cls(f"Expecting key like: {pattern.pattern}")
    key_type, payload = match.groups()
    if key_type != KEY_TYPE:
        raise UnsupportedCurveTypeError(f"{KEY_TYPE} key expected, got {key_type}")
    return payload


class PublicKey:
    """A secp256k1 public key, exposed in compressed form"""

    def __init__(self, verifying_key: VerifyingKey):
        self._verifying_key = verifying_key

    @classmethod
    def from_point(cls, point) -> 'PublicKey':
        """Wrap a curve point, validating that it lies on secp256k1"""
        try:
            verifying_key = VerifyingKey.from_public_point(point, curve=SECP256k1)
        except MalformedPointError as exc:
            raise InvalidPublicKeyError("Point is not on the curve") from exc
        return cls(verifying_key)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PublicKey':
        """Parse a SEC1 encoded point (33 byte compressed or 65 byte uncompressed)"""
        try:
            verifying_key = VerifyingKey.from_string(bytes(data), curve=SECP256k1)
        except (MalformedPointError, ValueError) as exc:
            raise InvalidPublicKeyError(f"Invalid public key bytes: {exc}") from exc
        return cls(verifying_key)

    @classmethod
    def from_string(cls, text: str) -> 'PublicKey':
        """Parse a PUB_K1_ or legacy EOS public key string"""
        if text.startswith(PUBLIC_PREFIX):
            payload = _split_typed(_PUBLIC_RE, text, InvalidPublicKeyError)
            return cls.from_bytes(check_decode(payload, KEY_TYPE))
        if text.startswith(LEGACY_PUBLIC_PREFIX):
            return cls.from_bytes(check_decode(text[len(LEGACY_PUBLIC_PREFIX):]))
        raise InvalidPublicKeyError("Expecting public key like: PUB_K1_base58pubkey..")

    @classmethod
    def resolve(cls, key_like: Union['PublicKey', VerifyingKey, bytes, str]) -> 'PublicKey':
        """
        Resolve any supported public key representation

        Raises:
            InvalidPublicKeyError: If key_like does not describe a curve point
        """
        if isinstance(key_like, PublicKey):
            return key_like
        if isinstance(key_like, VerifyingKey):
            return cls.from_point(key_like.pubkey.point)
        try:
            if isinstance(key_like, str):
                return cls.from_string(key_like)
            if isinstance(key_like, (bytes, bytearray, memoryview)):
                return cls.from_bytes(key_like)
        except InvalidPublicKeyError:
            raise
        except EccError as exc:
            raise InvalidPublicKeyError(str(exc)) from exc
        raise InvalidPublicKeyError(f"Unsupported public key type: {type(key_like).__name__}")

    @property
    def verifying_key(self) -> VerifyingKey:
        return self._verifying_key

    @property
    def point(self):
        """The public point in affine coordinates"""
        return self._verifying_key.pubkey.point.to_affine()

    def to_bytes(self) -> bytes:
        """33 byte compressed SEC1 encoding"""
        return self._verifying_key.to_string("compressed")

    def to_string(self) -> str:
        return PUBLIC_PREFIX + KEY_TYPE + "_" + check_encode(self.to_bytes(), KEY_TYPE)

    def to_legacy_string(self, prefix: str = LEGACY_PUBLIC_PREFIX) -> str:
        return prefix + check_encode(self.to_bytes())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PublicKey({self.to_string()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


class PrivateKey:
    """A secp256k1 private key holding its secret scalar"""

    def __init__(self, scalar: int):
        if not 0 < scalar < K1Curve.N:
            raise InvalidPrivateKeyError("Secret scalar outside curve order")
        self._scalar = scalar

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PrivateKey':
        if len(data) != K1Curve.COORD_BYTES:
            raise InvalidPrivateKeyError("Private key must be exactly 32 bytes")
        return cls(int.from_bytes(data, byteorder='big'))

    @classmethod
    def from_wif(cls, text: str) -> 'PrivateKey':
        """Parse a legacy wallet import format key"""
        data = wif_decode(text)
        if len(data) != K1Curve.COORD_BYTES + 1 or data[0] != WIF_VERSION:
            raise InvalidPrivateKeyError("Expected WIF version 0x80 followed by 32 key bytes")
        return cls.from_bytes(data[1:])

    @classmethod
    def from_string(cls, text: str) -> 'PrivateKey':
        """Parse a PVT_K1_ or legacy WIF private key string"""
        if text.startswith(PRIVATE_PREFIX):
            payload = _split_typed(_PRIVATE_RE, text, InvalidPrivateKeyError)
            return cls.from_bytes(check_decode(payload, KEY_TYPE))
        return cls.from_wif(text)

    @classmethod
    def resolve(cls, key_like: Union['PrivateKey', SigningKey, int, bytes, str]) -> 'PrivateKey':
        """
        Resolve any supported private key representation

        Raises:
            InvalidPrivateKeyError: If key_like is not a usable private key
        """
        if isinstance(key_like, PrivateKey):
            return key_like
        if isinstance(key_like, SigningKey):
            return cls(key_like.privkey.secret_multiplier)
        try:
            if isinstance(key_like, int) and not isinstance(key_like, bool):
                return cls(key_like)
            if isinstance(key_like, str):
                return cls.from_string(key_like)
            if isinstance(key_like, (bytes, bytearray, memoryview)):
                return cls.from_bytes(bytes(key_like))
        except InvalidPrivateKeyError:
            raise
        except EccError as exc:
            raise InvalidPrivateKeyError(str(exc)) from exc
        raise InvalidPrivateKeyError(f"Unsupported private key type: {type(key_like).__name__}")

    @property
    def scalar(self) -> int:
        return self._scalar

    def to_bytes(self) -> bytes:
        return self._scalar.to_bytes(K1Curve.COORD_BYTES, byteorder='big')

    def to_wif(self) -> str:
        return wif_encode(bytes([WIF_VERSION]) + self.to_bytes())

    def to_string(self) -> str:
        return PRIVATE_PREFIX + KEY_TYPE + "_" + check_encode(self.to_bytes(), KEY_TYPE)

    def to_public(self) -> PublicKey:
        """Derive the matching public key (scalar * G)"""
        return PublicKey.from_point(secp256k1.public_point(self._scalar))

    def __repr__(self) -> str:
        # Never print the secret
        return "PrivateKey(<hidden>)"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self._scalar == other._scalar

    def __hash__(self) -> int:
        return hash(self._scalar)
