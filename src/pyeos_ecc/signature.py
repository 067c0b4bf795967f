"""
Canonical ECDSA signatures over secp256k1 with recoverable public keys

A signature is the triple (r, s, i) where i is the recovery header byte.
It is stored on the wire as 65 bytes:

    offset 0      : 1 byte   recovery header, 27..34
    offset 1..32  : 32 bytes r, big-endian, zero-padded
    offset 33..64 : 32 bytes s, big-endian, zero-padded

and as text as SIG_K1_<base58check(buffer, "K1")>.

Signing always produces low-s signatures with a header in 31..34, while
parsing accepts the whole 27..34 range produced by older signers.
"""

import re
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Union

import structlog

from .base58check import check_decode, check_encode
from .crypto import secp256k1
from .crypto.hash import sha256
from .errors import (
    DigestLengthError,
    EccError,
    FormatError,
    InvalidLengthError,
    InvalidRecoveryIdError,
    MissingFieldError,
    UnsupportedCurveTypeError,
)
from .keys import PrivateKey, PublicKey
from .ser import read_u8, read_u256, write_u8, write_u256

logger = structlog.get_logger("pyeos_ecc.signature")

KEY_TYPE = "K1"
SIGNATURE_PREFIX = "SIG_"
SIGNATURE_LENGTH = 65
DIGEST_LENGTH = 32

# Text payloads are encoded with this before hashing
DEFAULT_ENCODING = "utf-8"
# Digests given as text are decoded with this
DIGEST_ENCODING = "hex"

# Lowest valid header byte; only the low 3 bits above it carry information
RECOVERY_HEADER_BASE = 27
# Header written by the signer: base + 4 (compressed public key)
RECOVERY_HEADER_OFFSET = 31

_SIGNATURE_RE = re.compile(r"^SIG_([A-Za-z0-9]+)_([A-Za-z0-9]+)$")


def _payload_bytes(data: Union[str, bytes], encoding: str) -> bytes:
    if isinstance(data, str):
        return data.encode(encoding)
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data is a required str or bytes")
    return bytes(data)


def _digest_bytes(digest: Union[str, bytes], encoding: str) -> bytes:
    if isinstance(digest, str):
        try:
            digest = bytes.fromhex(digest) if encoding == "hex" else digest.encode(encoding)
        except ValueError as exc:
            raise DigestLengthError(f"digest: 32 byte {encoding} string required") from exc
    elif not isinstance(digest, (bytes, bytearray, memoryview)):
        raise TypeError("digest is a required str or bytes")
    digest = bytes(digest)
    if len(digest) != DIGEST_LENGTH:
        raise DigestLengthError(f"digest: 32 bytes required, got {len(digest)}")
    return digest


def _check_recovery_id(i: int):
    # Only the low 3 bits above the base may be set
    if i - RECOVERY_HEADER_BASE != (i - RECOVERY_HEADER_BASE) & 7:
        raise InvalidRecoveryIdError(f"Invalid signature parameter: {i}")


@dataclass(frozen=True)
class Signature:
    """
    An immutable secp256k1 signature with its recovery header

    Construct it with from_buffer, from_hex, from_string or by signing. Direct
    construction trusts the caller and only rejects missing fields.
    """
    r: int
    s: int
    recovery_id: int

    def __post_init__(self):
        for name in ("r", "s", "recovery_id"):
            if getattr(self, name) is None:
                raise MissingFieldError(f"Missing parameter: {name}")

    # Signing

    @classmethod
    def sign(cls, data: Union[str, bytes], private_key,
             encoding: str = DEFAULT_ENCODING) -> 'Signature':
        """
        Hash and sign arbitrary data

        Args:
            data: Full data; str is encoded with encoding first
            private_key: Anything PrivateKey.resolve accepts
            encoding: Text encoding for str data

        Returns:
            Canonical signature over sha256(data)
        """
        return cls.sign_hash(sha256(_payload_bytes(data, encoding)), private_key)

    @classmethod
    def sign_hash(cls, digest: Union[str, bytes], private_key,
                  encoding: str = DIGEST_ENCODING) -> 'Signature':
        """
        Sign a digest of exactly 32 bytes (sha256 of the payload)

        Args:
            digest: 32-byte digest, or a string of it in encoding
            private_key: Anything PrivateKey.resolve accepts
            encoding: Encoding for str digests

        Raises:
            DigestLengthError: If digest is not 32 bytes
            TypeError: If digest is neither str nor bytes
            InvalidPrivateKeyError: If private_key cannot be resolved
        """
        digest = _digest_bytes(digest, encoding)
        key = PrivateKey.resolve(private_key)

        r, s, recovery_param = secp256k1.sign(key.scalar, digest)

        out = BytesIO()
        write_u8(out, recovery_param + RECOVERY_HEADER_OFFSET)
        write_u256(out, r)
        write_u256(out, s)
        signature = cls.from_buffer(out.getvalue())

        logger.debug("signature_signed", recovery_id=signature.recovery_id)
        return signature

    # Binary form

    @classmethod
    def from_buffer(cls, buf: bytes) -> 'Signature':
        """
        Parse the 65-byte wire form

        Raises:
            InvalidLengthError: If buf is not exactly 65 bytes
            InvalidRecoveryIdError: If the header byte is outside 27..34
        """
        buf = bytes(buf)
        if len(buf) != SIGNATURE_LENGTH:
            raise InvalidLengthError(f"Invalid signature length: {len(buf)}")

        i, offset = read_u8(buf, 0)
        _check_recovery_id(i)
        r, offset = read_u256(buf, offset)
        s, offset = read_u256(buf, offset)
        return cls(r, s, i)

    def to_buffer(self) -> bytes:
        out = BytesIO()
        write_u8(out, self.recovery_id)
        write_u256(out, self.r)
        write_u256(out, self.s)
        return out.getvalue()

    @classmethod
    def from_hex(cls, text: str) -> 'Signature':
        try:
            buf = bytes.fromhex(text)
        except (TypeError, ValueError) as exc:
            raise FormatError("Signature hex is not valid hexadecimal") from exc
        return cls.from_buffer(buf)

    def to_hex(self) -> str:
        return self.to_buffer().hex()

    # Text form

    @classmethod
    def from_string_or_throw(cls, text: str) -> 'Signature':
        """
        Parse a signature like SIG_K1_base58signature..

        Raises:
            FormatError: If text is not shaped like SIG_<TYPE>_<payload>
            UnsupportedCurveTypeError: If TYPE is not K1
            ChecksumError: If the payload does not decode
        """
        if not isinstance(text, str):
            raise FormatError("signature must be a string")
        match = _SIGNATURE_RE.match(text)
        if match is None:
            raise FormatError("Expecting signature like: SIG_K1_base58signature..")

        key_type, payload = match.groups()
        if key_type != KEY_TYPE:
            raise UnsupportedCurveTypeError(f"{KEY_TYPE} signature expected, got {key_type}")
        return cls.from_buffer(check_decode(payload, key_type))

    @classmethod
    def from_string(cls, text: str) -> Optional['Signature']:
        """Parse like from_string_or_throw, returning None if text is invalid"""
        try:
            return cls.from_string_or_throw(text)
        except EccError as exc:
            logger.debug("signature_parse_failed", error_type=exc.error_type.value)
            return None

    def to_string(self) -> str:
        text = self.__dict__.get("_text")
        if text is None:
            text = SIGNATURE_PREFIX + KEY_TYPE + "_" + check_encode(self.to_buffer(), KEY_TYPE)
            # Instance attribute outside the dataclass fields, so replace() and
            # astuple() never see it
            object.__setattr__(self, "_text", text)
        return text

    def __str__(self) -> str:
        return self.to_string()

    # Verification and recovery

    def verify(self, data: Union[str, bytes], public_key,
               encoding: str = DEFAULT_ENCODING) -> bool:
        """
        Verify signed data

        Args:
            data: Full data; str is encoded with encoding first
            public_key: Anything PublicKey.resolve accepts
            encoding: Text encoding for str data
        """
        return self.verify_hash(sha256(_payload_bytes(data, encoding)), public_key)

    def verify_hash(self, digest: Union[str, bytes], public_key,
                    encoding: str = DIGEST_ENCODING) -> bool:
        """
        Verify a 32-byte digest against public_key

        Signatures with a high s value are accepted as long as they are
        mathematically valid.

        Raises:
            DigestLengthError: If digest is not 32 bytes
            InvalidPublicKeyError: If public_key cannot be resolved
        """
        digest = _digest_bytes(digest, encoding)
        key = PublicKey.resolve(public_key)
        return secp256k1.verify(digest, self.r, self.s, key.point)

    def recover(self, data: Union[str, bytes],
                encoding: str = DEFAULT_ENCODING) -> PublicKey:
        """Recover the public key used to create this signature over full data"""
        return self.recover_hash(sha256(_payload_bytes(data, encoding)))

    def recover_hash(self, digest: Union[str, bytes],
                     encoding: str = DIGEST_ENCODING) -> PublicKey:
        """
        Recover the public key used to sign a 32-byte digest

        The header's compressed-key bit is ignored: keys are always recovered
        in compressed form.
        """
        digest = _digest_bytes(digest, encoding)
        selector = (self.recovery_id - RECOVERY_HEADER_BASE) & 3
        point = secp256k1.recover_point(digest, self.r, self.s, selector)
        return PublicKey.from_point(point)

    # Source dispatch

    @classmethod
    def from_source(cls, source: 'SignatureSource') -> 'Signature':
        """Build a signature from an explicitly tagged source"""
        if isinstance(source, Signature):
            return source
        if isinstance(source, Raw):
            return cls(source.r, source.s, source.recovery_id)
        if isinstance(source, Hex):
            return cls.from_hex(source.text)
        if isinstance(source, Text):
            return cls.from_string_or_throw(source.text)
        if isinstance(source, Bytes):
            return cls.from_buffer(source.data)
        raise TypeError(f"Unsupported signature source: {type(source).__name__}")


@dataclass(frozen=True)
class Raw:
    r: int
    s: int
    recovery_id: int


@dataclass(frozen=True)
class Hex:
    text: str


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Bytes:
    data: bytes


SignatureSource = Union[Raw, Hex, Text, Bytes]
