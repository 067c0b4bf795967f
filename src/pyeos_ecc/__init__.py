"""
Python EOS ECC Signature Library

Canonical secp256k1 ECDSA signatures with recoverable public keys, as used to
authenticate payloads in EOSIO-style identity schemes. Signatures round-trip
byte-exact through a fixed 65-byte wire form, lowercase hex, and the
checksummed SIG_K1_ text form shared with other implementations.

Example:
    >>> from pyeos_ecc import PrivateKey, Signature
    >>> key = PrivateKey.from_wif("5KQwrPbwdL6PhXujxW37FSSQZ1JiwsST4cqQzDeyXtP79zkvFD3")
    >>> sig = Signature.sign("hello", key)
    >>> sig.verify("hello", key.to_public())
    True
"""

from .signature import (
    Signature,
    SignatureSource,
    Raw,
    Hex,
    Text,
    Bytes,
)

from .keys import (
    PublicKey,
    PrivateKey
)

from .base58check import (
    check_encode,
    check_decode
)

from .errors import (
    EccError,
    MissingFieldError,
    DigestLengthError,
    InvalidLengthError,
    InvalidRecoveryIdError,
    FormatError,
    UnsupportedCurveTypeError,
    ChecksumError,
    InvalidPublicKeyError,
    InvalidPrivateKeyError,
    PointRecoveryError,
    NonCanonicalSignatureError
)

__version__ = "0.1.0"

__all__ = [
    # Signatures
    "Signature",
    "SignatureSource",
    "Raw",
    "Hex",
    "Text",
    "Bytes",

    # Keys
    "PublicKey",
    "PrivateKey",

    # Base58 check encoding
    "check_encode",
    "check_decode",

    # Errors
    "EccError",
    "MissingFieldError",
    "DigestLengthError",
    "InvalidLengthError",
    "InvalidRecoveryIdError",
    "FormatError",
    "UnsupportedCurveTypeError",
    "ChecksumError",
    "InvalidPublicKeyError",
    "InvalidPrivateKeyError",
    "PointRecoveryError",
    "NonCanonicalSignatureError",
]
