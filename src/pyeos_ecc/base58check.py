"""
Checksummed base58 encoding and decoding for keys and signatures

The checksum is the first 4 bytes of RIPEMD-160 over the payload followed by
the curve-type tag (for example b"K1"). Legacy public keys carry no tag and
hash the payload alone. WIF private keys use the double SHA-256 checksum
provided directly by the base58 library.
"""

from typing import Optional

import base58

from .crypto.hash import ripemd160
from .errors import ChecksumError

# Number of checksum bytes appended before encoding
CHECKSUM_BYTES = 4


def checksum(data: bytes, key_type: Optional[str] = None) -> bytes:
    """
    Compute the 4-byte tagged checksum of data

    Args:
        data: Payload bytes
        key_type: Curve-type tag mixed into the checksum, or None for legacy

    Returns:
        4 checksum bytes
    """
    check = data
    if key_type:
        check = data + key_type.encode('ascii')
    return ripemd160(check)[:CHECKSUM_BYTES]


def check_encode(data: bytes, key_type: Optional[str] = None) -> str:
    """
    Encode bytes into a checksummed base58 string

    Args:
        data: Bytes to encode
        key_type: Curve-type tag, or None for the legacy checksum

    Returns:
        Base58 string of data followed by its checksum
    """
    data = bytes(data)
    return base58.b58encode(data + checksum(data, key_type)).decode('ascii')


def check_decode(text: str, key_type: Optional[str] = None) -> bytes:
    """
    Decode a checksummed base58 string, verifying and stripping the checksum

    Args:
        text: Base58 string to decode
        key_type: Curve-type tag the checksum was computed with

    Returns:
        Decoded payload without the checksum

    Raises:
        ChecksumError: If the string is not base58 or the checksum is wrong
    """
    try:
        raw = base58.b58decode(text)
    except ValueError as exc:
        raise ChecksumError(f"Invalid base58 string: {exc}") from exc

    if len(raw) <= CHECKSUM_BYTES:
        raise ChecksumError("Encoded value too short for checksum")

    data, check = raw[:-CHECKSUM_BYTES], raw[-CHECKSUM_BYTES:]
    if checksum(data, key_type) != check:
        raise ChecksumError("Checksum mismatch")
    return data


def wif_encode(data: bytes) -> str:
    """Encode bytes with the double SHA-256 checksum used by WIF"""
    return base58.b58encode_check(bytes(data)).decode('ascii')


def wif_decode(text: str) -> bytes:
    """Decode a double SHA-256 checksummed base58 string"""
    try:
        return base58.b58decode_check(text)
    except ValueError as exc:
        raise ChecksumError(f"Invalid WIF checksum: {exc}") from exc
