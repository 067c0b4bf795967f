"""
Logic to read and write the fixed-width integers of the signature wire format

All multi-byte integers are unsigned and big-endian. Readers return
(value, new_offset) so they can be chained over a single buffer.
"""

from typing import Tuple
import struct
from io import BytesIO

from .errors import InvalidLengthError

# Width of r and s on the wire
U256_BYTES = 32


def read_u8(data: bytes, offset: int) -> Tuple[int, int]:
    """Read a u8 from bytes at offset, return (value, new_offset)"""
    if offset >= len(data):
        raise InvalidLengthError("Not enough data for u8")
    return data[offset], offset + 1


def read_u256(data: bytes, offset: int) -> Tuple[int, int]:
    """Read a 32-byte unsigned integer from bytes at offset in big-endian format"""
    if offset + U256_BYTES > len(data):
        raise InvalidLengthError("Not enough data for u256")
    value = int.from_bytes(data[offset:offset + U256_BYTES], byteorder='big')
    return value, offset + U256_BYTES


def write_u8(out: BytesIO, value: int):
    """Write a single unsigned byte to output stream"""
    out.write(struct.pack('B', value))


def u256_to_bytes(value: int) -> bytes:
    """
    Encode an unsigned integer as exactly 32 big-endian bytes

    Leading zero bytes are kept so the encoding never shortens.
    """
    if value < 0 or value.bit_length() > U256_BYTES * 8:
        raise InvalidLengthError("Integer does not fit in 32 bytes")
    return value.to_bytes(U256_BYTES, byteorder='big')


def write_u256(out: BytesIO, value: int):
    """Write a 32-byte zero-padded big-endian integer to output stream"""
    out.write(u256_to_bytes(value))
