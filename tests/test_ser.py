"""
Test cases for fixed-width integer serialization
"""

import os
import sys
import pytest
from io import BytesIO

# Add the src directory to path to import the pyeos_ecc package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pyeos_ecc.errors import InvalidLengthError
from pyeos_ecc.ser import read_u8, read_u256, u256_to_bytes, write_u8, write_u256


def test_read_u8():
    assert read_u8(b"\x1f\x20", 0) == (0x1f, 1)
    assert read_u8(b"\x1f\x20", 1) == (0x20, 2)


def test_read_u8_short_data():
    with pytest.raises(InvalidLengthError):
        read_u8(b"", 0)
    with pytest.raises(InvalidLengthError):
        read_u8(b"\x01", 1)


def test_read_u256():
    data = b"\xff" + bytes(31) + b"\x05"
    assert read_u256(data, 1) == (5, 33)


@pytest.mark.parametrize("length, offset", [(31, 0), (32, 1), (64, 33)])
def test_read_u256_short_data(length, offset):
    with pytest.raises(InvalidLengthError):
        read_u256(bytes(length), offset)


def test_u256_zero_padding():
    assert u256_to_bytes(0) == bytes(32)
    assert u256_to_bytes(1) == bytes(31) + b"\x01"
    assert u256_to_bytes(2 ** 256 - 1) == b"\xff" * 32


@pytest.mark.parametrize("value", [-1, 2 ** 256])
def test_u256_out_of_range(value):
    with pytest.raises(InvalidLengthError):
        u256_to_bytes(value)


def test_writers():
    out = BytesIO()
    write_u8(out, 31)
    write_u256(out, 7)
    assert out.getvalue() == b"\x1f" + bytes(31) + b"\x07"
