"""
Test cases for the error taxonomy
"""

import os
import sys
import pytest

# Add the src directory to path to import the pyeos_ecc package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pyeos_ecc.errors import (
    ChecksumError,
    EccError,
    FormatError,
    InvalidLengthError,
)


def test_base_error_is_generic():
    assert str(EccError()) == "ecc_error"
    assert str(EccError("boom")) == "ecc_error: boom"
    assert EccError().error_type is EccError.ErrorType.GENERIC


@pytest.mark.parametrize("error_cls, prefix", [
    (FormatError, "format"),
    (ChecksumError, "checksum"),
    (InvalidLengthError, "invalid_length"),
])
def test_subclass_rendering(error_cls, prefix):
    err = error_cls("detail")
    assert isinstance(err, EccError)
    assert str(err) == f"{prefix}: detail"
    assert err.message == "detail"
