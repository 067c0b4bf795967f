"""
Error taxonomy for signature, key and encoding failures

Every failure raised by this library derives from EccError, so callers that
only want to validate input can catch a single type.
"""

from enum import Enum


class EccError(Exception):
    """An error when constructing, parsing or using signatures and keys"""

    class ErrorType(Enum):
        """Types of errors"""
        GENERIC = "ecc_error"
        MISSING_FIELD = "missing_field"
        DIGEST_LENGTH = "digest_length"
        INVALID_LENGTH = "invalid_length"
        INVALID_RECOVERY_ID = "invalid_recovery_id"
        FORMAT = "format"
        UNSUPPORTED_CURVE_TYPE = "unsupported_curve_type"
        CHECKSUM = "checksum"
        INVALID_PUBLIC_KEY = "invalid_public_key"
        INVALID_PRIVATE_KEY = "invalid_private_key"
        POINT_RECOVERY = "point_recovery"
        NON_CANONICAL = "non_canonical"

    error_type = ErrorType.GENERIC

    def __init__(self, message: str = ""):
        self.message = message
        value = self.error_type.value
        super().__init__(f"{value}: {message}" if message else value)


class MissingFieldError(EccError):
    """A signature was constructed with a missing r, s or recovery id"""
    error_type = EccError.ErrorType.MISSING_FIELD


class DigestLengthError(EccError):
    """A hash input was not exactly 32 bytes"""
    error_type = EccError.ErrorType.DIGEST_LENGTH


class InvalidLengthError(EccError):
    """A binary buffer had the wrong length"""
    error_type = EccError.ErrorType.INVALID_LENGTH


class InvalidRecoveryIdError(EccError):
    """The recovery header byte is outside 27..34"""
    error_type = EccError.ErrorType.INVALID_RECOVERY_ID


class FormatError(EccError):
    """Text or hex input does not have the expected shape"""
    error_type = EccError.ErrorType.FORMAT


class UnsupportedCurveTypeError(EccError):
    """A curve-type tag other than K1 was supplied"""
    error_type = EccError.ErrorType.UNSUPPORTED_CURVE_TYPE


class ChecksumError(EccError):
    """Base58 payload could not be decoded or its checksum did not match"""
    error_type = EccError.ErrorType.CHECKSUM


class InvalidPublicKeyError(EccError):
    error_type = EccError.ErrorType.INVALID_PUBLIC_KEY


class InvalidPrivateKeyError(EccError):
    error_type = EccError.ErrorType.INVALID_PRIVATE_KEY


class PointRecoveryError(EccError):
    """No curve point can be recovered from the signature state"""
    error_type = EccError.ErrorType.POINT_RECOVERY


class NonCanonicalSignatureError(EccError):
    """The curve engine produced a signature with s above half the order"""
    error_type = EccError.ErrorType.NON_CANONICAL
