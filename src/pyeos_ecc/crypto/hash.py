"""
Simple wrapper around the hash functions used by signatures and key encodings,
providing a single type which can calculate either of them.
"""

import hashlib

from Crypto.Hash import RIPEMD160


def _ripemd160_factory():
    # hashlib only exposes ripemd160 when OpenSSL still ships it
    return RIPEMD160.new()


_FACTORIES = {
    'sha256': hashlib.sha256,
    'ripemd160': _ripemd160_factory,
}


class HashResult:
    """Container for hash results that can return bytes via as_ref()"""

    def __init__(self, hash_bytes: bytes):
        self._bytes = hash_bytes

    def as_ref(self) -> bytes:
        """Return the hash bytes"""
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)


class Hasher:
    """Hash engine that supports SHA256 and RIPEMD160"""

    def __init__(self, algorithm: str):
        if algorithm not in _FACTORIES:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        self._algorithm = algorithm
        self._hasher = _FACTORIES[algorithm]()

    @classmethod
    def sha256(cls) -> 'Hasher':
        """Create a SHA256 hasher"""
        return cls('sha256')

    @classmethod
    def ripemd160(cls) -> 'Hasher':
        """Create a RIPEMD160 hasher"""
        return cls('ripemd160')

    def update(self, data: bytes) -> None:
        """Update the hasher with new data"""
        self._hasher.update(data)

    def finish(self) -> HashResult:
        """Finalize the hash and return the result"""
        return HashResult(self._hasher.digest())


def sha256(data: bytes) -> bytes:
    """Compute the 32-byte SHA-256 digest of raw bytes"""
    hasher = Hasher.sha256()
    hasher.update(data)
    return hasher.finish().as_ref()


def ripemd160(data: bytes) -> bytes:
    """Compute the 20-byte RIPEMD-160 digest of raw bytes"""
    hasher = Hasher.ripemd160()
    hasher.update(data)
    return hasher.finish().as_ref()
