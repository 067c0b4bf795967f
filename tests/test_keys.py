"""
Test cases for public and private key resolution and encoding
"""

import os
import sys
import hashlib
import pytest

# Add the src directory to path to import the pyeos_ecc package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from ecdsa import SECP256k1, SigningKey

from pyeos_ecc.crypto.secp256k1 import K1Curve
from pyeos_ecc.errors import (
    ChecksumError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    UnsupportedCurveTypeError,
)
from pyeos_ecc.keys import PrivateKey, PublicKey

# eosio development key pair
WIF = "5KQwrPbwdL6PhXujxW37FSSQZ1JiwsST4cqQzDeyXtP79zkvFD3"
PUBLIC = "EOS6MRyAjQq8ud7hVNYcfnVPJqcVpscN5So8BhtHuGYqET5GDW5CV"

GENERATOR_COMPRESSED = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def test_scalar_one_is_generator():
    public = PrivateKey(1).to_public()
    assert public.to_bytes().hex() == GENERATOR_COMPRESSED
    assert (public.point.x(), public.point.y()) == (K1Curve.G_X, K1Curve.G_Y)


def test_development_key_pair():
    assert PrivateKey.from_wif(WIF).to_public().to_legacy_string() == PUBLIC


def test_private_key_text_forms():
    key = PrivateKey.from_wif(WIF)
    assert key.to_wif() == WIF
    assert key.to_string().startswith("PVT_K1_")
    assert PrivateKey.from_string(key.to_string()) == key
    assert PrivateKey.from_string(WIF) == key


def test_public_key_text_forms():
    public = PublicKey.from_string(PUBLIC)
    assert public.to_legacy_string() == PUBLIC
    assert public.to_string().startswith("PUB_K1_")
    assert str(public) == public.to_string()
    assert PublicKey.from_string(public.to_string()) == public


def test_public_key_resolve():
    key = PrivateKey.from_wif(WIF)
    public = key.to_public()
    uncompressed = public.verifying_key.to_string("uncompressed")
    assert len(uncompressed) == 65

    for key_like in (public, PUBLIC, public.to_string(), public.to_bytes(),
                     bytearray(uncompressed), public.verifying_key):
        assert PublicKey.resolve(key_like) == public


@pytest.mark.parametrize("key_like", [
    "",
    "PUB_K1_",
    "EOS",
    "not a key",
    b"\x02" + bytes(31),
    b"\x05" + bytes(32),
    None,
    1.5,
])
def test_public_key_resolve_rejects_invalid(key_like):
    with pytest.raises(InvalidPublicKeyError):
        PublicKey.resolve(key_like)


def test_public_key_other_curve_type():
    public = PublicKey.from_string(PUBLIC)
    text = public.to_string().replace("PUB_K1_", "PUB_R1_")
    with pytest.raises(UnsupportedCurveTypeError):
        PublicKey.from_string(text)
    with pytest.raises(InvalidPublicKeyError):
        PublicKey.resolve(text)


def test_public_key_equality_and_hash():
    a = PrivateKey(5).to_public()
    b = PublicKey.from_bytes(a.to_bytes())
    assert a == b
    assert hash(a) == hash(b)
    assert a != PrivateKey(6).to_public()
    assert len({a, b}) == 1


def test_private_key_resolve():
    key = PrivateKey.from_wif(WIF)
    signing_key = SigningKey.from_secret_exponent(key.scalar, curve=SECP256k1, hashfunc=hashlib.sha256)
    for key_like in (key, key.scalar, key.to_bytes(), bytearray(key.to_bytes()),
                     WIF, key.to_string(), signing_key):
        assert PrivateKey.resolve(key_like) == key


@pytest.mark.parametrize("key_like", [0, K1Curve.N, -1, True, bytes(31), bytes(32), "garbage", None])
def test_private_key_resolve_rejects_invalid(key_like):
    with pytest.raises(InvalidPrivateKeyError):
        PrivateKey.resolve(key_like)


def test_wif_checksum_failure():
    tampered = WIF[:-1] + ("4" if WIF[-1] != "4" else "5")
    with pytest.raises(ChecksumError):
        PrivateKey.from_wif(tampered)
    with pytest.raises(InvalidPrivateKeyError):
        PrivateKey.resolve(tampered)


def test_private_key_repr_hides_secret():
    key = PrivateKey.from_wif(WIF)
    assert WIF not in repr(key)
    assert str(key.scalar) not in repr(key)
