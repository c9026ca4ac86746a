import pytest

from keyconvert.crypto.curves import CurveAdapter
from keyconvert.exceptions import MalformedInputError, ValidationError
from keyconvert.types.key import CurveFamily
from keyconvert.utils.encoding import base64url_decode

from vectors import ED25519_PUBLIC, ED25519_SEED


def test_curve_classification():
    assert CurveAdapter.classify("secp256k1") == CurveFamily.EC
    assert CurveAdapter.classify("P-384") == CurveFamily.EC
    assert CurveAdapter.classify("prime256v1") == CurveFamily.EC
    assert CurveAdapter.classify("Ed25519") == CurveFamily.OKP


def test_curve_configuration():
    curve = CurveAdapter({"name": "ECDSA", "namedCurve": "secp256r1"})
    assert curve.jwk_crv == "P-256"
    assert curve.kty == "EC"
    assert curve.size == 32
    assert curve.default_algorithm == "ECDSA"
    assert curve == CurveAdapter("P-256")
    assert len({curve, CurveAdapter("secp256r1"), CurveAdapter("prime256v1")}) == 1

    edwards = CurveAdapter("ed25519")
    assert edwards.jwk_crv == "Ed25519"
    assert edwards.is_edwards
    assert edwards.default_algorithm == "EdDSA"

    with pytest.raises(ValidationError):
        CurveAdapter("brainpoolP256r1")
    with pytest.raises(ValidationError):
        CurveAdapter({"name": "ECDSA"})


def test_edwards_point_matches_reference():
    curve = CurveAdapter("Ed25519")
    point = curve.derive_public_point(bytes.fromhex(ED25519_SEED))
    assert point.hex() == ED25519_PUBLIC
    assert len(point.hex()) == 64

    x, y = curve.split_point(point)
    assert x + y == point
    assert len(x) == len(y) == 16


def test_edwards_point_rejects_bad_seed():
    with pytest.raises(MalformedInputError):
        CurveAdapter("Ed25519").derive_public_point(b"\x01" * 31)
    with pytest.raises(ValidationError):
        CurveAdapter("secp256k1").derive_public_point(b"\x01" * 32)


def test_jwk_building():
    curve = CurveAdapter("secp256k1")
    jwk = curve.to_jwk("01" * 32)
    assert jwk == {"kty": "EC", "crv": "secp256k1", "d": jwk["d"]}
    assert base64url_decode(jwk["d"]) == b"\x01" * 32

    jwk = curve.to_jwk("01" * 32, b"\x02", b"\x03")
    assert base64url_decode(jwk["x"]) == b"\x02"
    assert base64url_decode(jwk["y"]) == b"\x03"
