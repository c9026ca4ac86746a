"""Software provider backed by the cryptography package."""

import logging
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from ..crypto.curves import CurveAdapter
from ..exceptions import (
    CryptoError,
    KeyNotExtractableError,
    MalformedInputError,
    ProviderError,
    UnsupportedFormatError,
)
from ..providers.base import BaseKeyProvider
from ..types.common import JsonWebKey, PublicKeyBytes
from ..types.key import CurveFamily, KeyFormat, KeyHandle, KeyType, KeyUsage, PublicPoint
from ..utils.encoding import base64url_decode, base64url_encode
from ..utils.validation import validate_jwk

__all__ = ["SoftwareProvider"]

logger = logging.getLogger(__name__)

_EC_CURVES = {
    "secp256k1": ec.SECP256K1,
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}

_EC_HASHES = {
    "secp256k1": hashes.SHA256,
    "P-256": hashes.SHA256,
    "P-384": hashes.SHA384,
    "P-521": hashes.SHA512,
}

_PRIVATE_FORMATS = frozenset({KeyFormat.JWK, KeyFormat.PKCS8, KeyFormat.RAW_PRIVATE})


class SoftwareProvider(BaseKeyProvider):
    """
    In-process provider.
    
    Wraps ``cryptography`` key objects in KeyHandle instances and
    implements JWK, PKCS8, SPKI and raw import/export for the EC curves
    and Ed25519.
    """
    
    def _handle(
        self,
        key: Any,
        curve: CurveAdapter,
        extractable: bool,
        usages: FrozenSet[KeyUsage]
    ) -> KeyHandle:
        is_private = isinstance(key, (ec.EllipticCurvePrivateKey, ed25519.Ed25519PrivateKey))
        return KeyHandle(
            key=key,
            type=KeyType.PRIVATE if is_private else KeyType.PUBLIC,
            curve=curve.jwk_crv,
            extractable=extractable,
            usages=frozenset(usages),
        )
        
    def _check_curve(self, key: Any, curve: CurveAdapter) -> None:
        if curve.family == CurveFamily.EC:
            ok = (
                isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey))
                and isinstance(key.curve, _EC_CURVES[curve.jwk_crv])
            )
        else:
            ok = isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey))
        if not ok:
            raise MalformedInputError(f"Key does not belong to curve {curve.jwk_crv}")
            
    async def generate_key(
        self,
        curve: CurveAdapter,
        extractable: bool,
        usages: FrozenSet[KeyUsage]
    ) -> Tuple[KeyHandle, KeyHandle]:
        """Generate a new key pair."""
        if curve.family == CurveFamily.EC:
            private_key = ec.generate_private_key(_EC_CURVES[curve.jwk_crv]())
        else:
            private_key = ed25519.Ed25519PrivateKey.generate()
            
        self._logger.debug(f"Generated {curve.jwk_crv} key pair")
        return (
            self._handle(private_key, curve, extractable, usages),
            self._handle(private_key.public_key(), curve, extractable, usages),
        )
        
    async def import_key(
        self,
        encoding: KeyFormat,
        data: Union[bytes, JsonWebKey],
        curve: CurveAdapter,
        extractable: bool,
        usages: FrozenSet[KeyUsage]
    ) -> KeyHandle:
        """Import key material."""
        try:
            if encoding == KeyFormat.JWK:
                key = self._import_jwk(data, curve)
            elif encoding == KeyFormat.PKCS8:
                key = serialization.load_der_private_key(bytes(data), password=None)
            elif encoding == KeyFormat.SPKI:
                key = serialization.load_der_public_key(bytes(data))
            elif encoding == KeyFormat.RAW:
                key = self._import_raw_public(bytes(data), curve)
            elif encoding == KeyFormat.RAW_PRIVATE:
                key = self._import_raw_private(bytes(data), curve)
            else:
                raise UnsupportedFormatError(encoding.value, "import")
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            self._logger.error(f"Failed to import {encoding.value} key: {e}")
            raise MalformedInputError(f"Invalid {encoding.value} key data: {e}") from e
            
        self._check_curve(key, curve)
        return self._handle(key, curve, extractable, usages)
        
    def _import_jwk(self, jwk: JsonWebKey, curve: CurveAdapter) -> Any:
        validate_jwk(jwk, curve.kty, curve.jwk_crv)
        d = base64url_decode(jwk["d"]) if jwk.get("d") else None
        x = base64url_decode(jwk["x"]) if jwk.get("x") else b""
        y = base64url_decode(jwk["y"]) if jwk.get("y") else b""
        
        if curve.family == CurveFamily.OKP:
            if d is None:
                return ed25519.Ed25519PublicKey.from_public_bytes(x + y)
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(d)
            if x and self._okp_public_bytes(private_key) != x + y:
                raise ValueError("public coordinates do not match the private key")
            return private_key
            
        ec_curve = _EC_CURVES[curve.jwk_crv]()
        if d is not None and not x:
            # Native import derives the public point
            return ec.derive_private_key(int.from_bytes(d, "big"), ec_curve)
        if not (x and y):
            raise ValueError("EC key requires both x and y coordinates")
            
        public_numbers = ec.EllipticCurvePublicNumbers(
            int.from_bytes(x, "big"), int.from_bytes(y, "big"), ec_curve
        )
        if d is None:
            return public_numbers.public_key()
        return ec.EllipticCurvePrivateNumbers(int.from_bytes(d, "big"), public_numbers).private_key()
        
    def _import_raw_public(self, data: bytes, curve: CurveAdapter) -> Any:
        if curve.family == CurveFamily.OKP:
            return ed25519.Ed25519PublicKey.from_public_bytes(data)
        return ec.EllipticCurvePublicKey.from_encoded_point(_EC_CURVES[curve.jwk_crv](), data)
        
    def _import_raw_private(self, data: bytes, curve: CurveAdapter) -> Any:
        if curve.family == CurveFamily.OKP:
            return ed25519.Ed25519PrivateKey.from_private_bytes(data)
        return ec.derive_private_key(int.from_bytes(data, "big"), _EC_CURVES[curve.jwk_crv]())
        
    @staticmethod
    def _okp_public_bytes(key: Any) -> bytes:
        if isinstance(key, ed25519.Ed25519PrivateKey):
            key = key.public_key()
        return key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        
    async def export_key(
        self,
        encoding: KeyFormat,
        handle: KeyHandle
    ) -> Union[bytes, JsonWebKey]:
        """Export key material."""
        if handle.is_private and not handle.extractable and encoding in _PRIVATE_FORMATS:
            raise KeyNotExtractableError("key is not extractable")
            
        key = handle.key
        if encoding == KeyFormat.JWK:
            return self._export_jwk(handle)
        if encoding == KeyFormat.PKCS8 and handle.is_private:
            return key.private_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        if encoding == KeyFormat.SPKI:
            public_key = key.public_key() if handle.is_private else key
            return public_key.public_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        if encoding == KeyFormat.RAW:
            return (await self.public_point(handle)).encoded
        if encoding == KeyFormat.RAW_PRIVATE and handle.is_private:
            return base64url_decode(self._export_jwk(handle)["d"])
            
        raise UnsupportedFormatError(encoding.value, handle.type.value)
        
    def _export_jwk(self, handle: KeyHandle) -> JsonWebKey:
        key = handle.key
        public_key = key.public_key() if handle.is_private else key
        
        jwk: Dict[str, Any]
        if isinstance(public_key, ed25519.Ed25519PublicKey):
            raw = self._okp_public_bytes(public_key)
            half = len(raw) // 2
            jwk = {
                "kty": CurveFamily.OKP.value,
                "crv": handle.curve,
                "x": base64url_encode(raw[:half]),
                "y": base64url_encode(raw[half:]),
            }
            if handle.is_private:
                jwk["d"] = base64url_encode(key.private_bytes(
                    encoding=serialization.Encoding.Raw,
                    format=serialization.PrivateFormat.Raw,
                    encryption_algorithm=serialization.NoEncryption(),
                ))
        else:
            size = (public_key.curve.key_size + 7) // 8
            numbers = public_key.public_numbers()
            jwk = {
                "kty": CurveFamily.EC.value,
                "crv": handle.curve,
                "x": base64url_encode(numbers.x.to_bytes(size, "big")),
                "y": base64url_encode(numbers.y.to_bytes(size, "big")),
            }
            if handle.is_private:
                d = key.private_numbers().private_value
                jwk["d"] = base64url_encode(d.to_bytes(size, "big"))
                
        jwk["ext"] = handle.extractable
        jwk["key_ops"] = sorted(usage.value for usage in handle.usages)
        return jwk
        
    async def public_point(self, handle: KeyHandle) -> PublicPoint:
        """Get the public point of a handle."""
        key = handle.key
        public_key = key.public_key() if handle.is_private else key
        
        if isinstance(public_key, ed25519.Ed25519PublicKey):
            raw = self._okp_public_bytes(public_key)
            half = len(raw) // 2
            return PublicPoint(
                family=CurveFamily.OKP,
                compressed=PublicKeyBytes(raw),
                x=raw[:half],
                y=raw[half:],
            )
            
        size = (public_key.curve.key_size + 7) // 8
        numbers = public_key.public_numbers()
        return PublicPoint(
            family=CurveFamily.EC,
            compressed=PublicKeyBytes(public_key.public_bytes(
                encoding=serialization.Encoding.X962,
                format=serialization.PublicFormat.CompressedPoint,
            )),
            x=numbers.x.to_bytes(size, "big"),
            y=numbers.y.to_bytes(size, "big"),
        )
        
    async def sign(self, handle: KeyHandle, data: bytes) -> bytes:
        """Sign data with a private handle."""
        if not handle.is_private or KeyUsage.SIGN not in handle.usages:
            raise ProviderError("key does not permit the sign usage")
            
        if isinstance(handle.key, ed25519.Ed25519PrivateKey):
            return handle.key.sign(data)
        return handle.key.sign(data, ec.ECDSA(self.default_hash(handle)))
        
    async def verify(self, handle: KeyHandle, signature: bytes, data: bytes) -> bool:
        """Verify a signature with a handle."""
        key = handle.key.public_key() if handle.is_private else handle.key
        try:
            if isinstance(key, ed25519.Ed25519PublicKey):
                key.verify(signature, data)
            else:
                key.verify(signature, data, ec.ECDSA(self.default_hash(handle)))
            return True
        except InvalidSignature:
            return False
            
    def default_hash(self, handle: KeyHandle) -> Optional[hashes.HashAlgorithm]:
        """Digest paired with the handle's curve, None for Ed25519."""
        if handle.curve not in _EC_HASHES:
            return None
        return _EC_HASHES[handle.curve]()
        
    async def sign_certificate(
        self,
        handle: KeyHandle,
        builder: x509.CertificateBuilder,
        algorithm: Optional[hashes.HashAlgorithm] = None
    ) -> x509.Certificate:
        """Sign a certificate with a private handle."""
        if not handle.is_private or KeyUsage.SIGN not in handle.usages:
            raise ProviderError("key does not permit the sign usage")
            
        if algorithm is None:
            algorithm = self.default_hash(handle)
        try:
            return builder.sign(handle.key, algorithm)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            self._logger.error(f"Certificate signing failed: {e}")
            raise CryptoError(f"Certificate signing failed: {e}") from e
