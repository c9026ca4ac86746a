"""Curve classification and Edwards point derivation."""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from ..constants import EC_CURVE_MARKERS
from ..exceptions import MalformedInputError, ValidationError
from ..types.common import HexStr, JsonWebKey
from ..types.key import CurveFamily, PublicPoint
from ..utils.encoding import base64url_encode, hex_to_bytes

__all__ = ["CurveAdapter", "SUPPORTED_CURVES"]

logger = logging.getLogger(__name__)

# Accepted names -> (JWK crv, scalar/coordinate size in bytes)
SUPPORTED_CURVES: Dict[str, tuple] = {
    "secp256k1": ("secp256k1", 32),
    "p-256": ("P-256", 32),
    "secp256r1": ("P-256", 32),
    "prime256v1": ("P-256", 32),
    "p-384": ("P-384", 48),
    "secp384r1": ("P-384", 48),
    "p-521": ("P-521", 66),
    "secp521r1": ("P-521", 66),
    "ed25519": ("Ed25519", 32),
}

_DEFAULT_ALGORITHMS = {
    CurveFamily.EC: "ECDSA",
    CurveFamily.OKP: "EdDSA",
}


class CurveAdapter:
    """
    Configured curve.
    
    Classifies the curve into the short-Weierstrass (EC) or Edwards (OKP)
    family by name. Only the OKP family derives public points here; EC
    point derivation is left to the provider's native import.
    """
    
    def __init__(self, named_curve: Union[str, Mapping[str, Any], "CurveAdapter"]) -> None:
        """
        Initialize curve adapter.
        
        Args:
            named_curve: Curve name, or a mapping with a ``namedCurve`` entry
            
        Raises:
            ValidationError: If the curve is not supported
        """
        if isinstance(named_curve, CurveAdapter):
            named_curve = named_curve.name
        elif isinstance(named_curve, Mapping):
            named_curve = named_curve.get("namedCurve")
            
        if not isinstance(named_curve, str) or named_curve.lower() not in SUPPORTED_CURVES:
            raise ValidationError(f"Unsupported curve: {named_curve}")
            
        self.name = named_curve
        self.jwk_crv, self.size = SUPPORTED_CURVES[named_curve.lower()]
        self.family = self.classify(named_curve)
        
    @staticmethod
    def classify(name: str) -> CurveFamily:
        """
        Classify a curve name into its family.
        
        Args:
            name: Curve name
            
        Returns:
            CurveFamily.EC for short-Weierstrass names, else CurveFamily.OKP
        """
        lowered = name.lower()
        if any(marker in lowered for marker in EC_CURVE_MARKERS):
            return CurveFamily.EC
        return CurveFamily.OKP
        
    @property
    def kty(self) -> str:
        """Structured key-object type tag."""
        return self.family.value
        
    @property
    def is_edwards(self) -> bool:
        """Check if curve belongs to the Edwards family."""
        return self.family == CurveFamily.OKP
        
    @property
    def default_algorithm(self) -> str:
        """Signing algorithm bound to the curve family."""
        return _DEFAULT_ALGORITHMS[self.family]
        
    def derive_public_point(self, secret: bytes) -> bytes:
        """
        Derive the encoded public point of an Edwards private key.
        
        Args:
            secret: 32-byte private seed
            
        Returns:
            Encoded public point (64 hex digits)
            
        Raises:
            ValidationError: If called for a short-Weierstrass curve
            MalformedInputError: If the seed is rejected
        """
        if not self.is_edwards:
            raise ValidationError(f"Point derivation for {self.name} is left to the provider")
            
        try:
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(secret)
        except ValueError as e:
            logger.error(f"Edwards point derivation failed: {e}")
            raise MalformedInputError(f"Invalid {self.name} private key: {e}") from e
            
        return private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        
    def split_point(self, point: bytes) -> tuple:
        """Split an encoded point into its first and second half."""
        half = len(point) // 2
        return point[:half], point[half:]
        
    def to_jwk(
        self,
        private_hex: Optional[HexStr] = None,
        x: Optional[bytes] = None,
        y: Optional[bytes] = None
    ) -> JsonWebKey:
        """
        Build a structured key object (RFC 7517) for this curve.
        
        Args:
            private_hex: Private scalar as hex
            x: First coordinate bytes
            y: Second coordinate bytes
            
        Returns:
            Structured key object with the fields that are known
        """
        jwk: JsonWebKey = {"kty": self.kty, "crv": self.jwk_crv}
        if private_hex is not None:
            jwk["d"] = base64url_encode(hex_to_bytes(private_hex))
        if x:
            jwk["x"] = base64url_encode(x)
        if y:
            jwk["y"] = base64url_encode(y)
        return jwk
        
    def point_to_jwk(self, point: PublicPoint) -> JsonWebKey:
        """Build a public structured key object from a public point."""
        return self.to_jwk(x=point.x, y=point.y)
        
    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, CurveAdapter):
            return False
        return self.jwk_crv == other.jwk_crv
        
    def __hash__(self) -> int:
        """Hash by curve identity."""
        return hash(self.jwk_crv)
        
    def __repr__(self) -> str:
        """String representation."""
        return f"CurveAdapter({self.name}, family={self.family.value})"
