"""Key model type definitions for keyconvert."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Union

from ..exceptions import UnknownEncodingError
from ..types.common import HexStr, PublicKeyBytes

__all__ = [
    "CurveFamily",
    "KeyFormat",
    "KeyType",
    "KeyUsage",
    "PublicPoint",
    "KeyHandle",
    "CanonicalKey",
    "KeyInput",
]


class CurveFamily(str, Enum):
    """Curve families, valued by their JWK key type tag."""
    
    EC = "EC"    # short-Weierstrass
    OKP = "OKP"  # Edwards


class KeyType(str, Enum):
    """Key half selected for an export."""
    
    PRIVATE = "private"
    PUBLIC = "public"


class KeyUsage(str, Enum):
    """Capability tags a key may be used for."""
    
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    SIGN = "sign"
    VERIFY = "verify"
    DERIVE_KEY = "deriveKey"
    DERIVE_BITS = "deriveBits"
    WRAP_KEY = "wrapKey"
    UNWRAP_KEY = "unwrapKey"


class KeyFormat(str, Enum):
    """Serialization formats understood by import and export."""
    
    HEX = "hex"
    RAW = "raw"
    RAW_PRIVATE = "raw:private"
    BIP39 = "bip39"
    WIF = "wif"
    SSH = "ssh"
    PKCS1 = "pkcs1"
    PKCS8 = "pkcs8"
    SPKI = "spki"
    JWK = "jwk"
    
    @classmethod
    def parse(cls, value: Union["KeyFormat", str]) -> "KeyFormat":
        """
        Resolve a format name or alias.
        
        Args:
            value: Format member, name, or alias (mnemonic, legacy-wallet, structured)
            
        Returns:
            Matching KeyFormat
            
        Raises:
            UnknownEncodingError: If the name is not recognized
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownEncodingError(f"Unknown Private Key Encoding: {value!r}")
            
        name = value.strip().lower()
        name = _FORMAT_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError as e:
            raise UnknownEncodingError(f"Unknown Private Key Encoding: {value}") from e
        
    @property
    def label(self) -> str:
        """Human readable format name used in error messages."""
        return _FORMAT_LABELS.get(self, self.value)


_FORMAT_ALIASES = {
    "mnemonic": "bip39",
    "legacy-wallet": "wif",
    "structured": "jwk",
}

_FORMAT_LABELS = {
    KeyFormat.BIP39: "bip39 (mnemonic)",
    KeyFormat.WIF: "wif (legacy-wallet)",
    KeyFormat.JWK: "jwk (structured)",
}


@dataclass(frozen=True)
class PublicPoint:
    """
    Explicit public key representation.
    
    For the EC family ``x`` and ``y`` are the affine coordinates and
    ``compressed`` is the SEC1 compressed point. For the OKP family the
    pair holds the first and second half of the encoded point, which is
    also stored whole in ``compressed``.
    """
    
    family: CurveFamily
    compressed: PublicKeyBytes
    x: bytes
    y: bytes
    
    @property
    def encoded(self) -> bytes:
        """Uncompressed SEC1 point for EC, the encoded point for OKP."""
        if self.family == CurveFamily.EC:
            return b"\x04" + self.x + self.y
        return self.x + self.y
        
    def hex(self) -> HexStr:
        """Get encoded point as hex string."""
        return HexStr(self.encoded.hex())


@dataclass(frozen=True)
class KeyHandle:
    """
    Provider key handle.
    
    ``key`` holds the provider's native key object and is only
    interpreted by the provider that issued it.
    """
    
    key: Any
    type: KeyType
    curve: str
    extractable: bool
    usages: FrozenSet[KeyUsage]
    
    @property
    def is_private(self) -> bool:
        """Check if handle refers to private key material."""
        return self.type == KeyType.PRIVATE
        
    def __repr__(self) -> str:
        """String representation."""
        return f"KeyHandle(type={self.type.value}, curve={self.curve})"


@dataclass(frozen=True)
class CanonicalKey:
    """Committed key pair shared by every conversion."""
    
    curve: str
    family: CurveFamily
    algorithm: str
    extractable: bool
    usages: FrozenSet[KeyUsage]
    private_handle: Optional[KeyHandle]
    public_handle: Optional[KeyHandle] = None
    public_point: Optional[PublicPoint] = None
    private_scalar: Optional[bytes] = None
    
    @property
    def has_private_key(self) -> bool:
        """Check if private key material is committed."""
        return self.private_handle is not None
        
    @property
    def has_public_key(self) -> bool:
        """Check if a public key is committed."""
        return self.public_handle is not None and self.public_point is not None
        
    def __repr__(self) -> str:
        """String representation."""
        public = self.public_point.hex()[:8] if self.public_point else None
        return f"CanonicalKey(curve={self.curve}, public={public})"


KeyInput = Union[KeyHandle, bytes, bytearray, str, Dict[str, Any]]
"""Accepted import input: handle, raw bytes, text, or structured key object."""
