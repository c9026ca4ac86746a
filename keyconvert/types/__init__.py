"""Type definitions for keyconvert."""

# Common types
from ..types.common import (
    HexStr,
    Base64UrlStr,
    Address,
    Mnemonic,
    WIF,
    PrivateKeyBytes,
    PublicKeyBytes,
    JsonWebKey,
)

# Key model
from ..types.key import (
    CurveFamily,
    KeyFormat,
    KeyType,
    KeyUsage,
    PublicPoint,
    KeyHandle,
    CanonicalKey,
    KeyInput,
)

__all__ = [
    # Common
    "HexStr",
    "Base64UrlStr",
    "Address",
    "Mnemonic",
    "WIF",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "JsonWebKey",
    
    # Key model
    "CurveFamily",
    "KeyFormat",
    "KeyType",
    "KeyUsage",
    "PublicPoint",
    "KeyHandle",
    "CanonicalKey",
    "KeyInput",
]
