"""
keyconvert

Converts elliptic curve key pairs between hex, BIP39 mnemonic, WIF,
PEM/SSH, JWK and provider-native formats, and derives X.509
certificates and Bitcoin addresses from them.
"""

from .converter import KeyConvert
from .constants import Network
from .exceptions import (
    KeyConvertError,
    ValidationError,
    MalformedInputError,
    UnknownEncodingError,
    NoPrivateKeyError,
    MissingPublicKeyError,
    UnsupportedFormatError,
    ProviderError,
    KeyNotExtractableError,
    CryptoError,
)
from .providers import BaseKeyProvider, SoftwareProvider
from .types import (
    CanonicalKey,
    CurveFamily,
    KeyFormat,
    KeyHandle,
    KeyType,
    KeyUsage,
    PublicPoint,
)

__version__ = "1.0.0"

__all__ = [
    # Main object
    "KeyConvert",
    
    # Network
    "Network",
    
    # Providers
    "BaseKeyProvider",
    "SoftwareProvider",
    
    # Exceptions
    "KeyConvertError",
    "ValidationError",
    "MalformedInputError",
    "UnknownEncodingError",
    "NoPrivateKeyError",
    "MissingPublicKeyError",
    "UnsupportedFormatError",
    "ProviderError",
    "KeyNotExtractableError",
    "CryptoError",
    
    # Types
    "CanonicalKey",
    "CurveFamily",
    "KeyFormat",
    "KeyHandle",
    "KeyType",
    "KeyUsage",
    "PublicPoint",
]
