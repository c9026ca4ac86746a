"""Common type definitions for keyconvert."""

from typing import Any, Dict, NewType

__all__ = [
    "HexStr",
    "Base64UrlStr",
    "Address",
    "Mnemonic",
    "WIF",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "JsonWebKey",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

Base64UrlStr = NewType("Base64UrlStr", str)
"""Unpadded url-safe base64 string."""

Address = NewType("Address", str)
"""Bitcoin address string."""

Mnemonic = NewType("Mnemonic", str)
"""Space separated BIP39 word sequence."""

WIF = NewType("WIF", str)
"""Wallet Import Format private key."""

# Crypto types
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""Private scalar bytes."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""Encoded public point."""

# Type aliases
JsonWebKey = Dict[str, Any]
"""RFC 7517 JSON Web Key as a plain mapping."""
