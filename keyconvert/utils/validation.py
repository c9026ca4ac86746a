"""Validation utilities for keyconvert."""

import re
from typing import FrozenSet, Iterable, Union

from ..exceptions import MalformedInputError, ValidationError
from ..types.common import HexStr
from ..types.key import KeyUsage

__all__ = [
    "is_valid_hex",
    "validate_hex_scalar",
    "validate_usages",
    "validate_jwk",
]

# Regex patterns
HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def is_valid_hex(value: str) -> bool:
    """
    Check if string is an even-length hex string.
    
    Args:
        value: String to check, 0x prefix allowed
        
    Returns:
        True if valid, False otherwise
    """
    if not isinstance(value, str):
        return False
    if value.startswith("0x"):
        value = value[2:]
    return bool(value) and len(value) % 2 == 0 and bool(HEX_PATTERN.match(value))


def validate_hex_scalar(key: Union[str, bytes, bytearray]) -> HexStr:
    """
    Validate a private scalar and return it as lowercase hex.
    
    Args:
        key: Scalar as hex string or raw bytes
        
    Returns:
        Lowercase hex string without prefix
        
    Raises:
        MalformedInputError: If the scalar is empty or not hexadecimal
    """
    if isinstance(key, (bytes, bytearray)):
        if not key:
            raise MalformedInputError("Private key is empty")
        return HexStr(bytes(key).hex())
        
    key = key.strip()
    if not is_valid_hex(key):
        raise MalformedInputError("Private key must be non-empty, even-length hexadecimal")
    if key.startswith("0x"):
        key = key[2:]
    return HexStr(key.lower())


def validate_usages(usages: Iterable[Union[KeyUsage, str]]) -> FrozenSet[KeyUsage]:
    """
    Validate key usage tags.
    
    Args:
        usages: Usage tags or KeyUsage members
        
    Returns:
        Frozen set of KeyUsage
        
    Raises:
        ValidationError: If a tag is unknown
    """
    if isinstance(usages, str):
        usages = [usages]
        
    result = set()
    for usage in usages:
        try:
            result.add(KeyUsage(usage))
        except ValueError as e:
            raise ValidationError(f"Unknown key usage: {usage}") from e
    return frozenset(result)


def validate_jwk(jwk: dict, kty: str, crv: str) -> dict:
    """
    Validate structured key object fields against a curve.
    
    Args:
        jwk: Structured key object
        kty: Expected key type tag
        crv: Expected curve name
        
    Returns:
        The key object
        
    Raises:
        MalformedInputError: If the object does not describe a key on the curve
    """
    if not isinstance(jwk, dict):
        raise MalformedInputError(f"Structured key must be an object, got {type(jwk).__name__}")
    if jwk.get("kty") != kty:
        raise MalformedInputError(f"Expected kty {kty}, got {jwk.get('kty')}")
    if jwk.get("crv") != crv:
        raise MalformedInputError(f"Expected crv {crv}, got {jwk.get('crv')}")
    for field in ("d", "x", "y"):
        if field in jwk and not isinstance(jwk[field], str):
            raise MalformedInputError(f"Field {field} must be a base64url string")
    return jwk
