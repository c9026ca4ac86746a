"""Utility helpers for keyconvert."""

from ..utils.encoding import (
    hex_to_bytes,
    base64url_encode,
    base64url_decode,
    hash160,
    encode_base58_check,
    decode_base58_check,
    encode_wif,
    decode_wif,
    encode_p2pkh_address,
)
from ..utils.validation import (
    is_valid_hex,
    validate_hex_scalar,
    validate_usages,
    validate_jwk,
)

__all__ = [
    # Encoding
    "hex_to_bytes",
    "base64url_encode",
    "base64url_decode",
    "hash160",
    "encode_base58_check",
    "decode_base58_check",
    "encode_wif",
    "decode_wif",
    "encode_p2pkh_address",
    
    # Validation
    "is_valid_hex",
    "validate_hex_scalar",
    "validate_usages",
    "validate_jwk",
]
