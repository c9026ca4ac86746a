"""Encoding and decoding utilities for keyconvert."""

import base64
import binascii
import hashlib
import re
from typing import Tuple, Union

import base58

from ..constants import (
    Network,
    P2PKH_VERSIONS,
    WIF_COMPRESSED_FLAG,
    WIF_SCALAR_LENGTH,
    WIF_VERSIONS,
)
from ..exceptions import MalformedInputError, ValidationError
from ..types.common import Address, Base64UrlStr, HexStr, WIF

__all__ = [
    "hex_to_bytes",
    "base64url_encode",
    "base64url_decode",
    "hash160",
    "encode_base58_check",
    "decode_base58_check",
    "encode_wif",
    "decode_wif",
    "encode_p2pkh_address",
]

_BASE64URL_PATTERN = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.
    
    Args:
        hex_str: Hex string with or without 0x prefix
        
    Returns:
        Decoded bytes
        
    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        # Remove 0x prefix if present
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def base64url_encode(data: bytes) -> Base64UrlStr:
    """Encode bytes as unpadded url-safe base64 (RFC 7515 section 2)."""
    return Base64UrlStr(base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii"))


def base64url_decode(value: str) -> bytes:
    """
    Decode unpadded url-safe base64.
    
    Args:
        value: Encoded string, padding optional
        
    Returns:
        Decoded bytes
        
    Raises:
        MalformedInputError: If value is not valid base64url
    """
    if not isinstance(value, str):
        raise MalformedInputError(f"Expected base64url string, got {type(value).__name__}")
    if not _BASE64URL_PATTERN.fullmatch(value):
        raise MalformedInputError(f"Invalid base64url value: {value!r}")
        
    padded = value.rstrip("=")
    padded += "=" * (-len(padded) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(f"Invalid base64url value: {e}") from e


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    sha256_hash = hashlib.sha256(data).digest()
    return hashlib.new("ripemd160", sha256_hash).digest()

def encode_base58_check(data: bytes) -> str:
    """
    Encode bytes as Base58Check (with checksum).
    
    Args:
        data: Bytes to encode
        
    Returns:
        Base58Check encoded string
    """
    return base58.b58encode_check(data).decode("ascii")


def decode_base58_check(string: str) -> bytes:
    """
    Decode Base58Check string.
    
    Args:
        string: Base58Check string
        
    Returns:
        Decoded data (without checksum)
        
    Raises:
        MalformedInputError: If string is not valid Base58Check
    """
    try:
        return base58.b58decode_check(string.strip())
    except ValueError as e:
        raise MalformedInputError(f"Invalid Base58Check string: {e}") from e


def encode_wif(
    secret: bytes,
    network: Network = Network.MAINNET,
    compressed: bool = True
) -> WIF:
    """
    Encode a private scalar in Wallet Import Format.
    
    Args:
        secret: 32-byte private scalar
        network: Target network
        compressed: Append the compression flag
        
    Returns:
        WIF encoded private key
    """
    if len(secret) != WIF_SCALAR_LENGTH:
        raise ValidationError(f"WIF requires a {WIF_SCALAR_LENGTH}-byte scalar, got {len(secret)}")
        
    data = bytes([WIF_VERSIONS[network]]) + secret
    if compressed:
        data += bytes([WIF_COMPRESSED_FLAG])
        
    return WIF(encode_base58_check(data))


def decode_wif(wif: str) -> Tuple[bytes, bool, Network]:
    """
    Decode a Wallet Import Format string.
    
    Args:
        wif: WIF encoded private key
        
    Returns:
        Tuple of (secret, is_compressed, network)
        
    Raises:
        MalformedInputError: If WIF is invalid
    """
    data = decode_base58_check(wif)
    
    if len(data) not in (WIF_SCALAR_LENGTH + 1, WIF_SCALAR_LENGTH + 2):
        raise MalformedInputError(f"Invalid WIF length: {len(data)}")
        
    # Parse network
    version = data[0]
    for network, network_version in WIF_VERSIONS.items():
        if version == network_version:
            break
    else:
        raise MalformedInputError(f"Unknown WIF version: {version:#x}")
        
    # Parse key and compression flag
    secret = data[1:WIF_SCALAR_LENGTH + 1]
    compressed = len(data) == WIF_SCALAR_LENGTH + 2
    if compressed and data[-1] != WIF_COMPRESSED_FLAG:
        raise MalformedInputError(f"Invalid compression flag: {data[-1]:#x}")
        
    return secret, compressed, network


def encode_p2pkh_address(pubkey_hash: bytes, network: Network = Network.MAINNET) -> Address:
    """
    Encode a HASH160 as a Pay-to-PubKey-Hash address.
    
    Args:
        pubkey_hash: 20-byte HASH160 of the public key
        network: Target network
        
    Returns:
        Base58Check P2PKH address
    """
    if len(pubkey_hash) != 20:
        raise ValidationError(f"P2PKH requires a 20-byte hash, got {len(pubkey_hash)}")
    return Address(encode_base58_check(bytes([P2PKH_VERSIONS[network]]) + pubkey_hash))
