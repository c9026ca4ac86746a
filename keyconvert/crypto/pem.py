"""PEM, PKCS8 and OpenSSH text codec for keyconvert."""

import base64
import logging
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from ..constants import PEM_LINE_LENGTH, PRIVATE_KEY_PEM_PATTERN
from ..exceptions import MalformedInputError, UnsupportedFormatError
from ..types.key import KeyFormat, KeyType

__all__ = [
    "is_private_key_pem",
    "wrap_pem",
    "private_key_to_pkcs8",
    "private_key_to_text",
    "public_key_to_ssh",
]

logger = logging.getLogger(__name__)

_PRIVATE_FORMATS = {
    KeyFormat.PKCS8: serialization.PrivateFormat.PKCS8,
    KeyFormat.PKCS1: serialization.PrivateFormat.TraditionalOpenSSL,
}


def is_private_key_pem(text: str) -> bool:
    """Check if text carries a PEM private key marker."""
    return bool(PRIVATE_KEY_PEM_PATTERN.search(text))


def wrap_pem(der: bytes, label: str = "PRIVATE KEY") -> str:
    """
    Wrap DER bytes in PEM armor.
    
    Args:
        der: DER encoded structure
        label: PEM label
        
    Returns:
        PEM text with 64-character base64 lines
    """
    body = base64.b64encode(der).decode("ascii")
    lines = [body[i:i + PEM_LINE_LENGTH] for i in range(0, len(body), PEM_LINE_LENGTH)]
    return "\n".join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----"])


def _load_private_key(text: str):
    data = text.strip().encode("ascii")
    try:
        if b"OPENSSH PRIVATE KEY" in data:
            return serialization.load_ssh_private_key(data, password=None)
        return serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error(f"Private key text rejected: {e}")
        raise MalformedInputError(f"Invalid private key text: {e}") from e


def private_key_to_pkcs8(text: str) -> bytes:
    """
    Parse PEM or OpenSSH private key text to PKCS8 DER.
    
    Args:
        text: PEM (PKCS8, PKCS1/SEC1) or OpenSSH private key text
        
    Returns:
        PKCS8 DER bytes
        
    Raises:
        MalformedInputError: If the text cannot be parsed
    """
    key = _load_private_key(text)
    return key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def private_key_to_text(text: str, encoding: KeyFormat) -> str:
    """
    Re-serialize PEM private key text to another private key format.
    
    Args:
        text: PEM private key text
        encoding: KeyFormat.PKCS8 or KeyFormat.PKCS1
        
    Returns:
        PEM text in the requested format
        
    Raises:
        UnsupportedFormatError: If the key cannot be expressed in the format
    """
    if encoding not in _PRIVATE_FORMATS:
        raise UnsupportedFormatError(encoding.value, KeyType.PRIVATE.value)
        
    key = _load_private_key(text)
    try:
        return key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=_PRIVATE_FORMATS[encoding],
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")
    except (ValueError, UnsupportedAlgorithm) as e:
        raise UnsupportedFormatError(
            encoding.value,
            KeyType.PRIVATE.value,
            f"{encoding.value} format is not available for this key: {e}",
        ) from e


def public_key_to_ssh(text: str, comment: Optional[str] = None) -> str:
    """
    Extract the public key of PEM private key text as an OpenSSH line.
    
    Args:
        text: PEM private key text
        comment: Optional comment appended to the line
        
    Returns:
        OpenSSH public key line
        
    Raises:
        UnsupportedFormatError: If OpenSSH has no encoding for the curve
    """
    key = _load_private_key(text)
    try:
        line = key.public_key().public_bytes(
            encoding=serialization.Encoding.OpenSSH,
            format=serialization.PublicFormat.OpenSSH,
        ).decode("ascii")
    except (ValueError, UnsupportedAlgorithm) as e:
        raise UnsupportedFormatError(
            KeyFormat.SSH.value,
            KeyType.PUBLIC.value,
            f"ssh format is not available for this key: {e}",
        ) from e
        
    if comment:
        line = f"{line} {comment}"
    return line
