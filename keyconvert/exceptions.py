"""keyconvert exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
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
]


class KeyConvertError(Exception):
    """Base exception for all keyconvert errors."""
    
    def __init__(
        self, 
        message: str, 
        code: Optional[int] = None, 
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
        
    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(KeyConvertError):
    """Raised when validation fails."""
    pass


class MalformedInputError(ValidationError):
    """Raised when key input is incomplete or rejected by a codec."""
    pass


class UnknownEncodingError(ValidationError):
    """Raised when import input cannot be classified."""
    pass


class NoPrivateKeyError(KeyConvertError):
    """Raised when private key material is required but none is committed."""
    
    def __init__(self, message: str = "No Private Key") -> None:
        super().__init__(message)


class MissingPublicKeyError(KeyConvertError):
    """Raised when the committed key pair carries no public key."""
    pass


class UnsupportedFormatError(KeyConvertError):
    """Raised when a format is not available for a key type or curve."""
    
    def __init__(
        self,
        encoding: str,
        key_type: str,
        message: Optional[str] = None
    ) -> None:
        if message is None:
            message = f"{encoding} format is not available for KeyType {key_type}"
        super().__init__(message)
        self.encoding = encoding
        self.key_type = key_type


class ProviderError(KeyConvertError):
    """Raised when the cryptographic provider fails."""
    pass


class KeyNotExtractableError(ProviderError):
    """Raised when exporting private material of a non-extractable key."""
    pass


class CryptoError(KeyConvertError):
    """Raised when a signing or certificate operation fails."""
    pass
