"""Base cryptographic provider interface for keyconvert."""

from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Tuple, Union
import logging

from cryptography import x509
from cryptography.hazmat.primitives import hashes

from ..crypto.curves import CurveAdapter
from ..types.common import JsonWebKey
from ..types.key import KeyFormat, KeyHandle, KeyUsage, PublicPoint

__all__ = ["BaseKeyProvider"]

logger = logging.getLogger(__name__)


class BaseKeyProvider(ABC):
    """
    Abstract cryptographic provider.
    
    Key material lives behind opaque KeyHandle objects issued by the
    provider. This class defines the interface that all providers must
    implement.
    """
    
    def __init__(self) -> None:
        """Initialize provider."""
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        
    @abstractmethod
    async def generate_key(
        self,
        curve: CurveAdapter,
        extractable: bool,
        usages: FrozenSet[KeyUsage]
    ) -> Tuple[KeyHandle, KeyHandle]:
        """
        Generate a new key pair.
        
        Args:
            curve: Curve to generate on
            extractable: Whether private material may be exported
            usages: Capability tags for both handles
            
        Returns:
            Tuple of (private_handle, public_handle)
        """
        raise NotImplementedError
        
    @abstractmethod
    async def import_key(
        self,
        encoding: KeyFormat,
        data: Union[bytes, JsonWebKey],
        curve: CurveAdapter,
        extractable: bool,
        usages: FrozenSet[KeyUsage]
    ) -> KeyHandle:
        """
        Import key material.
        
        Args:
            encoding: jwk, pkcs8, spki, raw or raw:private
            data: Structured key object or encoded bytes
            curve: Curve the key belongs to
            extractable: Whether private material may be exported
            usages: Capability tags for the handle
            
        Returns:
            KeyHandle for the imported key
            
        Raises:
            MalformedInputError: If the material is rejected
            UnsupportedFormatError: If the format cannot be imported
        """
        raise NotImplementedError
        
    @abstractmethod
    async def export_key(
        self,
        encoding: KeyFormat,
        handle: KeyHandle
    ) -> Union[bytes, JsonWebKey]:
        """
        Export key material.
        
        Args:
            encoding: jwk, pkcs8, spki, raw or raw:private
            handle: Handle to export
            
        Returns:
            Structured key object or encoded bytes
            
        Raises:
            KeyNotExtractableError: If private material is not extractable
            UnsupportedFormatError: If the format does not fit the handle
        """
        raise NotImplementedError
        
    @abstractmethod
    async def public_point(self, handle: KeyHandle) -> PublicPoint:
        """
        Get the public point of a handle.
        
        Args:
            handle: Private or public handle
            
        Returns:
            Explicit public key representation
        """
        raise NotImplementedError
        
    @abstractmethod
    async def sign(self, handle: KeyHandle, data: bytes) -> bytes:
        """
        Sign data with a private handle.
        
        Raises:
            ProviderError: If the handle may not sign
        """
        raise NotImplementedError
        
    @abstractmethod
    async def verify(self, handle: KeyHandle, signature: bytes, data: bytes) -> bool:
        """Verify a signature with a handle."""
        raise NotImplementedError
        
    @abstractmethod
    async def sign_certificate(
        self,
        handle: KeyHandle,
        builder: x509.CertificateBuilder,
        algorithm: Optional[hashes.HashAlgorithm] = None
    ) -> x509.Certificate:
        """
        Sign a certificate with a private handle.
        
        Args:
            handle: Signing private key handle
            builder: Fully populated certificate builder
            algorithm: Digest, None for the provider default of the curve
            
        Returns:
            Signed certificate
            
        Raises:
            ProviderError: If the handle may not sign
            CryptoError: If signing fails
        """
        raise NotImplementedError
        
    def __repr__(self) -> str:
        """String representation of provider."""
        return f"{self.__class__.__name__}()"
