"""Main keyconvert object."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from .constants import (
    DEFAULT_ISSUER,
    DEFAULT_KEY_USAGES,
    DEFAULT_NOT_AFTER,
    DEFAULT_NOT_BEFORE,
    DEFAULT_SUBJECT,
    Network,
)
from .crypto.curves import CurveAdapter
from .modules import (
    AddressDeriver,
    CertificateIssuer,
    ExportDispatcher,
    ExportResult,
    ImportDispatcher,
)
from .providers import BaseKeyProvider, SoftwareProvider
from .types.common import Address, HexStr
from .types.key import CanonicalKey, KeyFormat, KeyHandle, KeyInput, KeyType, KeyUsage
from .utils.validation import validate_usages

__all__ = ["KeyConvert"]

logger = logging.getLogger(__name__)


class KeyConvert:
    """
    Key pair converter.
    
    Holds one key pair on a configured curve. ``import_key`` replaces the
    pair; every export, certificate and address operation only reads it.
    
    Example:
        >>> kc = KeyConvert("secp256k1")
        >>> await kc.import_key("01" * 32, "hex")
        >>> await kc.export("wif", "private")
    """
    
    def __init__(
        self,
        named_curve: Union[str, Mapping[str, Any]],
        algorithm: Optional[str] = None,
        extractable: bool = True,
        key_usages: Optional[Iterable[Union[KeyUsage, str]]] = None,
        provider: Optional[BaseKeyProvider] = None,
    ) -> None:
        """
        Initialize converter.
        
        Args:
            named_curve: Curve name or a mapping with ``namedCurve``
            algorithm: Algorithm bound to the curve (default per family)
            extractable: Whether private material may be exported
            key_usages: Capability tags (default sign, verify, deriveKey, deriveBits)
            provider: Cryptographic provider (default: SoftwareProvider)
            
        Raises:
            ValidationError: If the curve or a usage tag is unknown
        """
        self.curve = CurveAdapter(named_curve)
        self.algorithm = algorithm or self.curve.default_algorithm
        self.extractable = extractable
        self.key_usages = validate_usages(
            key_usages if key_usages is not None else DEFAULT_KEY_USAGES
        )
        self._provider = provider or SoftwareProvider()
        
        self._key: Optional[CanonicalKey] = None
        self._import_lock = asyncio.Lock()
        
        self._importer = ImportDispatcher(
            self._provider, self.curve, self.algorithm, self.extractable, self.key_usages
        )
        self._exporter = ExportDispatcher(self._provider, self.curve)
        self._issuer = CertificateIssuer(self._provider, self.curve)
        self._address = AddressDeriver(self._exporter, self.curve)
        
        logger.debug(f"Initialized KeyConvert for {self.curve.jwk_crv} with {self._provider!r}")
        
    @property
    def key(self) -> Optional[CanonicalKey]:
        """Committed key pair."""
        return self._key
        
    @property
    def private_key(self) -> Optional[KeyHandle]:
        """Committed private key handle."""
        return self._key.private_handle if self._key else None
        
    @property
    def public_key(self) -> Optional[KeyHandle]:
        """Committed public key handle."""
        return self._key.public_handle if self._key else None
        
    @property
    def provider(self) -> BaseKeyProvider:
        """Cryptographic provider."""
        return self._provider
        
    async def import_key(
        self,
        key: KeyInput,
        encoding: Optional[Union[KeyFormat, str]] = None
    ) -> CanonicalKey:
        """
        Import a key pair, replacing the committed one.
        
        The committed pair is swapped only after every step succeeds; on
        failure the previous pair stays in place.
        
        Args:
            key: Provider handle, bytes, text, or structured key object
            encoding: Optional format hint (hex, raw, raw:private, bip39, wif, pkcs8, ...)
            
        Returns:
            The newly committed CanonicalKey
            
        Raises:
            UnknownEncodingError: If the input cannot be classified
            MalformedInputError: If the input is incomplete or rejected
        """
        async with self._import_lock:
            new_key = await self._importer.run(key, encoding)
            self._key = new_key
            
        logger.info(f"Imported {self.curve.jwk_crv} key pair ({encoding or type(key).__name__})")
        return new_key
        
    async def generate(self) -> CanonicalKey:
        """
        Generate a fresh key pair and commit it.
        
        Returns:
            The newly committed CanonicalKey
        """
        async with self._import_lock:
            private_handle, public_handle = await self._provider.generate_key(
                self.curve, self.extractable, self.key_usages
            )
            new_key = CanonicalKey(
                curve=self.curve.jwk_crv,
                family=self.curve.family,
                algorithm=self.algorithm,
                extractable=self.extractable,
                usages=self.key_usages,
                private_handle=private_handle,
                public_handle=public_handle,
                public_point=await self._provider.public_point(public_handle),
            )
            self._key = new_key
            
        logger.info(f"Generated {self.curve.jwk_crv} key pair")
        return new_key
        
    async def export(
        self,
        encoding: Union[KeyFormat, str],
        key_type: Union[KeyType, str] = KeyType.PUBLIC,
        comment: Optional[str] = None,
        network: Network = Network.MAINNET
    ) -> ExportResult:
        """
        Export the committed key pair.
        
        Args:
            encoding: hex, bip39, wif, ssh, pkcs1, pkcs8, jwk, raw, raw:private or spki
            key_type: private or public
            comment: Comment attached to ssh public keys
            network: Network for WIF version bytes
            
        Returns:
            Text, bytes, or structured key object depending on the format
            
        Raises:
            NoPrivateKeyError: If no private key is committed
            UnsupportedFormatError: If the format does not fit the key type
        """
        return await self._exporter.export(self._key, encoding, key_type, comment, network)
        
    async def private_key_hex(self) -> HexStr:
        """Get the private scalar as hex."""
        return await self._exporter.private_key_hex(self._key)
        
    async def public_key_hex(self) -> HexStr:
        """Get the encoded public point as hex."""
        return await self._exporter.public_key_hex(self._key)
        
    async def bitcoin_address(self, network: Network = Network.MAINNET) -> Address:
        """
        Derive the P2PKH address of the key pair.
        
        Args:
            network: Target network
            
        Returns:
            P2PKH address
        """
        return await self._address.derive(self._key, network)
        
    async def export_x509_certificate(
        self,
        serial_number: Optional[Union[str, int]] = None,
        subject: str = DEFAULT_SUBJECT,
        issuer: str = DEFAULT_ISSUER,
        not_before: datetime = DEFAULT_NOT_BEFORE,
        not_after: datetime = DEFAULT_NOT_AFTER,
        signing_algorithm: Any = None,
        public_key: Optional[KeyHandle] = None,
        signing_key: Optional[KeyHandle] = None,
        extensions: Optional[Sequence[Any]] = None,
        encoding: str = "pem"
    ) -> Union[str, bytes]:
        """
        Issue an X.509 certificate for the key pair.
        
        See CertificateIssuer.issue for the options.
        """
        return await self._issuer.issue(
            self._key,
            serial_number=serial_number,
            subject=subject,
            issuer=issuer,
            not_before=not_before,
            not_after=not_after,
            signing_algorithm=signing_algorithm,
            public_key=public_key,
            signing_key=signing_key,
            extensions=extensions,
            encoding=encoding,
        )
        
    def __repr__(self) -> str:
        """String representation."""
        return f"KeyConvert(curve={self.curve.jwk_crv}, key={self._key!r})"
