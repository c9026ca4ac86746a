"""Export dispatch: serialize the committed CanonicalKey."""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from ..constants import Network, WIF_SCALAR_LENGTH
from ..crypto.bip39 import entropy_to_mnemonic
from ..crypto.curves import CurveAdapter
from ..crypto.pem import private_key_to_text, public_key_to_ssh, wrap_pem
from ..exceptions import (
    MissingPublicKeyError,
    NoPrivateKeyError,
    UnsupportedFormatError,
    ValidationError,
)
from ..providers.base import BaseKeyProvider
from ..types.common import HexStr, JsonWebKey
from ..types.key import CanonicalKey, KeyFormat, KeyHandle, KeyType
from ..utils.encoding import base64url_decode, encode_wif

__all__ = ["ExportDispatcher", "ExportResult"]

logger = logging.getLogger(__name__)

ExportResult = Union[str, bytes, JsonWebKey]

# Formats passed straight through to the provider
_NATIVE_FORMATS = frozenset({KeyFormat.RAW, KeyFormat.RAW_PRIVATE, KeyFormat.SPKI})


class ExportDispatcher:
    """
    Key export.
    
    Every KeyFormat member maps to exactly one handler; raw, raw:private
    and spki are passed through to the provider.
    """
    
    def __init__(self, provider: BaseKeyProvider, curve: CurveAdapter) -> None:
        """
        Initialize export dispatcher.
        
        Args:
            provider: Provider that issued the committed handles
            curve: Configured curve
        """
        self._provider = provider
        self._curve = curve
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._handlers: Dict[KeyFormat, Callable[..., Awaitable[ExportResult]]] = {
            KeyFormat.HEX: self._export_hex,
            KeyFormat.BIP39: self._export_mnemonic,
            KeyFormat.WIF: self._export_wif,
            KeyFormat.SSH: self._export_text,
            KeyFormat.PKCS1: self._export_text,
            KeyFormat.PKCS8: self._export_text,
            KeyFormat.JWK: self._export_jwk,
            KeyFormat.RAW: self._export_native,
            KeyFormat.RAW_PRIVATE: self._export_native,
            KeyFormat.SPKI: self._export_native,
        }
        
    @property
    def formats(self) -> frozenset:
        """Formats with an export handler."""
        return frozenset(self._handlers)
        
    async def export(
        self,
        key: Optional[CanonicalKey],
        encoding: Union[KeyFormat, str],
        key_type: Union[KeyType, str] = KeyType.PUBLIC,
        comment: Optional[str] = None,
        network: Network = Network.MAINNET
    ) -> ExportResult:
        """
        Serialize the committed key.
        
        Args:
            key: Committed key pair, None if nothing was imported
            encoding: Target format
            key_type: Key half to export
            comment: Comment attached to ssh public keys
            network: Network for WIF version bytes
            
        Returns:
            Text, bytes, or structured key object depending on the format
            
        Raises:
            NoPrivateKeyError: If no private key is committed
            UnsupportedFormatError: If the format does not fit the key type
        """
        encoding = KeyFormat.parse(encoding)
        try:
            key_type = KeyType(key_type)
        except ValueError as e:
            raise ValidationError(f"Unknown key type: {key_type}") from e
        handler = self._handlers[encoding]
        
        if encoding not in _NATIVE_FORMATS and (key is None or not key.has_private_key):
            raise NoPrivateKeyError()
            
        return await handler(key, encoding, key_type, comment=comment, network=network)
        
    async def private_key_hex(self, key: Optional[CanonicalKey]) -> HexStr:
        """
        Get the private scalar as hex.
        
        Raises:
            NoPrivateKeyError: If no private key is committed
        """
        if key is None or not key.has_private_key:
            raise NoPrivateKeyError()
        jwk = await self._provider.export_key(KeyFormat.JWK, key.private_handle)
        return HexStr(base64url_decode(jwk["d"]).hex())
        
    async def public_key_hex(self, key: Optional[CanonicalKey]) -> HexStr:
        """
        Get the encoded public point as hex.
        
        Raises:
            NoPrivateKeyError: If no private key is committed
            MissingPublicKeyError: If no public key was committed with it
        """
        if key is None or not key.has_private_key:
            raise NoPrivateKeyError()
        if key.public_point is None:
            raise MissingPublicKeyError("No Public Key: the key pair was imported from a private key handle")
        return key.public_point.hex()
        
    def _select(self, key: Optional[CanonicalKey], key_type: KeyType) -> KeyHandle:
        if key is None:
            raise NoPrivateKeyError()
        if key_type == KeyType.PRIVATE:
            if key.private_handle is None:
                raise NoPrivateKeyError()
            return key.private_handle
        if key.public_handle is None:
            raise MissingPublicKeyError("No Public Key: the key pair was imported from a private key handle")
        return key.public_handle
        
    async def _export_hex(self, key: CanonicalKey, encoding: KeyFormat, key_type: KeyType, **_: Any) -> HexStr:
        if key_type == KeyType.PRIVATE:
            return await self.private_key_hex(key)
        return await self.public_key_hex(key)
        
    async def _export_mnemonic(self, key: CanonicalKey, encoding: KeyFormat, key_type: KeyType, **_: Any) -> str:
        if key_type == KeyType.PUBLIC:
            raise UnsupportedFormatError(encoding.label, key_type.value)
        return entropy_to_mnemonic(bytes.fromhex(await self.private_key_hex(key)))
        
    async def _export_wif(
        self,
        key: CanonicalKey,
        encoding: KeyFormat,
        key_type: KeyType,
        network: Network = Network.MAINNET,
        **_: Any
    ) -> str:
        if key_type == KeyType.PUBLIC:
            raise UnsupportedFormatError(encoding.label, key_type.value)
        if self._curve.is_edwards or self._curve.size != WIF_SCALAR_LENGTH:
            raise UnsupportedFormatError(
                encoding.value,
                key_type.value,
                f"{encoding.value} format is not available for curve {self._curve.jwk_crv}",
            )
        return encode_wif(bytes.fromhex(await self.private_key_hex(key)), network, compressed=True)
        
    async def _export_text(
        self,
        key: CanonicalKey,
        encoding: KeyFormat,
        key_type: KeyType,
        comment: Optional[str] = None,
        **_: Any
    ) -> str:
        der = await self._provider.export_key(KeyFormat.PKCS8, key.private_handle)
        pem = wrap_pem(der, "PRIVATE KEY")
        
        if key_type == KeyType.PUBLIC:
            return public_key_to_ssh(pem, comment)
            
        if self._curve.is_edwards and encoding in (KeyFormat.SSH, KeyFormat.PKCS8):
            return pem
        if encoding == KeyFormat.SSH:
            encoding = KeyFormat.PKCS8
        return private_key_to_text(pem, encoding)
        
    async def _export_jwk(self, key: CanonicalKey, encoding: KeyFormat, key_type: KeyType, **_: Any) -> JsonWebKey:
        private_jwk = await self._provider.export_key(KeyFormat.JWK, key.private_handle)
        if key.public_handle is None:
            return private_jwk
        public_jwk = await self._provider.export_key(KeyFormat.JWK, key.public_handle)
        return {**private_jwk, **public_jwk}
        
    async def _export_native(
        self,
        key: Optional[CanonicalKey],
        encoding: KeyFormat,
        key_type: KeyType,
        **_: Any
    ) -> Union[bytes, JsonWebKey]:
        return await self._provider.export_key(encoding, self._select(key, key_type))
