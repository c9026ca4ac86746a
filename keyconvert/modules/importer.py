"""Import dispatch: normalize external key input into a CanonicalKey."""

import logging
from typing import FrozenSet, Optional, Union

from ..crypto.bip39 import mnemonic_to_entropy
from ..crypto.curves import CurveAdapter
from ..crypto.pem import is_private_key_pem, private_key_to_pkcs8
from ..exceptions import MalformedInputError, UnknownEncodingError
from ..providers.base import BaseKeyProvider
from ..types.common import HexStr, JsonWebKey
from ..types.key import CanonicalKey, KeyFormat, KeyHandle, KeyInput, KeyUsage
from ..utils.encoding import base64url_decode, decode_wif
from ..utils.validation import validate_hex_scalar

__all__ = ["ImportDispatcher"]

logger = logging.getLogger(__name__)

# Hints under which bytes or text are read as the private scalar itself
_SCALAR_HINTS = (None, KeyFormat.RAW, KeyFormat.RAW_PRIVATE, KeyFormat.HEX)


class ImportDispatcher:
    """
    Key import.
    
    Classifies the input, converts it to a structured key object, imports
    the private and public forms through the provider and returns the new
    CanonicalKey. Nothing is committed here: the caller swaps the result in
    only once every step has succeeded.
    """
    
    def __init__(
        self,
        provider: BaseKeyProvider,
        curve: CurveAdapter,
        algorithm: str,
        extractable: bool,
        usages: FrozenSet[KeyUsage]
    ) -> None:
        """
        Initialize import dispatcher.
        
        Args:
            provider: Provider that issues the key handles
            curve: Configured curve
            algorithm: Algorithm bound to the curve
            extractable: Extractability of imported private keys
            usages: Capability tags of imported keys
        """
        self._provider = provider
        self._curve = curve
        self._algorithm = algorithm
        self._extractable = extractable
        self._usages = usages
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        
    async def run(
        self,
        key: KeyInput,
        encoding: Optional[Union[KeyFormat, str]] = None
    ) -> CanonicalKey:
        """
        Normalize input into a new CanonicalKey.
        
        Args:
            key: Provider handle, bytes, text, or structured key object
            encoding: Optional format hint
            
        Returns:
            New CanonicalKey (not yet committed)
            
        Raises:
            UnknownEncodingError: If the input cannot be classified
            MalformedInputError: If the input is incomplete or rejected
        """
        hint = KeyFormat.parse(encoding) if encoding is not None else None
        
        if isinstance(key, KeyHandle):
            return self._from_handle(key)
            
        if isinstance(key, str) and is_private_key_pem(key):
            return await self._from_pkcs8(private_key_to_pkcs8(key))
            
        if isinstance(key, (bytes, bytearray)) and hint == KeyFormat.PKCS8:
            return await self._from_pkcs8(bytes(key))
            
        if hint == KeyFormat.BIP39:
            return await self._from_scalar(validate_hex_scalar(mnemonic_to_entropy(self._text(key, hint))))
            
        if hint == KeyFormat.WIF:
            secret, _compressed, _network = decode_wif(self._text(key, hint))
            return await self._from_scalar(validate_hex_scalar(secret))
            
        if isinstance(key, dict):
            if not key.get("d"):
                raise UnknownEncodingError("Unknown Input: structured key without private scalar")
            return await self._commit(dict(key))
            
        if isinstance(key, (bytes, bytearray, str)) and hint in _SCALAR_HINTS:
            if isinstance(key, str) and hint is None:
                raise UnknownEncodingError("Unknown Private Key Encoding: None")
            return await self._from_scalar(validate_hex_scalar(key))
            
        raise UnknownEncodingError(
            f"Unknown Private Key Encoding: {hint.value if hint else None} "
            f"for input of type {type(key).__name__}"
        )
        
    @staticmethod
    def _text(key: KeyInput, hint: KeyFormat) -> str:
        if not isinstance(key, str):
            raise UnknownEncodingError(f"{hint.value} input must be text, got {type(key).__name__}")
        return key
        
    def _from_handle(self, handle: KeyHandle) -> CanonicalKey:
        if not handle.is_private:
            raise MalformedInputError("Expected a private key handle")
        if handle.curve != self._curve.jwk_crv:
            raise MalformedInputError(
                f"Key handle belongs to curve {handle.curve}, expected {self._curve.jwk_crv}"
            )
            
        # The public counterpart is not derived from a bare handle
        self._logger.warning("Imported private key handle without a public key")
        return CanonicalKey(
            curve=self._curve.jwk_crv,
            family=self._curve.family,
            algorithm=self._algorithm,
            extractable=handle.extractable,
            usages=handle.usages,
            private_handle=handle,
        )
        
    async def _from_pkcs8(self, der: bytes) -> CanonicalKey:
        private_handle = await self._provider.import_key(
            KeyFormat.PKCS8, der, self._curve, self._extractable, self._usages
        )
        point = await self._provider.public_point(private_handle)
        return await self._commit(self._curve.point_to_jwk(point), private_handle)
        
    async def _from_scalar(self, private_hex: HexStr) -> CanonicalKey:
        x = y = None
        if self._curve.is_edwards:
            x, y = self._curve.split_point(
                self._curve.derive_public_point(bytes.fromhex(private_hex))
            )
        jwk = self._curve.to_jwk(private_hex, x, y)
        
        private_handle = None
        if not self._curve.is_edwards:
            # EC coordinates come from the provider's native import
            private_handle = await self._provider.import_key(
                KeyFormat.JWK, jwk, self._curve, self._extractable, self._usages
            )
            point = await self._provider.public_point(private_handle)
            jwk.update(self._curve.point_to_jwk(point))
            
        return await self._commit(jwk, private_handle)
        
    async def _commit(
        self,
        jwk: JsonWebKey,
        private_handle: Optional[KeyHandle] = None
    ) -> CanonicalKey:
        if not jwk.get("x"):
            self._logger.error("Structured key is missing the x coordinate")
            raise MalformedInputError("missing required coordinate: x")
            
        if private_handle is None:
            private_handle = await self._provider.import_key(
                KeyFormat.JWK, jwk, self._curve, self._extractable, self._usages
            )
            
        public_jwk = {name: value for name, value in jwk.items() if name != "d"}
        public_handle = await self._provider.import_key(
            KeyFormat.JWK, public_jwk, self._curve, self._extractable, self._usages
        )
        public_point = await self._provider.public_point(public_handle)
        
        return CanonicalKey(
            curve=self._curve.jwk_crv,
            family=self._curve.family,
            algorithm=self._algorithm,
            extractable=self._extractable,
            usages=self._usages,
            private_handle=private_handle,
            public_handle=public_handle,
            public_point=public_point,
            private_scalar=base64url_decode(jwk["d"]) if jwk.get("d") else None,
        )
