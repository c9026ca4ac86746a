"""Bitcoin address derivation for the committed key pair."""

import logging
from typing import Optional

from ..constants import Network
from ..crypto.curves import CurveAdapter
from ..crypto.keys import PrivateKey
from ..exceptions import UnsupportedFormatError
from ..modules.exporter import ExportDispatcher
from ..types.common import Address
from ..types.key import CanonicalKey, KeyFormat, KeyType

__all__ = ["AddressDeriver"]

logger = logging.getLogger(__name__)


class AddressDeriver:
    """
    Pay-to-PubKey-Hash address derivation.
    
    Goes through the WIF export, so only secp256k1 key pairs are
    accepted.
    """
    
    def __init__(self, exporter: ExportDispatcher, curve: CurveAdapter) -> None:
        """
        Initialize address deriver.
        
        Args:
            exporter: Export dispatcher for the WIF form
            curve: Configured curve
        """
        self._exporter = exporter
        self._curve = curve
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        
    async def derive(
        self,
        key: Optional[CanonicalKey],
        network: Network = Network.MAINNET
    ) -> Address:
        """
        Derive the P2PKH address of the committed key pair.
        
        Args:
            key: Committed key pair
            network: Target network
            
        Returns:
            Base58Check P2PKH address of the compressed public key
            
        Raises:
            NoPrivateKeyError: If no private key is committed
            UnsupportedFormatError: If the curve is not secp256k1
        """
        if self._curve.jwk_crv != "secp256k1":
            raise UnsupportedFormatError(
                "p2pkh",
                KeyType.PUBLIC.value,
                f"p2pkh address is not available for curve {self._curve.jwk_crv}",
            )
            
        wif = await self._exporter.export(key, KeyFormat.WIF, KeyType.PRIVATE, network=network)
        private_key, _compressed, wif_network = PrivateKey.from_wif(wif)
        address = private_key.public_key(compressed=True).p2pkh_address(wif_network)
        self._logger.debug(f"Derived {wif_network.value} address {address}")
        return address
