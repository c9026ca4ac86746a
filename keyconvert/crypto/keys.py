"""secp256k1 key pair used for address derivation."""

from typing import Tuple

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..constants import Network
from ..exceptions import MalformedInputError, ValidationError
from ..types.common import Address, PrivateKeyBytes, PublicKeyBytes
from ..utils.encoding import decode_wif, encode_p2pkh_address, hash160

__all__ = ["PrivateKey", "PublicKey"]

# secp256k1 group order
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class PrivateKey:
    """
    Bitcoin private key wrapper.
    
    Rebuilds a secp256k1 key pair from a private scalar so that the
    compressed public key and its address can be computed.
    """
    
    def __init__(self, key: bytes) -> None:
        """
        Initialize private key.
        
        Args:
            key: 32-byte private scalar
        
        Raises:
            ValidationError: If key is outside the secp256k1 range
        """
        if len(key) != 32:
            raise ValidationError(f"Private key must be 32 bytes, got {len(key)}")
        
        key_int = int.from_bytes(key, "big")
        if not 0 < key_int < SECP256K1_ORDER:
            raise ValidationError("Private key is outside the secp256k1 range")
        
        self._secret = PrivateKeyBytes(bytes(key))
        self._key = SecpPrivateKey(self._secret)
    
    @classmethod
    def from_wif(cls, wif: str) -> Tuple["PrivateKey", bool, Network]:
        """
        Import private key from WIF.
        
        Args:
            wif: Wallet Import Format string
        
        Returns:
            Tuple of (private_key, is_compressed, network)
        
        Raises:
            MalformedInputError: If WIF is invalid
        """
        secret, compressed, network = decode_wif(wif)
        try:
            return cls(secret), compressed, network
        except ValidationError as e:
            raise MalformedInputError(f"Invalid WIF private key: {e}") from e
    
    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        return self._secret
    
    def public_key(self, compressed: bool = True) -> "PublicKey":
        """
        Get corresponding public key.
        
        Args:
            compressed: Return compressed format
        
        Returns:
            PublicKey instance
        """
        return PublicKey(self._key.public_key.format(compressed=compressed))


class PublicKey:
    """Bitcoin public key wrapper."""
    
    def __init__(self, key: bytes) -> None:
        """
        Initialize public key.
        
        Args:
            key: SEC1 encoded public key
        
        Raises:
            ValidationError: If key is not a valid secp256k1 point
        """
        try:
            SecpPublicKey(bytes(key))
        except (ValueError, TypeError) as e:
            raise ValidationError(f"Invalid public key: {e}") from e
        self._point = PublicKeyBytes(bytes(key))
    
    @property
    def point(self) -> PublicKeyBytes:
        """Get public key as bytes."""
        return self._point
    
    def hash160(self) -> bytes:
        """Get HASH160 of public key."""
        return hash160(self._point)
    
    def p2pkh_address(self, network: Network = Network.MAINNET) -> Address:
        """
        Get Pay-to-PubKey-Hash address.
        
        Args:
            network: Target network
        
        Returns:
            P2PKH address
        """
        return encode_p2pkh_address(self.hash160(), network)
