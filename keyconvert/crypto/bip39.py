"""BIP39 mnemonic codec for keyconvert."""

import logging

from mnemonic import Mnemonic as _Bip39

from ..exceptions import MalformedInputError
from ..types.common import Mnemonic

__all__ = ["entropy_to_mnemonic", "mnemonic_to_entropy"]

logger = logging.getLogger(__name__)

_codec = _Bip39("english")


def entropy_to_mnemonic(entropy: bytes) -> Mnemonic:
    """
    Encode entropy as a BIP39 word sequence.
    
    Args:
        entropy: 16, 20, 24, 28 or 32 bytes
        
    Returns:
        Space separated mnemonic with embedded checksum
        
    Raises:
        MalformedInputError: If entropy length is not supported
    """
    try:
        return Mnemonic(_codec.to_mnemonic(bytes(entropy)))
    except ValueError as e:
        raise MalformedInputError(f"Invalid mnemonic entropy: {e}") from e


def mnemonic_to_entropy(mnemonic: str) -> bytes:
    """
    Decode a BIP39 word sequence to its entropy.
    
    Args:
        mnemonic: Space separated word sequence
        
    Returns:
        Entropy bytes
        
    Raises:
        MalformedInputError: If a word is unknown or the checksum fails
    """
    words = " ".join(mnemonic.split())
    try:
        return bytes(_codec.to_entropy(words))
    except (ValueError, LookupError) as e:
        logger.error(f"Mnemonic rejected: {e}")
        raise MalformedInputError(f"Invalid mnemonic: {e}") from e
