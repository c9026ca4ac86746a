"""Cryptographic collaborators for keyconvert."""

from ..crypto.curves import CurveAdapter, SUPPORTED_CURVES
from ..crypto.keys import PrivateKey, PublicKey
from ..crypto.bip39 import entropy_to_mnemonic, mnemonic_to_entropy
from ..crypto.pem import (
    is_private_key_pem,
    wrap_pem,
    private_key_to_pkcs8,
    private_key_to_text,
    public_key_to_ssh,
)

__all__ = [
    # Curves
    "CurveAdapter",
    "SUPPORTED_CURVES",
    
    # Keys
    "PrivateKey",
    "PublicKey",
    
    # Mnemonic
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    
    # PEM / SSH
    "is_private_key_pem",
    "wrap_pem",
    "private_key_to_pkcs8",
    "private_key_to_text",
    "public_key_to_ssh",
]
