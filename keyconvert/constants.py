"""Constants for keyconvert."""

import re
from datetime import datetime, timezone
from enum import Enum

__all__ = [
    "Network",
    "WIF_VERSIONS",
    "P2PKH_VERSIONS",
    "WIF_COMPRESSED_FLAG",
    "WIF_SCALAR_LENGTH",
    "DEFAULT_KEY_USAGES",
    "EC_CURVE_MARKERS",
    "PEM_LINE_LENGTH",
    "PRIVATE_KEY_PEM_PATTERN",
    "DEFAULT_SUBJECT",
    "DEFAULT_ISSUER",
    "DEFAULT_NOT_BEFORE",
    "DEFAULT_NOT_AFTER",
]


class Network(str, Enum):
    """Bitcoin networks used for WIF and address version bytes."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


# Wallet Import Format
WIF_VERSIONS = {
    Network.MAINNET: 0x80,
    Network.TESTNET: 0xEF,
}
WIF_COMPRESSED_FLAG = 0x01
WIF_SCALAR_LENGTH = 32

# Pay-to-PubKey-Hash
P2PKH_VERSIONS = {
    Network.MAINNET: 0x00,
    Network.TESTNET: 0x6F,
}

# Key usages granted when none are configured
DEFAULT_KEY_USAGES = ("sign", "verify", "deriveKey", "deriveBits")

# Curve names containing one of these belong to the short-Weierstrass family
EC_CURVE_MARKERS = ("secp", "p-", "prime")

# PEM
PEM_LINE_LENGTH = 64
PRIVATE_KEY_PEM_PATTERN = re.compile(r"-{5}BEGIN.*PRIVATE KEY")

# X.509 certificate defaults
DEFAULT_SUBJECT = "CN=localhost"
DEFAULT_ISSUER = "BTC"
DEFAULT_NOT_BEFORE = datetime(2020, 1, 1, tzinfo=timezone.utc)
DEFAULT_NOT_AFTER = datetime(2022, 1, 2, tzinfo=timezone.utc)
