"""Provider implementations for keyconvert."""

from ..providers.base import BaseKeyProvider
from ..providers.software import SoftwareProvider

__all__ = [
    "BaseKeyProvider",
    "SoftwareProvider",
]
