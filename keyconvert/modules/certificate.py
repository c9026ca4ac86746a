"""X.509 certificate issuance for the committed key pair."""

import base64
import logging
import time
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509.oid import NameOID

from ..constants import (
    DEFAULT_ISSUER,
    DEFAULT_NOT_AFTER,
    DEFAULT_NOT_BEFORE,
    DEFAULT_SUBJECT,
)
from ..crypto.curves import CurveAdapter
from ..exceptions import (
    CryptoError,
    MissingPublicKeyError,
    NoPrivateKeyError,
    UnsupportedFormatError,
    ValidationError,
)
from ..providers.base import BaseKeyProvider
from ..types.key import CanonicalKey, KeyFormat, KeyHandle

__all__ = ["CertificateIssuer", "parse_name"]

logger = logging.getLogger(__name__)

_NAME_ATTRIBUTES = {
    "CN": NameOID.COMMON_NAME,
    "O": NameOID.ORGANIZATION_NAME,
    "OU": NameOID.ORGANIZATIONAL_UNIT_NAME,
    "C": NameOID.COUNTRY_NAME,
    "ST": NameOID.STATE_OR_PROVINCE_NAME,
    "L": NameOID.LOCALITY_NAME,
    "E": NameOID.EMAIL_ADDRESS,
}

_HASHES = {
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
}

Extension = Union[x509.Extension, Tuple[x509.ExtensionType, bool]]


def parse_name(text: str) -> x509.Name:
    """
    Parse ``K=V, K=V`` text into an X.509 name.
    
    Args:
        text: Distinguished name text; a bare value is the common name
        
    Returns:
        x509.Name
        
    Raises:
        ValidationError: If an attribute is unknown
    """
    attributes = []
    for part in text.split(","):
        if not part.strip():
            continue
        if "=" in part:
            name, value = (item.strip() for item in part.split("=", 1))
        else:
            name, value = "CN", part.strip()
        oid = _NAME_ATTRIBUTES.get(name.upper())
        if oid is None:
            raise ValidationError(f"Unknown name attribute: {name}")
        attributes.append(x509.NameAttribute(oid, value))
    return x509.Name(attributes)


class CertificateIssuer:
    """Builds self-issued X.509 certificates for the committed key pair."""
    
    def __init__(self, provider: BaseKeyProvider, curve: CurveAdapter) -> None:
        """
        Initialize certificate issuer.
        
        Args:
            provider: Cryptographic provider holding the key handles
            curve: Configured curve
        """
        self._provider = provider
        self._curve = curve
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        
    def default_extensions(self, public_key: Any) -> List[Tuple[x509.ExtensionType, bool]]:
        """
        Default extension set.
        
        Args:
            public_key: Certificate subject public key
            
        Returns:
            List of (extension, critical) pairs
        """
        return [
            (x509.BasicConstraints(ca=True, path_length=2), True),
            (x509.SubjectKeyIdentifier.from_public_key(public_key), False),
            (x509.AuthorityKeyIdentifier.from_issuer_public_key(public_key), False),
            (x509.KeyUsage(
                digital_signature=True,
                content_commitment=True,
                key_encipherment=True,
                data_encipherment=True,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ), True),
        ]
        
    @staticmethod
    def _signing_hash(signing_algorithm: Any) -> Optional[hashes.HashAlgorithm]:
        # None leaves the digest to the provider
        if signing_algorithm is None or isinstance(signing_algorithm, hashes.HashAlgorithm):
            return signing_algorithm
        hash_cls = _HASHES.get(str(signing_algorithm).upper())
        if hash_cls is None:
            raise ValidationError(f"Unknown signing algorithm: {signing_algorithm}")
        return hash_cls()
        
    @staticmethod
    def _serial(serial_number: Union[str, int]) -> int:
        try:
            serial = int(serial_number)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid certificate serial number: {serial_number!r}") from e
        if serial <= 0:
            raise ValidationError(f"Certificate serial number must be positive: {serial}")
        return serial
        
    async def _subject_key(self, handle: KeyHandle) -> Any:
        spki = await self._provider.export_key(KeyFormat.SPKI, handle)
        try:
            return serialization.load_der_public_key(spki)
        except (ValueError, UnsupportedAlgorithm) as e:
            raise CryptoError(f"Provider returned an unusable subject key: {e}") from e
            
    async def issue(
        self,
        key: Optional[CanonicalKey],
        serial_number: Optional[Union[str, int]] = None,
        subject: str = DEFAULT_SUBJECT,
        issuer: str = DEFAULT_ISSUER,
        not_before: datetime = DEFAULT_NOT_BEFORE,
        not_after: datetime = DEFAULT_NOT_AFTER,
        signing_algorithm: Any = None,
        public_key: Optional[KeyHandle] = None,
        signing_key: Optional[KeyHandle] = None,
        extensions: Optional[Sequence[Extension]] = None,
        encoding: str = "pem"
    ) -> Union[str, bytes]:
        """
        Issue a certificate.
        
        Args:
            key: Committed key pair supplying default keys
            serial_number: Decimal serial, defaults to the current time in ms
            subject: Subject name text
            issuer: Issuer name text
            not_before: Start of validity
            not_after: End of validity
            signing_algorithm: Hash algorithm or name, None for the provider default
            public_key: Subject public key handle
            signing_key: Signing private key handle
            extensions: Replaces the default extensions entirely
            encoding: pem, der, base64 or hex
            
        Returns:
            Serialized certificate, bytes for der
            
        Raises:
            NoPrivateKeyError: If no signing key is available
            ValidationError: If a certificate option is invalid
            CryptoError: If signing fails
        """
        if signing_key is None:
            if key is None or key.private_handle is None:
                raise NoPrivateKeyError()
            signing_key = key.private_handle
        if public_key is None:
            if key is None or key.public_handle is None:
                raise MissingPublicKeyError("No Public Key: certificate subject key is unknown")
            public_key = key.public_handle
            
        if serial_number is None:
            serial_number = f"{int(time.time() * 1000)}"
            
        subject_key = await self._subject_key(public_key)
        if extensions is None:
            extensions = self.default_extensions(subject_key)
            
        try:
            if not_after <= not_before:
                raise ValidationError(
                    f"Certificate validity ends ({not_after}) before it starts ({not_before})"
                )
            builder = (
                x509.CertificateBuilder()
                .serial_number(self._serial(serial_number))
                .subject_name(parse_name(subject))
                .issuer_name(parse_name(issuer))
                .not_valid_before(not_before)
                .not_valid_after(not_after)
                .public_key(subject_key)
            )
            for extension in extensions:
                if isinstance(extension, x509.Extension):
                    builder = builder.add_extension(extension.value, critical=extension.critical)
                else:
                    value, critical = extension
                    builder = builder.add_extension(value, critical=critical)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"Invalid certificate options: {e}") from e
            
        certificate = await self._provider.sign_certificate(
            signing_key, builder, self._signing_hash(signing_algorithm)
        )
        self._logger.debug(f"Issued {self._curve.jwk_crv} certificate with serial {certificate.serial_number}")
        return self._serialize(certificate, encoding)
        
    @staticmethod
    def _serialize(certificate: x509.Certificate, encoding: str) -> Union[str, bytes]:
        encoding = encoding.lower()
        if encoding == "pem":
            return certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")
        der = certificate.public_bytes(serialization.Encoding.DER)
        if encoding == "der":
            return der
        if encoding == "base64":
            return base64.b64encode(der).decode("ascii")
        if encoding == "hex":
            return der.hex()
        raise UnsupportedFormatError(encoding, "certificate")
