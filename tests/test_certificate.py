import asyncio
from datetime import datetime, timezone

import pytest
from cryptography import x509
from cryptography.x509.oid import ExtensionOID, NameOID

from keyconvert import KeyConvert
from keyconvert.exceptions import (
    NoPrivateKeyError,
    ProviderError,
    UnsupportedFormatError,
    ValidationError,
)
from keyconvert.modules.certificate import parse_name
from keyconvert.providers import SoftwareProvider
from keyconvert.types.key import KeyFormat

from vectors import ED25519_SEED, ONE_HEX


def test_parse_name():
    name = parse_name("CN = localhost, O=Example")
    assert name.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "localhost"
    assert name.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)[0].value == "Example"
    assert parse_name("BTC").get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "BTC"
    with pytest.raises(ValidationError):
        parse_name("XX=1")


def test_default_certificate_secp256k1():
    async def main():
        kc = KeyConvert("secp256k1")
        await kc.import_key(ONE_HEX, "hex")
        cert = await kc.export_x509_certificate()
        assert cert.startswith("-----BEGIN CERTIFICATE-----")

    asyncio.run(main())


def test_default_certificate_contents():
    async def main():
        kc = KeyConvert("P-256")
        await kc.import_key("01" * 32, "hex")
        pem = await kc.export_x509_certificate(serial_number="1234")
        cert = x509.load_pem_x509_certificate(pem.encode())

        assert cert.serial_number == 1234
        assert cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "localhost"
        assert cert.issuer.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "BTC"

        constraints = cert.extensions.get_extension_for_oid(ExtensionOID.BASIC_CONSTRAINTS)
        assert constraints.critical
        assert constraints.value.ca is True
        assert constraints.value.path_length == 2

        usage = cert.extensions.get_extension_for_oid(ExtensionOID.KEY_USAGE)
        assert usage.critical
        assert usage.value.digital_signature and usage.value.content_commitment
        assert usage.value.key_encipherment and usage.value.data_encipherment
        assert not usage.value.key_cert_sign

        cert.extensions.get_extension_for_oid(ExtensionOID.SUBJECT_KEY_IDENTIFIER)
        cert.extensions.get_extension_for_oid(ExtensionOID.AUTHORITY_KEY_IDENTIFIER)

    asyncio.run(main())


def test_custom_extensions_replace_defaults():
    async def main():
        kc = KeyConvert("P-256")
        await kc.import_key("01" * 32, "hex")
        pem = await kc.export_x509_certificate(
            extensions=[(x509.BasicConstraints(ca=False, path_length=None), True)],
            signing_algorithm="SHA-384",
        )
        cert = x509.load_pem_x509_certificate(pem.encode())
        assert len(cert.extensions) == 1
        assert cert.extensions[0].value.ca is False
        assert cert.signature_hash_algorithm.name == "sha384"

    asyncio.run(main())


def test_edwards_certificate_der():
    async def main():
        kc = KeyConvert("Ed25519")
        await kc.import_key(ED25519_SEED, "hex")
        der = await kc.export_x509_certificate(encoding="der", subject="CN=node")
        cert = x509.load_der_x509_certificate(der)
        assert cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "node"
        assert isinstance(await kc.export_x509_certificate(encoding="hex"), str)
        with pytest.raises(UnsupportedFormatError):
            await kc.export_x509_certificate(encoding="xml")

    asyncio.run(main())


def test_certificate_requires_key():
    async def main():
        with pytest.raises(NoPrivateKeyError):
            await KeyConvert("P-256").export_x509_certificate()

    asyncio.run(main())


def test_certificate_rejects_bad_options():
    async def main():
        kc = KeyConvert("P-256")
        await kc.import_key("01" * 32, "hex")
        with pytest.raises(ValidationError):
            await kc.export_x509_certificate(serial_number="abc")
        with pytest.raises(ValidationError):
            await kc.export_x509_certificate(serial_number=0)
        with pytest.raises(ValidationError):
            await kc.export_x509_certificate(
                not_before=datetime(2022, 1, 2, tzinfo=timezone.utc),
                not_after=datetime(2020, 1, 1, tzinfo=timezone.utc),
            )
        with pytest.raises(ValidationError):
            await kc.export_x509_certificate(signing_algorithm="MD5")

    asyncio.run(main())


def test_certificate_digest_follows_curve():
    async def main():
        for name, digest in (("P-256", "sha256"), ("P-384", "sha384"), ("P-521", "sha512")):
            kc = KeyConvert(name)
            await kc.generate()
            cert = x509.load_pem_x509_certificate((await kc.export_x509_certificate()).encode())
            assert cert.signature_hash_algorithm.name == digest

    asyncio.run(main())


class RecordingProvider(SoftwareProvider):
    def __init__(self):
        super().__init__()
        self.calls = []

    async def export_key(self, encoding, handle):
        self.calls.append(("export", encoding))
        return await super().export_key(encoding, handle)

    async def sign_certificate(self, handle, builder, algorithm=None):
        self.calls.append(("sign", handle.curve))
        return await super().sign_certificate(handle, builder, algorithm)


def test_certificate_uses_provider():
    async def main():
        provider = RecordingProvider()
        kc = KeyConvert("P-256", extractable=False, provider=provider)
        await kc.import_key("01" * 32, "hex")
        provider.calls.clear()

        pem = await kc.export_x509_certificate()
        assert pem.startswith("-----BEGIN CERTIFICATE-----")
        assert provider.calls == [("export", KeyFormat.SPKI), ("sign", "P-256")]

        verify_only = KeyConvert("P-256", key_usages=["verify"])
        await verify_only.import_key("01" * 32, "hex")
        with pytest.raises(ProviderError):
            await verify_only.export_x509_certificate()

    asyncio.run(main())
