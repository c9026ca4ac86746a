import asyncio

import pytest

from keyconvert import KeyConvert, Network
from keyconvert.exceptions import NoPrivateKeyError, UnsupportedFormatError

from vectors import ONE_ADDRESS, ONE_HEX, ONE_WIF


def test_address_vector():
    async def main():
        kc = KeyConvert("secp256k1")
        await kc.import_key(ONE_HEX, "hex")
        assert await kc.bitcoin_address() == ONE_ADDRESS

        await kc.import_key(ONE_WIF, "wif")
        assert await kc.bitcoin_address() == ONE_ADDRESS

    asyncio.run(main())


def test_testnet_address():
    async def main():
        kc = KeyConvert("secp256k1")
        await kc.import_key(ONE_HEX, "hex")
        address = await kc.bitcoin_address(Network.TESTNET)
        assert address[0] in "mn"
        assert address != ONE_ADDRESS

    asyncio.run(main())


def test_address_rejects_other_curves():
    async def main():
        for name in ("Ed25519", "P-256"):
            kc = KeyConvert(name)
            await kc.import_key("01" * 32, "hex")
            with pytest.raises(UnsupportedFormatError):
                await kc.bitcoin_address()

    asyncio.run(main())


def test_address_requires_private_key():
    async def main():
        with pytest.raises(NoPrivateKeyError):
            await KeyConvert("secp256k1").bitcoin_address()

    asyncio.run(main())
