"""
keyconvert Usage Examples

This file demonstrates key features of the keyconvert library.
"""

import asyncio
import logging

from keyconvert import KeyConvert, KeyConvertError, Network

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


async def hex_and_wif_example():
    """Example 1: Hex import, WIF and mnemonic export."""
    print("\n=== Hex / WIF / Mnemonic Example ===")
    
    kc = KeyConvert("secp256k1")
    await kc.import_key("01" * 32, "hex")
    
    print(f"Private hex: {await kc.export('hex', 'private')}")
    print(f"Public hex:  {await kc.export('hex', 'public')}")
    print(f"WIF:         {await kc.export('wif', 'private')}")
    print(f"Mnemonic:    {await kc.export('bip39', 'private')}")
    print(f"Address:     {await kc.bitcoin_address()}")
    print(f"Testnet:     {await kc.bitcoin_address(Network.TESTNET)}")


async def edwards_example():
    """Example 2: Ed25519 seed to JWK and OpenSSH."""
    print("\n=== Ed25519 Example ===")
    
    kc = KeyConvert("Ed25519")
    await kc.import_key(bytes(range(32)))
    
    print(f"JWK: {await kc.export('jwk', 'private')}")
    print(f"SSH: {await kc.export('ssh', 'public', 'demo@keyconvert')}")
    print(await kc.export("pkcs8", "private"))


async def certificate_example():
    """Example 3: Self-issued X.509 certificate."""
    print("\n=== Certificate Example ===")
    
    kc = KeyConvert("P-256")
    await kc.generate()
    print(await kc.export_x509_certificate(subject="CN=example.org"))


async def main():
    """Run all examples."""
    examples = [
        hex_and_wif_example,
        edwards_example,
        certificate_example,
    ]
    
    for example in examples:
        try:
            await example()
        except KeyConvertError as e:
            print(f"Error in {example.__name__}: {e}")


if __name__ == "__main__":
    # Run examples
    asyncio.run(main())
