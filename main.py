"""
cosmkit Usage Examples

This file demonstrates key features of the cosmkit library.
"""

import asyncio
import json
import logging

from cosmkit import Codec, HdWallet, Network, build_registry, connect
from cosmkit.crypto import (
    Argon2id,
    Argon2idOptions,
    Ed25519,
    EnglishMnemonic,
    Random,
    Secp256k1,
    Slip10,
    Slip10Curve,
    Xchacha20poly1305Ietf,
    XCHACHA20_NONCE_LENGTH,
    sha256,
)
from cosmkit.modules import create_protobuf_rpc_client, create_query_method

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Well-known test mnemonic, never use it for real funds
FAUCET_MNEMONIC = (
    "economy stock theory fatal elder harbor betray wasp final emotion task crumble "
    "siren bottom lizard educate guess current outdoor pair theory focus wife stone"
)


async def mnemonic_example():
    """Example 1: Mnemonics and seeds."""
    print("\n=== Mnemonic Example ===")

    mnemonic = EnglishMnemonic.from_entropy(Random.get_bytes(16))
    print(f"New mnemonic: {len(mnemonic.words)} words")
    print(f"Entropy: {mnemonic.to_entropy().hex()}")

    seed = mnemonic.to_seed(passphrase="optional passphrase")
    print(f"Seed: {seed.hex()[:16]}...")


async def hd_derivation_example():
    """Example 2: HD derivation on both curves."""
    print("\n=== HD Derivation Example ===")

    seed = EnglishMnemonic(FAUCET_MNEMONIC).to_seed()

    # secp256k1 on the Cosmos Hub path
    secp = Slip10.derive_path(Slip10Curve.SECP256K1, seed, "m/44'/118'/0'/0/0")
    keypair = Secp256k1.make_keypair(secp.private_key)
    print(f"secp256k1 pubkey: {keypair.compressed_public_key.hex()}")

    # ed25519 only supports hardened indices
    ed = Slip10.derive_path(Slip10Curve.ED25519, seed, "m/44'/118'/0'")
    ed_keypair = Ed25519.make_keypair(ed.private_key)
    print(f"ed25519 pubkey: {ed_keypair.public_key.hex()}")


async def signing_example():
    """Example 3: Signing and verification."""
    print("\n=== Signing Example ===")

    keypair = Secp256k1.make_keypair(Random.get_bytes(32))
    digest = sha256(b"Hello Cosmos!")

    signature = Secp256k1.create_signature(digest, keypair.private_key)
    print(f"Signature: {signature.to_fixed_length().hex()[:16]}...")
    print(f"Valid: {Secp256k1.verify_signature(signature, digest, keypair.public_key)}")

    recovered = Secp256k1.recover_pubkey(signature, digest)
    print(f"Recovered matches: {recovered == keypair.public_key}")


async def wallet_example():
    """Example 4: HD wallet and direct signing."""
    print("\n=== Wallet Example ===")

    wallet = await HdWallet.from_mnemonic(
        FAUCET_MNEMONIC,
        hd_paths=["m/44'/118'/0'/0/0", "m/44'/118'/0'/0/1"],
    )

    accounts = await wallet.get_accounts()
    for account in accounts:
        print(f"Account: {account.address} ({account.algo})")

    # Sign an encoded SignDoc
    signed = await wallet.sign_direct(accounts[0].address, b"\x0a\x00")
    print(f"Signature: {signed.signature}")


async def encryption_example():
    """Example 5: Password based encryption."""
    print("\n=== Encryption Example ===")

    options = Argon2idOptions(output_length=32, op_limit=3, mem_limit_kib=64 * 1024)
    salt = Random.get_bytes(Argon2id.SALT_LENGTH)
    key = Argon2id.execute("correct horse battery staple", salt, options)

    nonce = Random.get_bytes(XCHACHA20_NONCE_LENGTH)
    ciphertext = Xchacha20poly1305Ietf.encrypt(FAUCET_MNEMONIC.encode(), key, nonce)
    print(f"Ciphertext: {len(ciphertext)} bytes")

    plaintext = Xchacha20poly1305Ietf.decrypt(ciphertext, key, nonce)
    print(f"Round trip ok: {plaintext.decode() == FAUCET_MNEMONIC}")


def _json_codec() -> Codec:
    # Stand-in for generated protobuf codecs
    return Codec(
        encode=lambda value: json.dumps(value).encode(),
        decode=lambda data: json.loads(data),
    )


async def query_example():
    """Example 6: Extension-composed queries against a local node."""
    print("\n=== Query Example ===")

    registry = build_registry({
        "/cosmos.bank.v1beta1.QueryBalanceRequest": _json_codec(),
        "/cosmos.bank.v1beta1.QueryBalanceResponse": _json_codec(),
    })

    def setup_bank_extension(base):
        rpc = create_protobuf_rpc_client(base)
        return {
            "bank": {
                "balance": create_query_method(
                    rpc,
                    "/cosmos.bank.v1beta1.Query/Balance",
                    "/cosmos.bank.v1beta1.QueryBalanceRequest",
                    "/cosmos.bank.v1beta1.QueryBalanceResponse",
                    registry,
                ),
            },
        }

    async with connect(setup_bank_extension, network=Network.LOCAL) as client:
        print(f"Extensions: {client.extensions}")

        response = await client.query_abci("/cosmos.bank.v1beta1.Query/Params", b"")
        print(f"Params height: {response.height}, {len(response.value)} bytes")


async def main():
    """Run all examples."""
    examples = [
        mnemonic_example,
        hd_derivation_example,
        signing_example,
        wallet_example,
        encryption_example,
        query_example,
    ]

    for example in examples:
        try:
            await example()
        except Exception as e:
            print(f"Error in {example.__name__}: {e}")


if __name__ == "__main__":
    # Run examples
    asyncio.run(main())
