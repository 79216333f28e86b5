"""Cryptographic utilities for cosmkit."""

from ..crypto.backend import (
    Argon2id,
    Argon2idOptions,
    Random,
    Xchacha20poly1305Ietf,
    XCHACHA20_NONCE_LENGTH,
    is_argon2id_options,
    ready,
)
from ..crypto.bip39 import (
    EnglishMnemonic,
    entropy_to_mnemonic,
    generate_mnemonic,
    is_valid_mnemonic,
    mnemonic_to_entropy,
    mnemonic_to_seed,
)
from ..crypto.hashes import (
    Hmac,
    Keccak256,
    Ripemd160,
    Sha256,
    Sha512,
    hmac_digest,
    keccak256,
    ripemd160,
    sha256,
    sha512,
)
from ..crypto.hd import (
    HdPath,
    Slip10,
    Slip10Curve,
    Slip10RawIndex,
    Slip10Result,
    make_cosmos_hd_path,
    path_to_string,
    slip10_curve_from_string,
    string_to_path,
)
from ..crypto.keys import (
    Ed25519,
    Ed25519Keypair,
    PrivateKey,
    PublicKey,
    Secp256k1,
    Secp256k1Keypair,
    sign_message,
    verify_message,
)
from ..crypto.signature import (
    ExtendedSecp256k1Signature,
    Secp256k1Signature,
    encode_der_signature,
    parse_der_signature,
)

__all__ = [
    # Backend
    "ready",
    "Random",
    "Argon2id",
    "Argon2idOptions",
    "is_argon2id_options",
    "Xchacha20poly1305Ietf",
    "XCHACHA20_NONCE_LENGTH",

    # Hashes
    "sha256",
    "sha512",
    "keccak256",
    "ripemd160",
    "hmac_digest",
    "Sha256",
    "Sha512",
    "Keccak256",
    "Ripemd160",
    "Hmac",

    # Mnemonics
    "EnglishMnemonic",
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    "mnemonic_to_seed",
    "generate_mnemonic",
    "is_valid_mnemonic",

    # HD derivation
    "HdPath",
    "Slip10",
    "Slip10Curve",
    "Slip10RawIndex",
    "Slip10Result",
    "slip10_curve_from_string",
    "string_to_path",
    "path_to_string",
    "make_cosmos_hd_path",

    # Keys
    "PrivateKey",
    "PublicKey",
    "Secp256k1",
    "Secp256k1Keypair",
    "Ed25519",
    "Ed25519Keypair",
    "sign_message",
    "verify_message",

    # Signatures
    "Secp256k1Signature",
    "ExtendedSecp256k1Signature",
    "parse_der_signature",
    "encode_der_signature",
]
