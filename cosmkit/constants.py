"""Constants and configuration defaults for cosmkit."""

from enum import Enum

from mnemonic import Mnemonic

__all__ = [
    "Network",
    "BIP39_WORDLIST",
    "SECP256K1_N",
    "HARDENED_OFFSET",
    "ENTROPY_LENGTHS",
    "MNEMONIC_WORD_COUNTS",
    "PBKDF2_ROUNDS",
    "COSMOS_COIN_TYPE",
    "DEFAULT_BECH32_PREFIX",
    "RPC_ENDPOINTS",
    "DEFAULT_TIMEOUT",
    "MAX_RETRIES",
    "RETRY_DELAY",
    "USER_AGENT",
]


class Network(str, Enum):
    """Well-known deployment targets."""

    LOCAL = "local"
    MAINNET = "mainnet"
    TESTNET = "testnet"


# Official BIP39 English wordlist shipped with the `mnemonic` distribution
BIP39_WORDLIST: list[str] = Mnemonic("english").wordlist

# secp256k1 group order
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

HARDENED_OFFSET = 0x80000000

# BIP39
ENTROPY_LENGTHS = (16, 20, 24, 28, 32)
MNEMONIC_WORD_COUNTS = (12, 15, 18, 21, 24)
PBKDF2_ROUNDS = 2048

# Cosmos SDK conventions
COSMOS_COIN_TYPE = 118
DEFAULT_BECH32_PREFIX = "cosmos"

# CometBFT RPC endpoints
RPC_ENDPOINTS = {
    Network.LOCAL: "http://localhost:26657",
    Network.MAINNET: "https://cosmos-rpc.publicnode.com",
    Network.TESTNET: "https://cosmos-testnet-rpc.polkachu.com",
}

# Provider settings
DEFAULT_TIMEOUT = 30
MAX_RETRIES = 3
RETRY_DELAY = 1.0
USER_AGENT = "cosmkit/0.1.0"
