import hashlib
import hmac

import pytest

from cosmkit.crypto.bip39 import mnemonic_to_seed
from cosmkit.crypto.hashes import sha256
from cosmkit.crypto.hd import Slip10, Slip10Curve, make_cosmos_hd_path
from cosmkit.crypto.keys import verify_message
from cosmkit.exceptions import ChecksumMismatch, ValidationError
from cosmkit.modules.wallet import HdWallet, encode_secp256k1_signature
from cosmkit.utils.encoding import from_base64, to_base64

FAUCET_MNEMONIC = (
    "economy stock theory fatal elder harbor betray wasp final emotion task crumble "
    "siren bottom lizard educate guess current outdoor pair theory focus wife stone"
)


@pytest.mark.asyncio
async def test_faucet_account_zero():
    wallet = await HdWallet.from_mnemonic(FAUCET_MNEMONIC)
    [account] = await wallet.get_accounts()

    assert account.algo == "secp256k1"
    assert to_base64(account.pubkey) == "A08EGB7ro1ORuFhjOnZcSgwYlpe0DSFjVNUIkNNQxwKQ"
    assert account.address == "cosmos1pkptre7fdkl6gfrzlesjjvhxhlc3r4gmmk8rs6"


@pytest.mark.asyncio
async def test_multiple_paths():
    wallet = await HdWallet.from_mnemonic(
        FAUCET_MNEMONIC,
        hd_paths=[make_cosmos_hd_path(0), "m/44'/118'/0'/0/1"],
    )
    accounts = await wallet.get_accounts()

    assert [a.address for a in accounts] == [
        "cosmos1pkptre7fdkl6gfrzlesjjvhxhlc3r4gmmk8rs6",
        "cosmos10dyr9899g6t0pelew4nvf4j5c3jcgv0r73qga5",
    ]
    assert to_base64(accounts[1].pubkey) == "AiDosfIbBi54XJ1QjCeApumcy/FjdtF+YhywPf3DKTx7"


@pytest.mark.asyncio
async def test_custom_prefix():
    wallet = await HdWallet.from_mnemonic(FAUCET_MNEMONIC, prefix="wasm")
    [account] = await wallet.get_accounts()
    assert account.address.startswith("wasm1")


@pytest.mark.asyncio
async def test_sign_direct_is_deterministic_and_verifies():
    wallet = await HdWallet.from_mnemonic(FAUCET_MNEMONIC)
    [account] = await wallet.get_accounts()
    sign_bytes = b"\x0a\x02hi\x12\x03doc"

    first = await wallet.sign_direct(account.address, sign_bytes)
    second = await wallet.sign_direct(account.address, sign_bytes)

    assert first == second
    assert len(first.signature_bytes) == 64
    assert first.pub_key == {"type": "tendermint/PubKeySecp256k1", "value": to_base64(account.pubkey)}
    assert verify_message(account.pubkey, first.signature_bytes, sha256(sign_bytes), prehashed=True)
    assert not verify_message(account.pubkey, first.signature_bytes, sign_bytes + b"\x00")


@pytest.mark.asyncio
async def test_sign_direct_unknown_address():
    wallet = await HdWallet.from_mnemonic(FAUCET_MNEMONIC)
    with pytest.raises(ValidationError):
        await wallet.sign_direct("cosmos10dyr9899g6t0pelew4nvf4j5c3jcgv0r73qga5", b"doc")


@pytest.mark.asyncio
async def test_invalid_mnemonic():
    with pytest.raises(ChecksumMismatch):
        await HdWallet.from_mnemonic("abandon " * 12)


@pytest.mark.asyncio
async def test_generate():
    wallet = await HdWallet.generate(24)
    assert len(wallet.mnemonic.split()) == 24
    restored = await HdWallet.from_mnemonic(wallet.mnemonic)
    assert await restored.get_accounts() == await wallet.get_accounts()

    with pytest.raises(ValidationError):
        await HdWallet.generate(13)


@pytest.mark.asyncio
async def test_passphrase_changes_accounts():
    plain = await HdWallet.from_mnemonic(FAUCET_MNEMONIC)
    protected = await HdWallet.from_mnemonic(FAUCET_MNEMONIC, passphrase="secret")
    assert (await plain.get_accounts())[0].address != (await protected.get_accounts())[0].address


def test_encode_secp256k1_signature():
    pubkey = from_base64("A08EGB7ro1ORuFhjOnZcSgwYlpe0DSFjVNUIkNNQxwKQ")
    encoded = encode_secp256k1_signature(pubkey, b"\x01" * 64)
    assert encoded.pub_key["value"] == "A08EGB7ro1ORuFhjOnZcSgwYlpe0DSFjVNUIkNNQxwKQ"
    assert encoded.signature_bytes == b"\x01" * 64

    with pytest.raises(ValidationError):
        encode_secp256k1_signature(b"\x04" + pubkey[1:], b"\x01" * 64)
    with pytest.raises(ValidationError):
        encode_secp256k1_signature(pubkey, b"\x01" * 65)


# Plain-integer secp256k1 ECDSA with RFC 6979 nonces, kept independent of the
# signing code under test.
_P = 2**256 - 2**32 - 977
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)


def _point_add(a, b):
    if a is None:
        return b
    if b is None:
        return a
    if a[0] == b[0] and (a[1] + b[1]) % _P == 0:
        return None
    if a == b:
        slope = 3 * a[0] * a[0] * pow(2 * a[1], -1, _P) % _P
    else:
        slope = (b[1] - a[1]) * pow(b[0] - a[0], -1, _P) % _P
    x = (slope * slope - a[0] - b[0]) % _P
    return x, (slope * (a[0] - x) - a[1]) % _P


def _point_mul(k, point=_G):
    result = None
    while k:
        if k & 1:
            result = _point_add(result, point)
        point = _point_add(point, point)
        k >>= 1
    return result


def _compressed(point):
    return bytes([2 + (point[1] & 1)]) + point[0].to_bytes(32, "big")


def _rfc6979_nonces(secret, digest):
    x = secret.to_bytes(32, "big")
    h = (int.from_bytes(digest, "big") % _N).to_bytes(32, "big")
    v = b"\x01" * 32
    k = b"\x00" * 32
    k = hmac.new(k, v + b"\x00" + x + h, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    k = hmac.new(k, v + b"\x01" + x + h, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    while True:
        v = hmac.new(k, v, hashlib.sha256).digest()
        candidate = int.from_bytes(v, "big")
        if 1 <= candidate < _N:
            yield candidate
        k = hmac.new(k, v + b"\x00", hashlib.sha256).digest()
        v = hmac.new(k, v, hashlib.sha256).digest()


def reference_sign(secret, digest):
    z = int.from_bytes(digest, "big") % _N
    for nonce in _rfc6979_nonces(secret, digest):
        r = _point_mul(nonce)[0] % _N
        if r == 0:
            continue
        s = pow(nonce, -1, _N) * (z + r * secret) % _N
        if s == 0:
            continue
        if s > _N // 2:
            s = _N - s
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")


def test_reference_signer_matches_known_vector():
    signature = reference_sign(1, hashlib.sha256(b"Satoshi Nakamoto").digest())
    assert signature.hex() == (
        "934b1ea10a4b3c1757e2b0c017d0b6143ce3c9a7e6a4a49860d7a6ab210ee3d8"
        "2442ce9d2b916064108014783e923ec36b49743e2ffa1c4496f01a512aafd9e5"
    )


@pytest.mark.asyncio
async def test_sign_direct_faucet_signature():
    secret_bytes = Slip10.derive_path(
        Slip10Curve.SECP256K1, mnemonic_to_seed(FAUCET_MNEMONIC), make_cosmos_hd_path(0)
    ).private_key
    secret = int.from_bytes(secret_bytes, "big")
    assert to_base64(_compressed(_point_mul(secret))) == "A08EGB7ro1ORuFhjOnZcSgwYlpe0DSFjVNUIkNNQxwKQ"

    wallet = await HdWallet.from_mnemonic(FAUCET_MNEMONIC)
    [account] = await wallet.get_accounts()
    sign_bytes = b"\x0a\x02hi\x12\x03doc\x18\x01"

    signed = await wallet.sign_direct(account.address, sign_bytes)
    expected = reference_sign(secret, hashlib.sha256(sign_bytes).digest())

    assert signed.signature == to_base64(expected)
    assert int.from_bytes(signed.signature_bytes[32:], "big") <= _N // 2
