import asyncio

import pytest

from cosmkit.crypto import backend
from cosmkit.crypto.backend import (
    Argon2id, Argon2idOptions, Random, Xchacha20poly1305Ietf, XCHACHA20_NONCE_LENGTH,
    is_argon2id_options
)
from cosmkit.crypto.keys import Ed25519
from cosmkit.exceptions import CryptoError

FAST_ARGON = Argon2idOptions(output_length=32, op_limit=1, mem_limit_kib=8 * 1024)


@pytest.mark.asyncio
async def test_concurrent_ready_initialises_once(monkeypatch):
    calls = []

    def fake_load():
        calls.append(1)

    monkeypatch.setattr(backend, "_load_backend", fake_load)
    monkeypatch.setattr(backend, "_ready", False)
    monkeypatch.setattr(backend, "_ready_task", None)

    await asyncio.gather(*(backend.ready() for _ in range(10)))

    assert calls == [1]
    assert backend.is_ready()

    await backend.ready()
    assert calls == [1]


def test_random_bytes():
    assert len(Random.get_bytes(32)) == 32
    assert Random.get_bytes(0) == b""
    assert Random.get_bytes(16) != Random.get_bytes(16)
    with pytest.raises(ValueError):
        Random.get_bytes(-1)


def test_argon2id_is_deterministic():
    salt = b"\x01" * 16
    first = Argon2id.execute("password", salt, FAST_ARGON)
    second = Argon2id.execute("password", salt, FAST_ARGON)
    assert first == second
    assert len(first) == 32
    assert Argon2id.execute("passw0rd", salt, FAST_ARGON) != first
    assert is_argon2id_options(FAST_ARGON)
    assert not is_argon2id_options({"output_length": 32})


def test_argon2id_rejects_bad_salt():
    with pytest.raises(CryptoError):
        Argon2id.execute("password", b"\x01" * 8, FAST_ARGON)


def test_xchacha20poly1305_roundtrip():
    key = b"\x02" * 32
    nonce = Random.get_bytes(XCHACHA20_NONCE_LENGTH)
    ciphertext = Xchacha20poly1305Ietf.encrypt(b"wallet data", key, nonce)

    assert len(ciphertext) == len(b"wallet data") + 16
    assert Xchacha20poly1305Ietf.decrypt(ciphertext, key, nonce) == b"wallet data"


def test_xchacha20poly1305_tamper_and_wrong_key():
    key = b"\x02" * 32
    nonce = b"\x03" * XCHACHA20_NONCE_LENGTH
    ciphertext = bytearray(Xchacha20poly1305Ietf.encrypt(b"wallet data", key, nonce))

    with pytest.raises(CryptoError):
        Xchacha20poly1305Ietf.decrypt(bytes(ciphertext), b"\x04" * 32, nonce)

    ciphertext[0] ^= 0x01
    with pytest.raises(CryptoError):
        Xchacha20poly1305Ietf.decrypt(bytes(ciphertext), key, nonce)

    with pytest.raises(CryptoError):
        Xchacha20poly1305Ietf.encrypt(b"x", key, b"\x00" * 12)


@pytest.mark.asyncio
async def test_failed_initialisation_is_retried(monkeypatch):
    attempts = []

    def flaky_load():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("library not loaded")

    monkeypatch.setattr(backend, "_load_backend", flaky_load)
    monkeypatch.setattr(backend, "_ready", False)
    monkeypatch.setattr(backend, "_ready_task", None)

    with pytest.raises(CryptoError):
        await backend.ready()
    assert not backend.is_ready()

    await backend.ready()
    assert len(attempts) == 2
    assert backend.is_ready()


def test_sync_primitives_initialise_backend(monkeypatch):
    calls = []

    monkeypatch.setattr(backend, "_load_backend", lambda: calls.append(1))
    monkeypatch.setattr(backend, "_ready", False)

    Random.get_bytes(4)
    assert calls == [1]
    assert backend.is_ready()

    Xchacha20poly1305Ietf.encrypt(b"x", b"\x02" * 32, b"\x03" * XCHACHA20_NONCE_LENGTH)
    assert calls == [1]


def test_ed25519_initialises_backend(monkeypatch):
    calls = []

    monkeypatch.setattr(backend, "_load_backend", lambda: calls.append(1))
    monkeypatch.setattr(backend, "_ready", False)

    Ed25519.make_keypair(b"\x07" * 32)
    assert calls == [1]


def test_sync_initialisation_failure_is_not_cached(monkeypatch):
    def broken_load():
        raise RuntimeError("library not loaded")

    monkeypatch.setattr(backend, "_load_backend", broken_load)
    monkeypatch.setattr(backend, "_ready", False)

    with pytest.raises(CryptoError):
        Random.get_bytes(4)
    assert not backend.is_ready()
