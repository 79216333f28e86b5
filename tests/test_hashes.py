import hashlib

from cosmkit.crypto.hashes import (
    sha256, sha512, keccak256, ripemd160, hash160,
    hmac_digest, hmac_sha256, hmac_sha512,
    Sha256, Sha512, Keccak256, Ripemd160, Hmac
)


def test_sha2_vectors():
    assert sha256(b"abc").hex() == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert sha512(b"abc").hex() == (
        "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
        "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
    )


def test_keccak256_vector():
    # Keccak padding, not FIPS-202 SHA3-256
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    assert keccak256(b"") != hashlib.sha3_256(b"").digest()


def test_ripemd160_vectors():
    assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"
    assert ripemd160(b"abc").hex() == "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc"
    assert hash160(b"abc") == ripemd160(sha256(b"abc"))


def test_hmac_rfc4231_case2():
    key = b"Jefe"
    data = b"what do ya want for nothing?"
    assert hmac_sha256(key, data).hex() == "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    assert hmac_sha512(key, data).hex() == (
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
    )
    assert hmac_digest(hashlib.sha512, key, data) == hmac_sha512(key, data)


def test_incremental_hashes_match_one_shot():
    data = b"incremental hashing"
    assert Sha256().update(data[:5]).update(data[5:]).digest() == sha256(data)
    assert Sha512(data).digest() == sha512(data)
    assert Keccak256().update(data).digest() == keccak256(data)
    assert Ripemd160().update(data[:3]).update(data[3:]).digest() == ripemd160(data)


def test_sha256_digest_does_not_finalize():
    h = Sha256(b"a")
    first = h.digest()
    h.update(b"b")
    assert first == sha256(b"a")
    assert h.digest() == sha256(b"ab")


def test_generic_hmac():
    mac = Hmac(hashlib.sha256, b"Jefe")
    mac.update(b"what do ya want ").update(b"for nothing?")
    assert mac.digest() == hmac_sha256(b"Jefe", b"what do ya want for nothing?")
    assert mac.digest_size == 32
