import pytest

from cosmkit.utils import validation as v
from cosmkit.utils.encoding import encode_bech32


def test_address_validation():
    h = bytes.fromhex("11" * 20)
    addr = encode_bech32("cosmos", h)
    assert v.is_valid_address(addr, "cosmos")
    assert v.validate_address(addr) == addr
    assert not v.is_valid_address(addr, "osmo")
    with pytest.raises(v.ValidationError):
        v.validate_address("invalid")
    with pytest.raises(v.ValidationError):
        v.validate_address(encode_bech32("cosmos", b"\x11" * 5))


def test_type_url_validation():
    assert v.is_valid_type_url("/cosmos.bank.v1beta1.MsgSend")
    assert v.is_valid_type_url("type.googleapis.com/google.protobuf.Any")
    assert v.validate_type_url("/foo.Bar") == "/foo.Bar"
    assert not v.is_valid_type_url("cosmos.bank.v1beta1.MsgSend")
    assert not v.is_valid_type_url("")
    with pytest.raises(v.ValidationError):
        v.validate_type_url("/has space")


def test_private_key_validation():
    assert v.is_valid_private_key("01" * 32)
    assert v.validate_private_key(b"\x01" * 32) == b"\x01" * 32
    assert not v.is_valid_private_key(b"\x00" * 32)
    assert not v.is_valid_private_key(b"\xff" * 32)
    assert not v.is_valid_private_key(b"\x01" * 31)
    with pytest.raises(v.ValidationError):
        v.validate_private_key("xyz")


def test_public_key_validation():
    compressed = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")
    assert v.validate_public_key(compressed) == compressed
    assert v.is_valid_public_key(compressed.hex())
    assert not v.is_valid_public_key(b"\x05" + compressed[1:])
    assert not v.is_valid_public_key(b"\x04" * 33)
