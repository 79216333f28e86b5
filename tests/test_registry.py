import json

import pytest

from cosmkit.exceptions import CodecError, DuplicateTypeUrl, RegistryError, UnknownTypeUrl, ValidationError
from cosmkit.registry import AnyMessage, Codec, Registry, build_registry

MSG_SEND = "/cosmos.bank.v1beta1.MsgSend"
MSG_DELEGATE = "/cosmos.staking.v1beta1.MsgDelegate"
MSG_VOTE = "/cosmos.gov.v1beta1.MsgVote"


def json_codec(tag: str) -> Codec:
    def encode(value):
        return json.dumps({"tag": tag, **value}, sort_keys=True).encode()

    def decode(data):
        value = json.loads(data)
        if value.pop("tag") != tag:
            raise ValueError("wrong tag")
        return value

    return Codec(encode=encode, decode=decode)


def test_register_encode_decode():
    registry = Registry()
    registry.register(MSG_SEND, json_codec("send"))
    value = {"from_address": "cosmos1a", "amount": "5"}

    data = registry.encode(MSG_SEND, value)
    assert isinstance(data, bytes)
    assert registry.decode(MSG_SEND, data) == value
    assert MSG_SEND in registry
    assert list(registry) == [MSG_SEND]
    assert len(registry) == 1


def test_unknown_type_url():
    registry = Registry({MSG_SEND: json_codec("send")})
    with pytest.raises(UnknownTypeUrl) as exc_info:
        registry.encode(MSG_VOTE, {})
    assert exc_info.value.type_url == MSG_VOTE
    with pytest.raises(UnknownTypeUrl):
        registry.decode(MSG_VOTE, b"{}")


def test_duplicate_registration_fails():
    registry = Registry({MSG_SEND: json_codec("send")})
    with pytest.raises(DuplicateTypeUrl):
        registry.register(MSG_SEND, json_codec("other"))


def test_override_is_opt_in():
    registry = Registry({MSG_SEND: json_codec("send")}, allow_override=True)
    replacement = json_codec("mock")
    registry.register(MSG_SEND, replacement)
    assert registry.lookup(MSG_SEND) is replacement


def test_codec_failure_is_wrapped():
    registry = Registry({MSG_SEND: json_codec("send"), MSG_DELEGATE: json_codec("delegate")})
    send_bytes = registry.encode(MSG_SEND, {"amount": "1"})

    with pytest.raises(CodecError) as exc_info:
        registry.decode(MSG_DELEGATE, send_bytes)
    assert exc_info.value.type_url == MSG_DELEGATE

    with pytest.raises(CodecError):
        registry.decode(MSG_SEND, b"\xff\xfe")
    with pytest.raises(CodecError):
        registry.encode(MSG_SEND, object())


def test_invalid_type_url_rejected():
    with pytest.raises(ValidationError):
        Registry().register("cosmos.bank.v1beta1.MsgSend", json_codec("send"))


def test_any_message():
    registry = Registry([(MSG_VOTE, json_codec("vote"))])
    packed = registry.encode_any(MSG_VOTE, {"option": 1})
    assert packed == AnyMessage(type_url=MSG_VOTE, value=registry.encode(MSG_VOTE, {"option": 1}))
    assert registry.decode_any(packed) == {"option": 1}


def test_build_registry_merges_and_freezes():
    base = {MSG_SEND: json_codec("send")}
    staking = [(MSG_DELEGATE, json_codec("delegate"))]
    gov = {MSG_VOTE: json_codec("vote")}

    registry = build_registry(base, staking, gov)
    assert registry.frozen
    assert set(registry) == {MSG_SEND, MSG_DELEGATE, MSG_VOTE}

    with pytest.raises(RegistryError):
        registry.register("/other.Msg", json_codec("other"))


def test_build_registry_fails_on_duplicate():
    with pytest.raises(DuplicateTypeUrl):
        build_registry({MSG_SEND: json_codec("send")}, {MSG_SEND: json_codec("again")})


def test_build_registry_with_override():
    replacement = json_codec("mock")
    registry = build_registry({MSG_SEND: json_codec("send")}, {MSG_SEND: replacement}, allow_override=True)
    assert registry.lookup(MSG_SEND) is replacement


def test_encoder_must_return_bytes():
    registry = Registry({MSG_SEND: Codec(encode=lambda value: 3, decode=lambda data: data)})
    with pytest.raises(CodecError) as exc_info:
        registry.encode(MSG_SEND, {})
    assert "int" in exc_info.value.reason

    registry = Registry({MSG_VOTE: Codec(encode=lambda value: bytearray(b"\x08\x01"), decode=bytes)})
    assert registry.encode(MSG_VOTE, {}) == b"\x08\x01"
