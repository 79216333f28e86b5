"""cosmkit client modules."""

from ..modules.rpc import ProtobufRpcClient, create_protobuf_rpc_client, create_query_method
from ..modules.wallet import AccountData, HdWallet, StdSignature, encode_secp256k1_signature

__all__ = [
    # RPC
    "ProtobufRpcClient",
    "create_protobuf_rpc_client",
    "create_query_method",

    # Wallet
    "AccountData",
    "HdWallet",
    "StdSignature",
    "encode_secp256k1_signature",
]
