"""HD wallet that signs transactions in direct (protobuf) sign mode."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..constants import DEFAULT_BECH32_PREFIX
from ..crypto import backend
from ..crypto.bip39 import EnglishMnemonic, generate_mnemonic
from ..crypto.hashes import sha256
from ..crypto.hd import (
    HdPath,
    Slip10,
    Slip10Curve,
    make_cosmos_hd_path,
    path_to_string,
    string_to_path,
)
from ..crypto.keys import PrivateKey
from ..exceptions import ValidationError
from ..types.common import Address
from ..utils.encoding import from_base64, to_base64

__all__ = ["AccountData", "StdSignature", "HdWallet", "encode_secp256k1_signature"]

logger = logging.getLogger(__name__)

_WORD_COUNT_STRENGTH = {12: 128, 15: 160, 18: 192, 21: 224, 24: 256}


@dataclass(frozen=True)
class AccountData:
    """Public information about one derived account."""

    address: Address
    algo: str
    pubkey: bytes


@dataclass(frozen=True)
class StdSignature:
    """Amino-JSON style signature envelope, as returned to broadcast code."""

    pub_key: Dict[str, str]
    signature: str

    @property
    def signature_bytes(self) -> bytes:
        return from_base64(self.signature)


def encode_secp256k1_signature(pubkey: bytes, signature: bytes) -> StdSignature:
    """
    Wrap a compressed pubkey and 64-byte r || s signature.

    Raises:
        ValidationError: If lengths are wrong
    """
    if len(pubkey) != 33 or pubkey[0] not in (0x02, 0x03):
        raise ValidationError("Public key must be compressed secp256k1, i.e. 33 bytes starting with 0x02 or 0x03")
    if len(signature) != 64:
        raise ValidationError("Signature must be 64 bytes long")

    return StdSignature(
        pub_key={"type": "tendermint/PubKeySecp256k1", "value": to_base64(pubkey)},
        signature=to_base64(signature),
    )


@dataclass(frozen=True)
class _Account:
    hd_path: HdPath
    private_key: PrivateKey

    @property
    def pubkey(self) -> bytes:
        return self.private_key.public_key(compressed=True).point


class HdWallet:
    """
    HD wallet over secp256k1.

    Derives one account per HD path from a single mnemonic. Key material is
    derived in memory on construction and never written anywhere.
    """

    def __init__(
        self,
        mnemonic: EnglishMnemonic,
        accounts: Sequence[_Account],
        prefix: str = DEFAULT_BECH32_PREFIX,
    ) -> None:
        self._mnemonic = mnemonic
        self._accounts = list(accounts)
        self.prefix = prefix
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    async def from_mnemonic(
        cls,
        mnemonic: str,
        hd_paths: Optional[Sequence[HdPath]] = None,
        prefix: str = DEFAULT_BECH32_PREFIX,
        passphrase: str = "",
    ) -> "HdWallet":
        """
        Restore a wallet from a mnemonic.

        Args:
            mnemonic: BIP39 mnemonic sentence
            hd_paths: Paths to derive (default: m/44'/118'/0'/0/0)
            prefix: Bech32 address prefix
            passphrase: Optional BIP39 passphrase

        Raises:
            MnemonicError: If the mnemonic is invalid
        """
        await backend.ready()

        english = EnglishMnemonic(mnemonic)
        seed = english.to_seed(passphrase)
        paths = list(hd_paths) if hd_paths else [make_cosmos_hd_path(0)]

        accounts = []
        for path in paths:
            if isinstance(path, str):
                path = string_to_path(path)
            result = Slip10.derive_path(Slip10Curve.SECP256K1, seed, path)
            accounts.append(_Account(hd_path=tuple(path), private_key=PrivateKey(result.private_key)))

        wallet = cls(english, accounts, prefix=prefix)
        logger.info(f"Restored wallet with {len(accounts)} accounts")
        return wallet

    @classmethod
    async def generate(
        cls,
        length: int = 12,
        hd_paths: Optional[Sequence[HdPath]] = None,
        prefix: str = DEFAULT_BECH32_PREFIX,
        passphrase: str = "",
    ) -> "HdWallet":
        """Create a wallet from a freshly generated mnemonic of `length` words."""
        if length not in _WORD_COUNT_STRENGTH:
            raise ValidationError(f"Mnemonic length must be one of {sorted(_WORD_COUNT_STRENGTH)}")

        await backend.ready()
        mnemonic = generate_mnemonic(_WORD_COUNT_STRENGTH[length])
        return await cls.from_mnemonic(mnemonic, hd_paths=hd_paths, prefix=prefix, passphrase=passphrase)

    @property
    def mnemonic(self) -> str:
        """The mnemonic sentence (sensitive)."""
        return str(self._mnemonic)

    def _address(self, account: _Account) -> Address:
        return account.private_key.public_key(compressed=True).address(self.prefix)

    async def get_accounts(self) -> List[AccountData]:
        return [
            AccountData(address=self._address(account), algo="secp256k1", pubkey=account.pubkey)
            for account in self._accounts
        ]

    async def sign_direct(self, signer_address: str, sign_bytes: bytes) -> StdSignature:
        """
        Sign the encoded SignDoc for a signer.

        Args:
            signer_address: Address of one of this wallet's accounts
            sign_bytes: Protobuf-encoded SignDoc

        Returns:
            Signature envelope with a 64-byte r || s signature

        Raises:
            ValidationError: If the address does not belong to this wallet
        """
        for account in self._accounts:
            if self._address(account) == signer_address:
                signature = account.private_key.sign(sha256(sign_bytes))
                self._logger.debug(
                    f"Signed {len(sign_bytes)} bytes with {path_to_string(account.hd_path)}"
                )
                return encode_secp256k1_signature(account.pubkey, signature.trimmed().to_fixed_length())

        raise ValidationError(f"Address {signer_address} not found in wallet")

    def __repr__(self) -> str:
        return f"<HdWallet prefix={self.prefix} accounts={len(self._accounts)}>"
