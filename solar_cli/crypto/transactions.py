"""
Transaction builders and serializer for Solar v3 transactions.

Builders are chained the same way as in the Solar SDK::

    BuilderFactory.transfer(context).nonce(n).recipient_id(adr).amount(a).fee(f).sign(passphrase)

Optional fields (memo) are only written when a setter was called, so an
unset memo is absent from the payload while ``.memo("")`` yields an empty one.
Once signed, ``build()`` returns an immutable Transaction.
"""

import struct
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from multiformats import CID

from .identities import decode_address, keys_from_passphrase
from .message import sha256, sign_schnorr, verify_schnorr
from .networks import NetworkContext

TRANSACTION_VERSION = 3
MAX_MEMO_BYTES = 255
MAX_UINT64 = 2**64 - 1


class TransactionBuildError(ValueError):
    """A builder was asked to produce an incomplete or invalid transaction."""


class TransactionTypeGroup:
    CORE = 1
    SOLAR = 2


class TransactionType:
    IPFS = 5
    TRANSFER = 6
    VOTE = 2


@dataclass(frozen=True)
class Transaction:
    """A signed transaction. ``data`` is read-only."""

    data: Mapping[str, Any]

    @property
    def id(self) -> str:
        return self.data["id"]

    @property
    def nonce(self) -> int:
        return int(self.data["nonce"])

    def to_json(self) -> Dict[str, Any]:
        return _thaw(self.data)

    def serialize(self) -> bytes:
        return serialize(self.data)

    def verify(self) -> bool:
        digest = sha256(serialize(self.data, include_signature=False))
        return verify_schnorr(digest, self.data["signature"], self.data["senderPublicKey"])


class TransactionBuilder:
    type_group: int = TransactionTypeGroup.CORE
    type: int

    def __init__(self, context: NetworkContext):
        self.context = context
        self.data: Dict[str, Any] = {
            "version": TRANSACTION_VERSION,
            "network": context.network.pub_key_hash,
            "typeGroup": self.type_group,
            "type": self.type,
            "asset": {},
        }

    def nonce(self, nonce: int) -> "TransactionBuilder":
        nonce = int(nonce)
        if not 1 <= nonce <= MAX_UINT64:
            raise TransactionBuildError(f"Nonce out of range: {nonce}")
        self.data["nonce"] = str(nonce)
        return self

    def fee(self, fee: int) -> "TransactionBuilder":
        fee = int(fee)
        if not 0 <= fee <= MAX_UINT64:
            raise TransactionBuildError(f"Fee out of range: {fee}")
        self.data["fee"] = str(fee)
        return self

    def memo(self, memo: str) -> "TransactionBuilder":
        if len(memo.encode("utf-8")) > MAX_MEMO_BYTES:
            raise TransactionBuildError(f"Memo exceeds {MAX_MEMO_BYTES} bytes")
        self.data["memo"] = memo
        return self

    def sign(self, passphrase: str) -> "TransactionBuilder":
        for field in ("nonce", "fee"):
            if field not in self.data:
                raise TransactionBuildError(f"Cannot sign: {field} is not set")
        self._check_asset()
        keys = keys_from_passphrase(passphrase)
        self.data.pop("signature", None)
        self.data.pop("id", None)
        self.data["senderPublicKey"] = keys.public_key
        digest = sha256(serialize(self.data, include_signature=False))
        self.data["signature"] = sign_schnorr(digest, keys)
        self.data["id"] = sha256(serialize(self.data)).hex()
        return self

    def build(self) -> Transaction:
        if "signature" not in self.data:
            raise TransactionBuildError("Transaction must be signed before build()")
        return Transaction(data=_freeze(self.data))

    def _check_asset(self) -> None:
        pass


class TransferBuilder(TransactionBuilder):
    type = TransactionType.TRANSFER

    def __init__(self, context: NetworkContext):
        super().__init__(context)
        self.data["asset"] = {"transfers": [{}]}

    def recipient_id(self, address: str) -> "TransferBuilder":
        self.data["asset"]["transfers"][0]["recipientId"] = address
        return self

    def amount(self, amount: int) -> "TransferBuilder":
        amount = int(amount)
        if not 1 <= amount <= MAX_UINT64:
            raise TransactionBuildError(f"Amount out of range: {amount}")
        self.data["asset"]["transfers"][0]["amount"] = str(amount)
        return self

    def _check_asset(self) -> None:
        transfer = self.data["asset"]["transfers"][0]
        if "amount" not in transfer or "recipientId" not in transfer:
            raise TransactionBuildError("Transfer needs both recipient and amount")
        payload = decode_address(transfer["recipientId"])
        if payload is None or payload[0] != self.context.network.pub_key_hash:
            raise TransactionBuildError(
                f"Invalid recipient address for {self.context.network.name}: "
                f"{transfer['recipientId']}"
            )


class IpfsBuilder(TransactionBuilder):
    type = TransactionType.IPFS

    def ipfs_asset(self, ipfs_hash: str) -> "IpfsBuilder":
        try:
            CID.decode(ipfs_hash)
        except (ValueError, KeyError, TypeError, IndexError) as e:
            raise TransactionBuildError(f"Not a valid IPFS hash: {ipfs_hash}") from e
        self.data["asset"] = {"ipfs": ipfs_hash}
        return self

    def _check_asset(self) -> None:
        if "ipfs" not in self.data["asset"]:
            raise TransactionBuildError("IPFS transaction needs an ipfs asset")


class VoteBuilder(TransactionBuilder):
    type_group = TransactionTypeGroup.SOLAR
    type = TransactionType.VOTE

    def votes_asset(self, votes: Mapping[str, float]) -> "VoteBuilder":
        self.data["asset"] = {"votes": dict(votes)}
        return self

    def _check_asset(self) -> None:
        if "votes" not in self.data["asset"]:
            raise TransactionBuildError("Vote transaction needs a votes asset")
        for name, percent in self.data["asset"]["votes"].items():
            if not 0 < len(name.encode("utf-8")) <= 255:
                raise TransactionBuildError(f"Invalid delegate name length: {name!r}")
            if not 0 <= float(percent) <= 100:
                raise TransactionBuildError(f"Vote percentage out of range for {name}")


class BuilderFactory:
    @staticmethod
    def transfer(context: NetworkContext) -> TransferBuilder:
        return TransferBuilder(context)

    @staticmethod
    def ipfs(context: NetworkContext) -> IpfsBuilder:
        return IpfsBuilder(context)

    @staticmethod
    def vote(context: NetworkContext) -> VoteBuilder:
        return VoteBuilder(context)


# ------------------------------------------------------------------------------
# SERIALIZATION
# ------------------------------------------------------------------------------
def serialize(data: Mapping[str, Any], include_signature: bool = True) -> bytes:
    buffer = bytearray()
    buffer += struct.pack("<BBB", 0xFF, data["version"], data["network"])
    buffer += struct.pack("<IHQ", data["typeGroup"], data["type"], int(data["nonce"]))
    buffer += bytes.fromhex(data["senderPublicKey"])
    buffer += struct.pack("<Q", int(data["fee"]))

    memo: Optional[str] = data.get("memo")
    if memo is not None:
        memo_bytes = memo.encode("utf-8")
        buffer += struct.pack("<B", len(memo_bytes)) + memo_bytes
    else:
        buffer += b"\x00"

    buffer += _serialize_asset(data)

    if include_signature and data.get("signature"):
        buffer += bytes.fromhex(data["signature"])
    return bytes(buffer)


def _serialize_asset(data: Mapping[str, Any]) -> bytes:
    asset = data["asset"]
    key = (data["typeGroup"], data["type"])

    if key == (TransactionTypeGroup.CORE, TransactionType.TRANSFER):
        transfers = asset["transfers"]
        out = bytearray(struct.pack("<H", len(transfers)))
        for transfer in transfers:
            out += struct.pack("<Q", int(transfer["amount"]))
            out += decode_address(transfer["recipientId"])
        return bytes(out)

    if key == (TransactionTypeGroup.CORE, TransactionType.IPFS):
        return CID.decode(asset["ipfs"]).digest

    if key == (TransactionTypeGroup.SOLAR, TransactionType.VOTE):
        votes = asset["votes"]
        out = bytearray(struct.pack("<B", len(votes)))
        for name, percent in votes.items():
            name_bytes = name.encode("utf-8")
            out += struct.pack("<B", len(name_bytes)) + name_bytes
            out += struct.pack("<H", round(float(percent) * 100))
        return bytes(out)

    raise TransactionBuildError(f"Unsupported transaction type {key}")


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value
