"""
Typed results of monerod and monero-wallet-rpc calls.

Every type parses itself from the `result` object of a JSON-RPC response via
`from_result`. Fields without a default are required; unknown fields returned
by the services are ignored.
"""

from dataclasses import MISSING, dataclass, field, fields
from typing import Any, TypeVar

from monero_harness.errors import MalformedResponse

R = TypeVar("R", bound="RpcResult")

_PRIMITIVES = (int, str, bool)


def _matches(typ: Any, value: Any) -> bool:
    if typ not in _PRIMITIVES:
        return True
    if typ is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, typ)


class RpcResult:
    """Mixin for frozen dataclasses built from an RPC `result` object."""

    @classmethod
    def from_result(cls: type[R], data: Any) -> R:
        if not isinstance(data, dict):
            raise MalformedResponse(f"{cls.__name__}: expected an object, got {type(data).__name__}", data)

        kwargs = {}
        for f in fields(cls):  # type: ignore[arg-type]
            if f.name not in data:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise MalformedResponse(f"{cls.__name__}: missing field '{f.name}'", data)
                continue
            value = data[f.name]
            if not _matches(f.type, value):
                raise MalformedResponse(
                    f"{cls.__name__}: field '{f.name}' has unexpected value {value!r}", data
                )
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class Account:
    index: int
    address: str
    label: str = ""


@dataclass(frozen=True)
class Destination:
    address: str
    amount: int

    def as_param(self) -> dict:
        return {"amount": self.amount, "address": self.address}


@dataclass(frozen=True)
class BlockHeader(RpcResult):
    block_size: int
    depth: int
    difficulty: int
    hash: str
    height: int
    major_version: int
    minor_version: int
    nonce: int
    num_txes: int
    orphan_status: bool
    prev_hash: str
    reward: int
    timestamp: int


@dataclass(frozen=True)
class GenerateBlocks(RpcResult):
    height: int
    blocks: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BlockCount(RpcResult):
    count: int


@dataclass(frozen=True)
class CreatedAccount(RpcResult):
    account_index: int
    address: str


@dataclass(frozen=True)
class SubaddressAccount(RpcResult):
    account_index: int
    base_address: str
    balance: int
    unlocked_balance: int
    label: str = ""
    tag: str = ""

    def as_account(self) -> Account:
        return Account(index=self.account_index, address=self.base_address, label=self.label)


@dataclass(frozen=True)
class Accounts:
    subaddress_accounts: list[SubaddressAccount]
    total_balance: int
    total_unlocked_balance: int

    @classmethod
    def from_result(cls, data: Any) -> "Accounts":
        totals = _AccountTotals.from_result(data)
        entries = data.get("subaddress_accounts", [])
        if not isinstance(entries, list):
            raise MalformedResponse("Accounts: 'subaddress_accounts' is not a list", data)
        return cls(
            subaddress_accounts=[SubaddressAccount.from_result(e) for e in entries],
            total_balance=totals.total_balance,
            total_unlocked_balance=totals.total_unlocked_balance,
        )

    def find_by_label(self, label: str) -> Account | None:
        """First account carrying `label`. Labels aren't unique."""
        for entry in self.subaddress_accounts:
            if entry.label == label:
                return entry.as_account()
        return None


@dataclass(frozen=True)
class _AccountTotals(RpcResult):
    total_balance: int
    total_unlocked_balance: int


@dataclass(frozen=True)
class Address(RpcResult):
    address: str


@dataclass(frozen=True)
class Balance(RpcResult):
    balance: int
    unlocked_balance: int
    blocks_to_unlock: int = 0
    time_to_unlock: int = 0
    multisig_import_needed: bool = False


@dataclass(frozen=True)
class Transfer(RpcResult):
    amount: int
    fee: int
    tx_hash: str
    tx_key: str = ""
    tx_blob: str = ""
    tx_metadata: str = ""
    unsigned_txset: str = ""
    multisig_txset: str = ""


@dataclass(frozen=True)
class WalletHeight(RpcResult):
    height: int


@dataclass(frozen=True)
class Refresh(RpcResult):
    blocks_fetched: int
    received_money: bool = False


@dataclass(frozen=True)
class TxKeyCheck(RpcResult):
    confirmations: int
    in_pool: bool
    received: int


@dataclass(frozen=True)
class WalletVersion(RpcResult):
    version: int
