"""
Typed client for the monero-wallet-rpc JSON-RPC interface.
"""

from collections.abc import Sequence

from monero_harness.config.constants import WALLET_LANGUAGE
from monero_harness.rpc import JsonRpcClient
from monero_harness.rpc_types import (
    Account,
    Accounts,
    Address,
    Balance,
    CreatedAccount,
    Destination,
    Refresh,
    Transfer,
    TxKeyCheck,
    WalletHeight,
    WalletVersion,
)


class WalletClient(JsonRpcClient):
    """
    RPC client for monero-wallet-rpc.

    All account-scoped calls take the account index assigned by the wallet;
    index 0 is the primary account created together with the wallet file.
    """

    def __init__(self, url: str, name: str | None = "wallet_rpc", timeout: float = 30):
        super().__init__(url, name=name, timeout=timeout)

    def create_wallet(self, filename: str) -> None:
        """Create and open `filename`. Fails if the file already exists."""
        self.call("create_wallet", {"filename": filename, "language": WALLET_LANGUAGE})

    def create_account(self, label: str) -> Account:
        created = self.call("create_account", {"label": label}, CreatedAccount.from_result)
        return Account(index=created.account_index, address=created.address, label=label)

    def get_accounts(self, tag: str = "") -> Accounts:
        return self.call("get_accounts", {"tag": tag}, Accounts.from_result)

    def get_address(self, account_index: int) -> Address:
        return self.call("get_address", {"account_index": account_index}, Address.from_result)

    def get_balance(self, account_index: int) -> Balance:
        return self.call("get_balance", {"account_index": account_index}, Balance.from_result)

    def transfer(self, account_index: int, destinations: Sequence[Destination]) -> Transfer:
        """
        Pay every destination from `account_index` in a single transaction.
        """
        if not destinations:
            raise ValueError("transfer needs at least one destination")

        params = {
            "destinations": [d.as_param() for d in destinations],
            "account_index": account_index,
            "get_tx_key": True,
            "get_tx_hex": True,
            "get_tx_metadata": True,
        }
        return self.call("transfer", params, Transfer.from_result)

    def get_height(self) -> WalletHeight:
        return self.call("get_height", {}, WalletHeight.from_result)

    def refresh(self) -> Refresh:
        return self.call("refresh", {}, Refresh.from_result)

    def check_tx_key(self, txid: str, tx_key: str, address: str) -> TxKeyCheck:
        params = {"txid": txid, "tx_key": tx_key, "address": address}
        return self.call("check_tx_key", params, TxKeyCheck.from_result)

    def get_version(self) -> WalletVersion:
        return self.call("get_version", {}, WalletVersion.from_result)
