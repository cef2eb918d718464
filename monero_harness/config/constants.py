"""
Constants used throughout the harness.
"""

from enum import Enum

JSON_RPC_VERSION = "2.0"
JSON_RPC_ID = "1"
JSON_RPC_PATH = "/json_rpc"

PRIMARY_ACCOUNT_INDEX = 0
WALLET_LANGUAGE = "English"


class ServiceType(str, Enum):
    """
    Service type identifiers for test environments.

    Using str Enum allows direct string comparison while providing
    IDE autocomplete and type safety.

    Usage:
        services = {ServiceType.Monerod: monerod, ServiceType.WalletRpc: wallet}
        monerod = self.get_service(ServiceType.Monerod)
    """

    Monerod = "monerod"
    WalletRpc = "wallet_rpc"

    def __str__(self) -> str:
        """Allow direct use in f-strings and format operations."""
        return self.value


class BootstrapState(str, Enum):
    """Bootstrap progress of a harness. Only ever moves forward."""

    Uninitialized = "uninitialized"
    WalletCreated = "wallet_created"
    AccountsCreated = "accounts_created"
    SeedBlocksGenerated = "seed_blocks_generated"
    Funding = "funding"
    SyncWait = "sync_wait"
    MinerStarted = "miner_started"
    Ready = "ready"

    def __str__(self) -> str:
        return self.value
