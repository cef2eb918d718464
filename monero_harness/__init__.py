"""
Test fixture for integration tests against a regtest monerod and monero-wallet-rpc.
Provides typed RPC clients, the bootstrap harness and the background miner.
"""

from .config import BootstrapState, HarnessConfig
from .daemon import MonerodClient
from .errors import (
    Cancelled,
    HarnessError,
    InsufficientSeedFunds,
    MalformedResponse,
    MinerError,
    RpcError,
    SyncTimeout,
    TransportError,
    WaitTimeout,
)
from .harness import MoneroHarness
from .miner import Miner
from .rpc import JsonRpcClient, Request, Response
from .wallet import WalletClient

__all__ = [
    "BootstrapState",
    "Cancelled",
    "HarnessConfig",
    "HarnessError",
    "InsufficientSeedFunds",
    "JsonRpcClient",
    "MalformedResponse",
    "Miner",
    "MinerError",
    "MonerodClient",
    "MoneroHarness",
    "Request",
    "Response",
    "RpcError",
    "SyncTimeout",
    "TransportError",
    "WaitTimeout",
    "WalletClient",
]
