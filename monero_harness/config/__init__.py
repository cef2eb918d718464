"""
Configuration dataclasses and constants.
"""

from monero_harness.config.config import HarnessConfig
from monero_harness.config.constants import (
    JSON_RPC_ID,
    JSON_RPC_PATH,
    JSON_RPC_VERSION,
    PRIMARY_ACCOUNT_INDEX,
    WALLET_LANGUAGE,
    BootstrapState,
    ServiceType,
)

__all__ = [
    # config.py
    "HarnessConfig",
    # constants.py
    "BootstrapState",
    "ServiceType",
    "JSON_RPC_ID",
    "JSON_RPC_PATH",
    "JSON_RPC_VERSION",
    "PRIMARY_ACCOUNT_INDEX",
    "WALLET_LANGUAGE",
]
