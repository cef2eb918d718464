"""
Service wrappers for test infrastructure.
"""

from common.services.base import RpcService
from common.services.monero import MonerodProps, MonerodService, WalletRpcProps, WalletRpcService

__all__ = [
    "RpcService",
    "MonerodService",
    "MonerodProps",
    "WalletRpcService",
    "WalletRpcProps",
]
