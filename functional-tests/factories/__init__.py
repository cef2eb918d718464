"""Service factories."""

from factories.monero import MonerodFactory, WalletRpcFactory

__all__ = ["MonerodFactory", "WalletRpcFactory"]
