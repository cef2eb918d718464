"""Environment configurations for functional tests."""

from envconfigs.monero import MoneroEnvConfig

__all__ = [
    "MoneroEnvConfig",
]
