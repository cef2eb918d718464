"""Environment configurations."""

from typing import cast

import flexitest

from factories.monero import MonerodFactory, WalletRpcFactory
from monero_harness.config import ServiceType


class MoneroEnvConfig(flexitest.EnvConfig):
    """
    Monero environment: a regtest monerod and a monero-wallet-rpc attached to it.

    No wallet is created; tests bootstrap their own through `MoneroHarness`.
    """

    def __init__(self, ready_timeout: int = 30):
        self.ready_timeout = ready_timeout

    def init(self, ectx: flexitest.EnvContext) -> flexitest.LiveEnv:
        monerod_factory = cast(MonerodFactory, ectx.get_factory(ServiceType.Monerod))
        wallet_factory = cast(WalletRpcFactory, ectx.get_factory(ServiceType.WalletRpc))

        monerod = monerod_factory.create_regtest()
        monerod.wait_for_ready(timeout=self.ready_timeout)

        wallet_rpc = wallet_factory.create_wallet_rpc(monerod.get_prop("rpc_port"))
        wallet_rpc.wait_for_ready(timeout=self.ready_timeout)

        services = {
            ServiceType.Monerod: monerod,
            ServiceType.WalletRpc: wallet_rpc,
        }

        return flexitest.LiveEnv(services)
