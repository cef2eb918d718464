"""
monerod and monero-wallet-rpc service wrappers with health checks.
"""

from typing import TypedDict

from common.services.base import RpcService
from monero_harness import MonerodClient, WalletClient


class MonerodProps(TypedDict):
    """Properties for the monerod service."""

    p2p_port: int
    rpc_port: int
    rpc_url: str
    datadir: str


class WalletRpcProps(TypedDict):
    """Properties for the monero-wallet-rpc service."""

    rpc_port: int
    rpc_url: str
    daemon_address: str
    wallet_dir: str


class MonerodService(RpcService):
    """
    RpcService for monerod with health check via `get_block_count`.
    """

    props: MonerodProps

    def __init__(
        self,
        props: MonerodProps,
        cmd: list[str],
        stdout: str | None = None,
        name: str | None = None,
    ):
        super().__init__(dict(props), cmd, stdout, name)

    def _rpc_health_check(self, rpc: MonerodClient):
        rpc.get_block_count()

    def create_rpc(self) -> MonerodClient:
        if not self.check_status():
            raise RuntimeError("Service is not running")

        return self._attach_status_check(MonerodClient(self.props["rpc_url"]))


class WalletRpcService(RpcService):
    """
    RpcService for monero-wallet-rpc with health check via `get_version`.
    """

    props: WalletRpcProps

    def __init__(
        self,
        props: WalletRpcProps,
        cmd: list[str],
        stdout: str | None = None,
        name: str | None = None,
    ):
        super().__init__(dict(props), cmd, stdout, name)

    def _rpc_health_check(self, rpc: WalletClient):
        rpc.get_version()

    def create_rpc(self) -> WalletClient:
        if not self.check_status():
            raise RuntimeError("Service is not running")

        return self._attach_status_check(WalletClient(self.props["rpc_url"]))
