"""
monerod and monero-wallet-rpc factories.
Creates regtest daemons and wallet services for testing.
"""

import contextlib
import os

import flexitest

from common.services import MonerodProps, MonerodService, WalletRpcProps, WalletRpcService
from monero_harness.config import JSON_RPC_PATH, ServiceType


def _check_ports(name: str, port_range: range) -> list[int]:
    ports = list(port_range)
    if any(p < 1024 or p > 65535 for p in ports):
        raise ValueError(
            f"{name}: Port range must be between 1024 and 65535. "
            f"Got: {port_range.start}-{port_range.stop - 1}"
        )
    return ports


class MonerodFactory(flexitest.Factory):
    """
    Factory for creating monerod regtest nodes.

    Usage:
        factory = MonerodFactory(range(18080, 18180))
        monerod = factory.create_regtest()
        rpc = monerod.create_rpc()
    """

    def __init__(self, port_range: range):
        super().__init__(_check_ports("MonerodFactory", port_range))

    @flexitest.with_ectx("ctx")
    def create_regtest(self, **kwargs) -> MonerodService:
        """
        Create a monerod regtest node with fixed difficulty 1.

        Returns:
            Service with RPC access via .create_rpc()
        """
        # The `with_ectx` ensures this is available.
        ctx: flexitest.EnvContext = kwargs["ctx"]

        datadir = ctx.make_service_dir(ServiceType.Monerod)
        p2p_port = self.next_port()
        rpc_port = self.next_port()
        logfile = os.path.join(datadir, "service.log")

        cmd = [
            "monerod",
            "--regtest",
            "--offline",
            "--fixed-difficulty=1",
            "--no-igd",
            "--hide-my-port",
            "--non-interactive",
            "--no-zmq",
            f"--data-dir={datadir}",
            f"--p2p-bind-port={p2p_port}",
            "--rpc-bind-ip=127.0.0.1",
            f"--rpc-bind-port={rpc_port}",
            f"--log-file={os.path.join(datadir, 'monerod.log')}",
        ]

        props: MonerodProps = {
            "p2p_port": p2p_port,
            "rpc_port": rpc_port,
            "rpc_url": f"http://127.0.0.1:{rpc_port}{JSON_RPC_PATH}",
            "datadir": datadir,
        }

        svc = MonerodService(props, cmd, stdout=logfile, name=ServiceType.Monerod)
        try:
            svc.start()
        except Exception as e:
            with contextlib.suppress(Exception):
                svc.stop()
            raise RuntimeError(f"Failed to start monerod service: {e}") from e

        return svc


class WalletRpcFactory(flexitest.Factory):
    """
    Factory for creating monero-wallet-rpc services attached to a monerod.
    """

    def __init__(self, port_range: range):
        super().__init__(_check_ports("WalletRpcFactory", port_range))

    @flexitest.with_ectx("ctx")
    def create_wallet_rpc(self, monerod_rpc_port: int, **kwargs) -> WalletRpcService:
        """
        Create a monero-wallet-rpc pointed at the monerod on `monerod_rpc_port`.
        Wallet files live in the service directory.
        """
        ctx: flexitest.EnvContext = kwargs["ctx"]

        wallet_dir = ctx.make_service_dir(ServiceType.WalletRpc)
        rpc_port = self.next_port()
        logfile = os.path.join(wallet_dir, "service.log")
        daemon_address = f"127.0.0.1:{monerod_rpc_port}"

        cmd = [
            "monero-wallet-rpc",
            f"--daemon-address={daemon_address}",
            "--trusted-daemon",
            "--disable-rpc-login",
            "--non-interactive",
            "--rpc-bind-ip=127.0.0.1",
            f"--rpc-bind-port={rpc_port}",
            f"--wallet-dir={wallet_dir}",
            f"--log-file={os.path.join(wallet_dir, 'wallet-rpc.log')}",
        ]

        props: WalletRpcProps = {
            "rpc_port": rpc_port,
            "rpc_url": f"http://127.0.0.1:{rpc_port}{JSON_RPC_PATH}",
            "daemon_address": daemon_address,
            "wallet_dir": wallet_dir,
        }

        svc = WalletRpcService(props, cmd, stdout=logfile, name=ServiceType.WalletRpc)
        try:
            svc.start()
        except Exception as e:
            with contextlib.suppress(Exception):
                svc.stop()
            raise RuntimeError(f"Failed to start monero-wallet-rpc service: {e}") from e

        return svc
