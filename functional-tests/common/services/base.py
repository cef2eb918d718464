"""
Service wrapper extending flexitest.service.ProcService with standardized methods.

Avoids ad-hoc monkey-patching and provides type-safe service abstractions.
"""

import logging
from typing import Any

import flexitest

from monero_harness.rpc import JsonRpcClient
from monero_harness.wait import wait_until


class RpcService(flexitest.service.ProcService):
    """
    Extends ProcService with RPC capabilities and standardized methods for test services.

    Subclasses must implement create_rpc() and _rpc_health_check().

    Usage:
        svc = MonerodService(props, cmd, stdout="/path/to/service.log", name="monerod")
        svc.start()
        svc.wait_for_ready()
        rpc = svc.create_rpc()
        svc.stop()
    """

    def __init__(
        self,
        props: dict[str, Any],
        cmd: list[str],
        stdout: str | None = None,
        name: str | None = None,
    ):
        """
        Initialize service wrapper.

        Args:
            props: Service properties (ports, URLs, etc.)
            cmd: Command and arguments to execute
            stdout: Path to log file for stdout/stderr
            name: Service name for logging
        """
        super().__init__(props, cmd, stdout)
        self._name = name or cmd[0]
        self._logger = logging.getLogger(f"service.{self._name}")

    def create_rpc(self):
        """
        Create RPC client for this service.

        Raises:
            NotImplementedError: If subclass doesn't implement this method
            RuntimeError: If service is not running
        """
        raise NotImplementedError("Subclass must implement create_rpc()")

    def _rpc_health_check(self, rpc: Any) -> None:
        """
        Perform RPC call to verify service health. Should raise if unhealthy.
        """
        raise NotImplementedError("Subclass must implement _rpc_health_check()")

    def _attach_status_check(self, rpc: JsonRpcClient) -> JsonRpcClient:
        def _status_check(method: str):
            if not self.check_status():
                self._logger.warning(f"service '{self._name}' crashed before call to {method}")
                raise RuntimeError(f"process '{self._name}' crashed")

        rpc.set_pre_call_hook(_status_check)
        return rpc

    def check_health(self) -> bool:
        """
        Check if service is healthy and ready to accept requests.

        Returns:
            True if service is healthy, False otherwise
        """
        if not self.check_status():
            return False

        try:
            rpc = self.create_rpc()
            self._rpc_health_check(rpc)
            return True
        except Exception:
            return False

    def wait_for_ready(self, timeout: int = 30, interval: float = 0.5) -> None:
        """
        Wait until service is healthy and ready.

        Raises:
            AssertionError: If service doesn't become ready within timeout
        """
        wait_until(
            self.check_health,
            error_with=f"Service '{self._name}' not ready",
            timeout=timeout,
            step=interval,
        )
