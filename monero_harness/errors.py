"""
Exceptions raised by the RPC clients and the harness.
"""


class HarnessError(Exception):
    """Base class for everything raised by monero_harness."""


class TransportError(HarnessError):
    """Raised when a service can't be reached at the HTTP layer."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Transport error talking to {url}: {reason}")


class RpcError(HarnessError):
    """Raised when an RPC call returns an error."""

    def __init__(self, error: dict):
        self.code = error.get("code")
        self.message = error.get("message")
        self.data = error.get("data")
        super().__init__(f"RPC Error {self.code}: {self.message}")


class MalformedResponse(RpcError):
    """Raised when a response body doesn't have the expected shape."""

    def __init__(self, message: str, body=None):
        super().__init__({"code": -1, "message": message, "data": body})


class InsufficientSeedFunds(HarnessError):
    """Raised before a funding transfer the primary account can't cover."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested funding of {requested} exceeds unlocked primary balance {available}"
        )


class WaitTimeout(HarnessError):
    """Raised when a polling wait runs past its deadline."""


class SyncTimeout(WaitTimeout):
    """Raised when the wallet doesn't catch up with the daemon in time."""


class Cancelled(HarnessError):
    """Raised at a suspension point after the harness was shut down."""


class MinerError(HarnessError):
    """Wraps the failure that stopped the background miner."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Background miner stopped: {cause}")
