"""
Configuration dataclasses for the harness.
"""

from dataclasses import asdict, dataclass, field


@dataclass
class HarnessConfig:
    """
    Bootstrap configuration passed to `MoneroHarness`.

    Funding amounts are in atomic units; 0 means the party isn't funded.
    `wallet_sync_timeout_secs=None` waits for the wallet indefinitely.
    """

    seed_blocks: int = field(default=70)
    top_up_blocks_per_funding: int = field(default=10)
    block_interval_secs: float = field(default=1)
    wallet_sync_poll_interval_ms: int = field(default=1000)
    first_party_funding: int = field(default=0)
    second_party_funding: int = field(default=0)
    wallet_sync_timeout_secs: float | None = field(default=120)
    wallet_filename: str = field(default="wallet")
    first_party_label: str = field(default="Alice")
    second_party_label: str = field(default="Bob")
    refresh_wallet_on_sync: bool = field(default=True)
    rpc_timeout_secs: float = field(default=30)
    start_miner: bool = field(default=True)

    def __post_init__(self):
        for name in (
            "seed_blocks",
            "top_up_blocks_per_funding",
            "first_party_funding",
            "second_party_funding",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        # A funding transfer only counts once it is mined.
        if self.top_up_blocks_per_funding < 1 and (
            self.first_party_funding or self.second_party_funding
        ):
            raise ValueError("top_up_blocks_per_funding must be at least 1 when funding a party")
        if self.block_interval_secs <= 0:
            raise ValueError(f"block_interval_secs must be positive, got {self.block_interval_secs}")
        if self.wallet_sync_poll_interval_ms <= 0:
            raise ValueError(
                "wallet_sync_poll_interval_ms must be positive, "
                f"got {self.wallet_sync_poll_interval_ms}"
            )
        if self.wallet_sync_timeout_secs is not None and self.wallet_sync_timeout_secs <= 0:
            raise ValueError(
                f"wallet_sync_timeout_secs must be positive, got {self.wallet_sync_timeout_secs}"
            )
        if not self.wallet_filename:
            raise ValueError("wallet_filename must not be empty")

    @property
    def wallet_sync_poll_interval_secs(self) -> float:
        return self.wallet_sync_poll_interval_ms / 1000

    def as_dict(self) -> dict:
        return asdict(self)
