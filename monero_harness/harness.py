"""
Bootstraps a monerod + monero-wallet-rpc pair into a known, funded state.

Does the following:

- Create a wallet.
- Create two wallet sub accounts for the two parties of a test.
- Mine seed blocks to the wallet's primary address so it has spendable funds.
- Send the requested amounts from the primary account to each party,
  mining a few blocks after every transfer so it unlocks.
- Keep mining a block every interval in the background.
"""

import logging
import threading

from monero_harness.config import PRIMARY_ACCOUNT_INDEX, BootstrapState, HarnessConfig
from monero_harness.daemon import MonerodClient
from monero_harness.errors import Cancelled, InsufficientSeedFunds, SyncTimeout
from monero_harness.miner import Miner
from monero_harness.rpc_types import Account, Balance, Destination, Transfer, WalletHeight
from monero_harness.wait import poll_until
from monero_harness.wallet import WalletClient

logger = logging.getLogger(__name__)


class MoneroHarness:
    """
    Owns the daemon and wallet clients and the background miner.

    Usage:
        config = HarnessConfig(first_party_funding=1000, second_party_funding=500)
        with MoneroHarness.localhost(monerod_port, wallet_port, config) as harness:
            harness.init()
            harness.get_balance(harness.first_party).balance  # 1000
    """

    def __init__(
        self,
        monerod: MonerodClient,
        wallet: WalletClient,
        config: HarnessConfig | None = None,
    ):
        self.monerod = monerod
        self.wallet = wallet
        self.config = config or HarnessConfig()
        self.state = BootstrapState.Uninitialized
        self.primary: Account | None = None
        self.first_party: Account | None = None
        self.second_party: Account | None = None
        self.miner: Miner | None = None
        self._cancel = threading.Event()

    @classmethod
    def localhost(
        cls,
        monerod_port: int,
        wallet_port: int,
        config: HarnessConfig | None = None,
    ) -> "MoneroHarness":
        config = config or HarnessConfig()
        monerod = MonerodClient.localhost(monerod_port, name="monerod", timeout=config.rpc_timeout_secs)
        wallet = WalletClient.localhost(wallet_port, name="wallet_rpc", timeout=config.rpc_timeout_secs)
        return cls(monerod, wallet, config)

    def __enter__(self) -> "MoneroHarness":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    def _set_state(self, state: BootstrapState) -> None:
        logger.debug(f"Bootstrap state: {self.state} -> {state}")
        self.state = state

    def _checkpoint(self) -> None:
        if self._cancel.is_set():
            raise Cancelled(f"Harness shut down during bootstrap (state: {self.state})")

    @property
    def primary_address(self) -> str:
        if self.primary is None:
            raise RuntimeError("Wallet not initialized, call init() first")
        return self.primary.address

    def init(self) -> None:
        """
        Run the full bootstrap: wallet, both party accounts, seed blocks,
        funding and the background miner.

        The first failure propagates and leaves whatever was already done in place.
        """
        logger.debug(f"Bootstrapping with {self.config.as_dict()}")
        self._create_wallet()

        self._checkpoint()
        self.first_party = self.wallet.create_account(self.config.first_party_label)
        self._checkpoint()
        self.second_party = self.wallet.create_account(self.config.second_party_label)
        logger.info(
            f"Created accounts {self.first_party.label} (#{self.first_party.index}) "
            f"and {self.second_party.label} (#{self.second_party.index})"
        )
        self._set_state(BootstrapState.AccountsCreated)

        self._load_primary()
        self._generate_seed_blocks()

        for account, amount in (
            (self.first_party, self.config.first_party_funding),
            (self.second_party, self.config.second_party_funding),
        ):
            if amount == 0:
                logger.info(f"Not funding {account.label}")
                continue
            self._set_state(BootstrapState.Funding)
            self.fund(account, amount)

        self._start_miner()
        self._set_state(BootstrapState.Ready)

    def init_miner_only(self) -> None:
        """Create the wallet, mine the seed blocks and start the miner. No parties."""
        self._create_wallet()
        self._load_primary()
        self._generate_seed_blocks()
        self._start_miner()
        self._set_state(BootstrapState.Ready)

    def _create_wallet(self) -> None:
        if self.state != BootstrapState.Uninitialized:
            raise RuntimeError(f"Harness already bootstrapped (state: {self.state})")

        self._checkpoint()
        logger.info(f"Creating wallet '{self.config.wallet_filename}'")
        self.wallet.create_wallet(self.config.wallet_filename)
        self._set_state(BootstrapState.WalletCreated)

    def _load_primary(self) -> None:
        self._checkpoint()
        address = self.wallet.get_address(PRIMARY_ACCOUNT_INDEX).address
        self.primary = Account(index=PRIMARY_ACCOUNT_INDEX, address=address, label="primary")

    def _generate_seed_blocks(self) -> None:
        if self.config.seed_blocks > 0:
            logger.info(f"Pre generating {self.config.seed_blocks} blocks to {self.primary_address}")
            self.generate_blocks(self.config.seed_blocks)
        self._set_state(BootstrapState.SeedBlocksGenerated)

    def _start_miner(self) -> None:
        if not self.config.start_miner:
            return
        self._checkpoint()
        self.miner = Miner(self.monerod, self.primary_address, self.config.block_interval_secs)
        self.miner.start()
        # shutdown() may have run before `self.miner` was set.
        if self._cancel.is_set():
            self.miner.stop()
            self._checkpoint()
        self._set_state(BootstrapState.MinerStarted)

    def generate_blocks(self, count: int) -> int:
        """Mine `count` blocks to the primary address and wait for the wallet to see them."""
        self._checkpoint()
        height = self.monerod.generate_blocks(count, self.primary_address).height
        self.wait_for_wallet_height(height)
        return height

    def wait_for_wallet_height(self, height: int) -> WalletHeight:
        """
        Poll the wallet until it has synced up to `height`.

        Raises:
            SyncTimeout: If `config.wallet_sync_timeout_secs` passes first
            Cancelled: If the harness is shut down meanwhile
        """
        # Past bootstrap the state stays Ready.
        bootstrapping = self.state != BootstrapState.Ready
        prev_state = self.state
        if bootstrapping:
            self._set_state(BootstrapState.SyncWait)
        logger.debug(f"Waiting for wallet to reach height {height}")

        def wallet_height() -> WalletHeight:
            if self.config.refresh_wallet_on_sync:
                self._checkpoint()
                self.wallet.refresh()
            self._checkpoint()
            return self.wallet.get_height()

        synced = poll_until(
            wallet_height,
            lambda h: h.height >= height,
            step=self.config.wallet_sync_poll_interval_secs,
            timeout=self.config.wallet_sync_timeout_secs,
            cancel=self._cancel,
            error_with=f"Wallet did not sync to height {height}",
            timeout_error=SyncTimeout,
        )
        if bootstrapping:
            self._set_state(prev_state)
        return synced

    def fund(self, account: Account, amount: int) -> Transfer | None:
        """
        Send `amount` from the primary account to `account`, then mine
        `config.top_up_blocks_per_funding` blocks (at least one) so it unlocks.

        Returns None without touching the wallet when `amount` is 0.
        """
        if amount == 0:
            return None

        self._checkpoint()
        available = self.wallet.get_balance(PRIMARY_ACCOUNT_INDEX).unlocked_balance
        if amount > available:
            raise InsufficientSeedFunds(amount, available)

        self._checkpoint()
        transfer = self.wallet.transfer(
            PRIMARY_ACCOUNT_INDEX, [Destination(address=account.address, amount=amount)]
        )
        logger.info(f"Sent {amount} to {account.label} (#{account.index}) in tx {transfer.tx_hash}")

        self.generate_blocks(max(self.config.top_up_blocks_per_funding, 1))
        return transfer

    def get_balance(self, account: Account) -> Balance:
        return self.wallet.get_balance(account.index)

    def transfer_from(self, account: Account, amount: int, address: str) -> Transfer:
        """Pay `amount` to `address` out of `account`."""
        return self.wallet.transfer(account.index, [Destination(address=address, amount=amount)])

    def check_miner(self) -> None:
        """Raise `MinerError` if the background miner stopped on a failure."""
        if self.miner is not None:
            self.miner.check()

    def shutdown(self, timeout: float | None = 5) -> None:
        """Stop the background miner and cancel any pending wait."""
        self._cancel.set()
        if self.miner is not None:
            self.miner.stop(timeout)
