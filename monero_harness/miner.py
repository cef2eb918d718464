"""
Background block production.
"""

import logging
import queue
import threading

from monero_harness.daemon import MonerodClient
from monero_harness.errors import MinerError

logger = logging.getLogger(__name__)


class Miner:
    """
    Generates one block to `reward_address` every `interval_secs` on a daemon thread.

    The first failure stops block production. It is logged, kept in `error` and
    pushed to `errors` so whoever owns the miner can notice.

    Usage:
        miner = Miner(monerod, primary_address, interval_secs=1)
        miner.start()
        ...
        miner.stop()
        miner.check()
    """

    def __init__(self, monerod: MonerodClient, reward_address: str, interval_secs: float = 1):
        self.monerod = monerod
        self.reward_address = reward_address
        self.interval_secs = interval_secs
        self.errors: queue.Queue[BaseException] = queue.Queue()
        self.error: BaseException | None = None
        self.blocks_mined = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Miner already started")

        self._thread = threading.Thread(target=self._run, name="monero-miner", daemon=True)
        self._thread.start()
        logger.info(
            f"Mining a block to {self.reward_address} every {self.interval_secs}s"
        )

    def _run(self) -> None:
        while not self._stop.wait(self.interval_secs):
            try:
                self.monerod.generate_blocks(1, self.reward_address)
            except Exception as ex:
                logger.error(f"{ex} while generating to address {self.reward_address}")
                self.error = ex
                self.errors.put(ex)
                return
            self.blocks_mined += 1

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def stop(self, timeout: float | None = None) -> None:
        """Ask the thread to exit and wait up to `timeout` for it."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the thread to exit on its own, i.e. after a failure."""
        if self._thread is not None:
            self._thread.join(timeout)

    def check(self) -> None:
        """Raise `MinerError` if block production stopped on a failure."""
        if self.error is not None:
            raise MinerError(self.error) from self.error
