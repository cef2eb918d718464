"""
Pytest fixtures: an in-process stand-in for monerod and monero-wallet-rpc
served through requests-mock.
"""

import threading

import pytest

from monero_harness import HarnessConfig, MonerodClient, MoneroHarness, WalletClient

DAEMON_PORT = 18081
WALLET_PORT = 18083
DAEMON_URL = f"http://127.0.0.1:{DAEMON_PORT}/json_rpc"
WALLET_URL = f"http://127.0.0.1:{WALLET_PORT}/json_rpc"

BLOCK_REWARD = 10**12
FEE = 100
COINBASE_LOCK_BLOCKS = 60
TRANSFER_LOCK_BLOCKS = 10


class RpcFault(Exception):
    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message


class FakeMonero:
    """
    Just enough of a regtest chain and a single wallet-rpc to drive the harness.

    Heights are block counts: genesis only means height 1. Outputs unlock
    after the same number of blocks monerod uses for coinbase and transfers.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.height = 1
        self.wallet_height = 1
        self.wallet_frozen = False
        self.sync_step: int | None = None
        self.wallets: set[str] = set()
        self.open_wallet: str | None = None
        self.accounts: list[dict] = []
        self.outputs: list[tuple[int, int, int]] = []
        self.pending: list[tuple[int, int]] = []
        self.txs: dict[str, dict] = {}
        self.calls: list[tuple[str, str, dict]] = []
        self.raw_bodies: list[str] = []
        self.faults: dict[str, RpcFault] = {}

    # helpers

    def methods(self, service: str | None = None) -> list[str]:
        return [m for s, m, _ in self.calls if service is None or s == service]

    def fail(self, method: str, code: int = -1, message: str = "injected failure"):
        self.faults[method] = RpcFault(code, message)

    def balance(self, index: int) -> int:
        return sum(amount for idx, amount, _ in self.outputs if idx == index)

    def unlocked(self, index: int) -> int:
        return sum(
            amount for idx, amount, unlock in self.outputs if idx == index and unlock <= self.height
        )

    def _account_by_address(self, address: str) -> int | None:
        for i, acc in enumerate(self.accounts):
            if acc["address"] == address:
                return i
        return None

    def _header(self, height: int) -> dict:
        return {
            "block_size": 100,
            "block_weight": 100,
            "cumulative_difficulty": height + 1,
            "depth": self.height - 1 - height,
            "difficulty": 1,
            "hash": f"{height:064x}",
            "height": height,
            "major_version": 16,
            "minor_version": 16,
            "nonce": 0,
            "num_txes": 0,
            "orphan_status": False,
            "prev_hash": f"{height - 1:064x}" if height else "0" * 64,
            "reward": BLOCK_REWARD,
            "timestamp": 1600000000 + height,
        }

    # request handling

    def _dispatch(self, service: str, request, context, handlers: dict):
        body = request.json()
        method = body["method"]
        params = body.get("params") or {}
        with self.lock:
            self.raw_bodies.append(request.text)
            self.calls.append((service, method, params))
            try:
                if method in self.faults:
                    raise self.faults[method]
                if method not in handlers:
                    raise RpcFault(-32601, "Method not found")
                result = handlers[method](params)
            except RpcFault as f:
                return {"id": body["id"], "jsonrpc": "2.0", "error": {"code": f.code, "message": f.message}}
        return {"id": body["id"], "jsonrpc": "2.0", "result": result}

    def handle_daemon(self, request, context):
        return self._dispatch(
            "daemon",
            request,
            context,
            {
                "get_block_header_by_height": self._get_block_header_by_height,
                "get_last_block_header": lambda _: {"block_header": self._header(self.height - 1), "status": "OK"},
                "get_block_count": lambda _: {"count": self.height, "status": "OK"},
                "generateblocks": self._generateblocks,
            },
        )

    def handle_wallet(self, request, context):
        return self._dispatch(
            "wallet",
            request,
            context,
            {
                "create_wallet": self._create_wallet,
                "create_account": self._create_account,
                "get_accounts": self._get_accounts,
                "get_address": self._get_address,
                "get_balance": self._get_balance,
                "transfer": self._transfer,
                "get_height": self._get_height,
                "refresh": self._refresh,
                "check_tx_key": self._check_tx_key,
                "get_version": lambda _: {"version": 65562},
            },
        )

    # daemon

    def _get_block_header_by_height(self, params):
        height = params["height"]
        if height >= self.height:
            raise RpcFault(
                -2,
                f"Requested block height: {height} greater than current top block height: {self.height - 1}",
            )
        return {"block_header": self._header(height), "status": "OK", "untrusted": False}

    def _generateblocks(self, params):
        idx = self._account_by_address(params["wallet_address"])
        blocks = []
        for _ in range(params["amount_of_blocks"]):
            self.height += 1
            blocks.append(f"{self.height - 1:064x}")
            if idx is not None:
                self.outputs.append((idx, BLOCK_REWARD, self.height + COINBASE_LOCK_BLOCKS - 1))
            for dst, amount in self.pending:
                self.outputs.append((dst, amount, self.height + TRANSFER_LOCK_BLOCKS - 1))
            self.pending = []
        return {"blocks": blocks, "height": self.height, "status": "OK", "untrusted": False}

    # wallet

    def _require_wallet(self):
        if self.open_wallet is None:
            raise RpcFault(-13, "No wallet file")

    def _create_wallet(self, params):
        filename = params["filename"]
        if filename in self.wallets:
            raise RpcFault(-21, "Cannot create wallet. Already exists.")
        self.wallets.add(filename)
        self.open_wallet = filename
        self.accounts = [{"label": "Primary account", "address": f"{filename}-addr-0", "tag": ""}]
        self.outputs = []
        self.wallet_height = self.height
        return {}

    def _create_account(self, params):
        self._require_wallet()
        index = len(self.accounts)
        address = f"{self.open_wallet}-addr-{index}"
        self.accounts.append({"label": params.get("label", ""), "address": address, "tag": ""})
        return {"account_index": index, "address": address}

    def _get_accounts(self, params):
        self._require_wallet()
        tag = params.get("tag", "")
        entries = [
            {
                "account_index": i,
                "balance": self.balance(i),
                "base_address": acc["address"],
                "label": acc["label"],
                "tag": acc["tag"],
                "unlocked_balance": self.unlocked(i),
            }
            for i, acc in enumerate(self.accounts)
            if not tag or acc["tag"] == tag
        ]
        return {
            "subaddress_accounts": entries,
            "total_balance": sum(e["balance"] for e in entries),
            "total_unlocked_balance": sum(e["unlocked_balance"] for e in entries),
        }

    def _get_address(self, params):
        self._require_wallet()
        index = params["account_index"]
        if index >= len(self.accounts):
            raise _account_out_of_bound(index)
        address = self.accounts[index]["address"]
        return {"address": address, "addresses": [{"address": address, "address_index": 0}]}

    def _get_balance(self, params):
        self._require_wallet()
        index = params["account_index"]
        if index >= len(self.accounts):
            raise _account_out_of_bound(index)
        return {
            "balance": self.balance(index),
            "unlocked_balance": self.unlocked(index),
            "multisig_import_needed": False,
            "blocks_to_unlock": 0,
            "time_to_unlock": 0,
        }

    def _transfer(self, params):
        self._require_wallet()
        src = params["account_index"]
        total = sum(d["amount"] for d in params["destinations"])
        if self.unlocked(src) < total + FEE:
            raise RpcFault(-17, "not enough money")
        for d in params["destinations"]:
            dst = self._account_by_address(d["address"])
            if dst is not None:
                self.pending.append((dst, d["amount"]))
        self.outputs.append((src, -(total + FEE), 0))
        tx_hash = f"tx{len(self.txs):062x}"
        self.txs[tx_hash] = {"key": f"key-{tx_hash}", "destinations": params["destinations"], "height": self.height}
        return {
            "amount": total,
            "fee": FEE,
            "multisig_txset": "",
            "tx_blob": "00",
            "tx_hash": tx_hash,
            "tx_key": f"key-{tx_hash}",
            "tx_metadata": "",
            "unsigned_txset": "",
        }

    def _get_height(self, params):
        self._require_wallet()
        if not self.wallet_frozen:
            step = self.sync_step or self.height
            self.wallet_height = min(self.height, self.wallet_height + step)
        return {"height": self.wallet_height}

    def _refresh(self, params):
        self._require_wallet()
        fetched = 0
        if not self.wallet_frozen:
            fetched = self.height - self.wallet_height
            self.wallet_height = self.height
        return {"blocks_fetched": fetched, "received_money": False}

    def _check_tx_key(self, params):
        tx = self.txs.get(params["txid"])
        if tx is None or tx["key"] != params["tx_key"]:
            raise RpcFault(-8, "Failed to get transaction from daemon")
        received = sum(d["amount"] for d in tx["destinations"] if d["address"] == params["address"])
        return {"confirmations": self.height - tx["height"] - 1, "in_pool": False, "received": received}


def _account_out_of_bound(index: int) -> RpcFault:
    return RpcFault(-2, f"account index is out of bound: {index}")


@pytest.fixture
def fake_monero(requests_mock) -> FakeMonero:
    fake = FakeMonero()
    requests_mock.post(DAEMON_URL, json=fake.handle_daemon)
    requests_mock.post(WALLET_URL, json=fake.handle_wallet)
    return fake


@pytest.fixture
def monerod(fake_monero) -> MonerodClient:
    return MonerodClient.localhost(DAEMON_PORT)


@pytest.fixture
def wallet(fake_monero) -> WalletClient:
    return WalletClient.localhost(WALLET_PORT)


@pytest.fixture
def fast_config() -> HarnessConfig:
    return HarnessConfig(
        block_interval_secs=0.01,
        wallet_sync_poll_interval_ms=1,
        wallet_sync_timeout_secs=2,
    )


@pytest.fixture
def make_harness(fake_monero, fast_config):
    """Build harnesses against the fake services; all are shut down afterwards."""
    created: list[MoneroHarness] = []

    def _make(config: HarnessConfig | None = None) -> MoneroHarness:
        harness = MoneroHarness.localhost(DAEMON_PORT, WALLET_PORT, config or fast_config)
        created.append(harness)
        return harness

    yield _make

    for harness in created:
        harness.shutdown()
