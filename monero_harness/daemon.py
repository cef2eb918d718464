"""
Typed client for the monerod JSON-RPC interface.
"""

from monero_harness.errors import MalformedResponse
from monero_harness.rpc import JsonRpcClient
from monero_harness.rpc_types import BlockCount, BlockHeader, GenerateBlocks


def _block_header(result) -> BlockHeader:
    if not isinstance(result, dict) or "block_header" not in result:
        raise MalformedResponse("Missing 'block_header' in result", result)
    return BlockHeader.from_result(result["block_header"])


class MonerodClient(JsonRpcClient):
    """
    RPC client for monerod.

    Usage:
        monerod = MonerodClient.localhost(18081)
        genesis = monerod.get_block_header_by_height(0)
    """

    def __init__(self, url: str, name: str | None = "monerod", timeout: float = 30):
        super().__init__(url, name=name, timeout=timeout)

    def get_block_header_by_height(self, height: int) -> BlockHeader:
        return self.call("get_block_header_by_height", {"height": height}, _block_header)

    def get_last_block_header(self) -> BlockHeader:
        return self.call("get_last_block_header", {}, _block_header)

    def get_block_count(self) -> BlockCount:
        return self.call("get_block_count", {}, BlockCount.from_result)

    def generate_blocks(self, count: int, reward_address: str) -> GenerateBlocks:
        """
        Mine `count` blocks to `reward_address`.

        monerod only returns once the blocks exist, so headers up to the
        returned height can be queried right away.
        """
        params = {"amount_of_blocks": count, "wallet_address": reward_address}
        return self.call("generateblocks", params, GenerateBlocks.from_result)
