"""Test wallet creation and account bookkeeping against monero-wallet-rpc."""

import logging

import flexitest

from common.base_test import MoneroTest
from monero_harness import RpcError
from monero_harness.config import ServiceType

logger = logging.getLogger(__name__)

# This is intentionally _not_ one of the party labels.
LABEL = "Arbitrary Label"


@flexitest.register
class TestWalletAccounts(MoneroTest):
    """
    A fresh wallet has an empty primary account, created accounts show up in
    `get_accounts`, and a wallet file can't be created twice.
    """

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("monero")

    def main(self, ctx):
        wallet = self.get_service(ServiceType.WalletRpc).create_rpc()

        wallet.create_wallet("accounts_wallet")
        assert wallet.get_balance(0).balance == 0

        created = [wallet.create_account(LABEL) for _ in range(2)]
        accounts = wallet.get_accounts("")
        logger.info(f"Wallet accounts: {accounts.subaddress_accounts}")

        assert len(accounts.subaddress_accounts) == len(created) + 1
        assert accounts.find_by_label(LABEL) == created[0]

        try:
            wallet.create_wallet("accounts_wallet")
        except RpcError as e:
            logger.info(f"Duplicate wallet rejected: {e}")
        else:
            raise AssertionError("Creating the same wallet twice should fail")

        return True
