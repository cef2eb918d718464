from monero_harness.rpc_types.monero import (
    Account,
    Accounts,
    Address,
    Balance,
    BlockCount,
    BlockHeader,
    CreatedAccount,
    Destination,
    GenerateBlocks,
    Refresh,
    RpcResult,
    SubaddressAccount,
    Transfer,
    TxKeyCheck,
    WalletHeight,
    WalletVersion,
)

__all__ = [
    "Account",
    "Accounts",
    "Address",
    "Balance",
    "BlockCount",
    "BlockHeader",
    "CreatedAccount",
    "Destination",
    "GenerateBlocks",
    "Refresh",
    "RpcResult",
    "SubaddressAccount",
    "Transfer",
    "TxKeyCheck",
    "WalletHeight",
    "WalletVersion",
]
