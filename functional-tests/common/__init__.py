"""
Support code for the functional tests.
Provides service wrappers for monerod and monero-wallet-rpc, the base test
class and the logging-aware runtime.
"""
