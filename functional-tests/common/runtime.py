"""
Custom test runtime with test name tracking for logging.
"""

import flexitest

from common.test_logging import set_current_test


class TestRuntimeWithLogging(flexitest.TestRuntime):
    """
    TestRuntime that tags harness and RPC logs with the test being run.
    """

    def _exec_test(self, test_name: str, env):
        set_current_test(test_name)
        try:
            return super()._exec_test(test_name, env)
        finally:
            set_current_test(None)
