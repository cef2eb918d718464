#!/usr/bin/env python3
"""
Functional test runner.

Needs `monerod` and `monero-wallet-rpc` on PATH.

Usage:
    ./entry.py                              # Run all tests
    ./entry.py -t test_init_accounts        # Run specific test
    ./entry.py -g harness                   # Run test group
"""

import argparse
import os
import sys

import flexitest

from common.runtime import TestRuntimeWithLogging
from common.test_logging import setup_logging
from envconfigs import MoneroEnvConfig
from factories import MonerodFactory, WalletRpcFactory
from monero_harness.config import ServiceType

TEST_DIR = "tests"


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="entry.py",
        description="Run functional tests",
    )
    parser.add_argument(
        "-t",
        "--tests",
        nargs="*",
        help="Run specific test(s)",
    )
    parser.add_argument(
        "-g",
        "--groups",
        nargs="*",
        help="Run test group(s)",
    )
    return parser.parse_args(argv[1:])


def filter_tests(args: argparse.Namespace, modules: dict[str, str]) -> dict[str, str]:
    """
    Filters test modules against parsed args supplied from the command line.
    A test's groups are the directories between TEST_DIR and its file.
    """
    arg_groups = frozenset(args.groups or [])
    arg_tests = frozenset(os.path.split(t)[1].removesuffix(".py") for t in args.tests or [])

    filtered = dict()
    for test, path in modules.items():
        parts = os.path.normpath(path).split(os.path.sep)
        idx = max(i for i, part in enumerate(parts) if part == TEST_DIR)
        test_groups = frozenset(parts[idx + 1 : -1])

        if arg_groups and not (arg_groups & test_groups):
            continue
        if arg_tests and test not in arg_tests:
            continue
        filtered[test] = path

    return filtered


def main(argv: list[str]) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging()

    factories: dict[ServiceType, flexitest.Factory] = {
        ServiceType.Monerod: MonerodFactory(range(18080, 18180)),
        ServiceType.WalletRpc: WalletRpcFactory(range(18280, 18380)),
    }

    global_envs: dict[str, flexitest.EnvConfig] = {
        "monero": MoneroEnvConfig(),
    }

    root_dir = os.path.dirname(os.path.abspath(__file__))
    datadir = flexitest.create_datadir_in_workspace(os.path.join(root_dir, "_dd"))
    runtime = TestRuntimeWithLogging(global_envs, datadir, factories)

    test_dir = os.path.join(root_dir, TEST_DIR)
    modules = filter_tests(args, flexitest.runtime.scan_dir_for_modules(test_dir))
    tests = flexitest.runtime.load_candidate_modules(modules)

    runtime.prepare_registered_tests()
    results = runtime.run_tests(tests)

    runtime.save_json_file("results.json", results)
    flexitest.dump_results(results)

    flexitest.fail_on_error(results)

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
