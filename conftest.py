"""Configures pytest further."""
import pytest


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip tests that generate fresh keys")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extremely slow key size tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: generates fresh keys; skipped with --skip-slow")
    config.addinivalue_line("markers", "extreme: very large keys; needs --run-extreme")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)
