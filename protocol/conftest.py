"""Shared fixtures for protocol tests."""

import pytest

from seraph import AccessRegistry
from shared import Chain, get_config

DEPLOYER = "0xdeployer"


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop cached settings around each test so env overrides stay local."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def chain() -> Chain:
    return Chain()


@pytest.fixture
def registry(chain: Chain) -> AccessRegistry:
    return AccessRegistry(chain, admin=DEPLOYER)
