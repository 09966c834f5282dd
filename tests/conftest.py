"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from rmm.amm.replication import ReplicationAMM, ReplicationPool
from rmm.api.main import app
from rmm.math.fixed_point import Fp
from tests.helpers import fp, make_pool

# =============================================================================
# Curve parameters (reals)
# =============================================================================


@pytest.fixture
def strike() -> Fp:
    """Strike of 1.0 stable per risky."""
    return fp("1")


@pytest.fixture
def sigma() -> Fp:
    """100% annualized volatility."""
    return fp("1")


@pytest.fixture
def tau() -> Fp:
    """One year to maturity."""
    return fp("1")


# =============================================================================
# Pools
# =============================================================================


@pytest.fixture
def amm() -> ReplicationAMM:
    """AMM with the default quote configuration."""
    return ReplicationAMM()


@pytest.fixture
def weth_usdc_pool() -> ReplicationPool:
    """WETH/USDC pool, strike 2000, 100% vol, half the risky per liquidity."""
    return make_pool()


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the API."""
    # Ensure dependency overrides are cleared after test
    yield TestClient(app)
    app.dependency_overrides.clear()
