"""Pytest configuration and shared fixtures for ta_sim tests."""

from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from ta_sim.config import PortfolioConfig
from ta_sim.data_provider import OhlcvFrame
from ta_sim.portfolio import Portfolio


# ============================================================================
# Portfolio Fixtures
# ============================================================================


@pytest.fixture
def frictionless_config() -> PortfolioConfig:
    """10k capital, 1% risk, no costs."""
    return PortfolioConfig(
        initial_capital=10_000.0,
        risk_per_trade=0.01,
        transaction_cost_rate=0.0,
        slippage_rate=0.0,
    )


@pytest.fixture
def frictionless_portfolio(frictionless_config) -> Portfolio:
    return Portfolio(frictionless_config)


@pytest.fixture
def costly_portfolio() -> Portfolio:
    return Portfolio(
        PortfolioConfig(
            initial_capital=10_000.0,
            risk_per_trade=0.01,
            transaction_cost_rate=0.001,
            slippage_rate=0.0005,
        )
    )


@pytest.fixture
def entry_time() -> datetime:
    return datetime(2024, 1, 2)


# ============================================================================
# Price Data Fixtures
# ============================================================================


def _make_frame(closes, symbol: str = "TEST", spread: float = 1.0, volume: float = 1000.0) -> OhlcvFrame:
    closes = np.asarray(closes, dtype=float)
    opens = np.concatenate([[closes[0]], closes[:-1]])
    df = pd.DataFrame(
        {
            "Open": opens,
            "High": np.maximum(opens, closes) + spread,
            "Low": np.minimum(opens, closes) - spread,
            "Close": closes,
            "Volume": np.full(len(closes), volume),
        },
        index=pd.date_range("2023-01-02", periods=len(closes), freq="D"),
    )
    return OhlcvFrame(df=df, symbol=symbol)


@pytest.fixture
def trending_frame() -> OhlcvFrame:
    """Flat, then a steady rally, then a sell-off."""
    closes = [100.0] * 30 + [100.0 + 1.5 * i for i in range(1, 61)] + [190.0 - 3.0 * i for i in range(1, 31)]
    return _make_frame(closes, symbol="TREND")


@pytest.fixture
def random_walk_frame() -> OhlcvFrame:
    rng = np.random.default_rng(42)
    closes = 100.0 * np.exp(np.cumsum(rng.normal(0.0, 0.01, size=300)))
    return _make_frame(closes, symbol="RW", spread=0.5)


@pytest.fixture
def frame_factory():
    """Build an OhlcvFrame from a close series (open = previous close)."""
    return _make_frame
