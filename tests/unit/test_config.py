"""Unit tests for configuration objects."""

import dataclasses

import pytest

from ta_sim.config import IndicatorConfig, PortfolioConfig, StrategyConfig


class TestPortfolioConfig:
    def test_defaults(self):
        cfg = PortfolioConfig()
        assert cfg.initial_capital == 10_000.0
        assert cfg.risk_per_trade == 0.01
        assert cfg.transaction_cost_rate == 0.001
        assert cfg.slippage_rate == 0.0005

    def test_frozen(self):
        cfg = PortfolioConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.initial_capital = 1.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_capital": -1.0},
            {"risk_per_trade": -0.01},
            {"risk_per_trade": 1.5},
            {"transaction_cost_rate": -0.001},
            {"slippage_rate": -0.001},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            PortfolioConfig(**kwargs)

    def test_from_params_dict(self):
        cfg = PortfolioConfig.from_params_dict(
            {"initialCapital": 5000, "riskPerTrade": 0.02, "transactionCost": 0.0, "slippage": 0.001, "foo": 1}
        )
        assert cfg == PortfolioConfig(
            initial_capital=5000.0, risk_per_trade=0.02, transaction_cost_rate=0.0, slippage_rate=0.001
        )

    def test_from_empty_params_dict(self):
        assert PortfolioConfig.from_params_dict(None) == PortfolioConfig()


def test_indicator_and_strategy_defaults():
    ind = IndicatorConfig()
    assert (ind.ema_fast, ind.ema_slow, ind.atr_period, ind.adx_period) == (12, 26, 14, 14)
    strat = StrategyConfig()
    assert strat.adx_threshold == 20.0
    assert strat.require_obv_confirm is True
