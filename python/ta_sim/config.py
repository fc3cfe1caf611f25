"""Configuration objects.

Style rules:
- keep signatures stable (no alias chaos)
- prefer explicit field names
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PortfolioConfig:
    """Capital, risk budget and execution costs for one simulation run."""

    initial_capital: float = 10_000.0

    # Fraction of current equity put at risk on a single trade.
    risk_per_trade: float = 0.01

    # Proportional fee on notional, e.g. 0.001 for 0.1%.
    transaction_cost_rate: float = 0.001

    # Price degradation against the trader, e.g. 0.0005 for 0.05%.
    slippage_rate: float = 0.0005

    def __post_init__(self) -> None:
        if self.initial_capital < 0:
            raise ValueError("initial_capital must be non-negative")
        if not 0.0 <= self.risk_per_trade <= 1.0:
            raise ValueError("risk_per_trade must be within [0, 1]")
        if self.transaction_cost_rate < 0:
            raise ValueError("transaction_cost_rate must be non-negative")
        if self.slippage_rate < 0:
            raise ValueError("slippage_rate must be non-negative")

    @classmethod
    def from_params_dict(cls, d: dict) -> "PortfolioConfig":
        """Create PortfolioConfig from a camelCase params dict.

        Keys follow the JSON run files (e.g., riskPerTrade). Unknown keys are ignored.
        """
        mapping = {
            "initialCapital": "initial_capital",
            "riskPerTrade": "risk_per_trade",
            "transactionCost": "transaction_cost_rate",
            "slippage": "slippage_rate",
        }
        kwargs = {}
        for k, v in (d or {}).items():
            if k in mapping:
                kwargs[mapping[k]] = float(v)
        return cls(**kwargs)


@dataclass(frozen=True)
class IndicatorConfig:
    """Indicator window configuration."""

    ema_fast: int = 12
    ema_slow: int = 26
    atr_period: int = 14
    adx_period: int = 14
    # OBV is compared against its own SMA for volume confirmation.
    obv_sma: int = 20


@dataclass(frozen=True)
class StrategyConfig:
    """Entry/exit rule parameters used by the reference driver."""

    # trend-strength gate
    adx_threshold: float = 20.0

    # stop / target distance in ATR units from the entry open
    stop_atr_mult: float = 2.0
    target_atr_mult: float = 4.0

    # require OBV above its SMA on entry
    require_obv_confirm: bool = True
