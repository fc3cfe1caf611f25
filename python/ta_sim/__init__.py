"""Technical indicators and a single-position portfolio simulator."""

from .config import IndicatorConfig, PortfolioConfig, StrategyConfig
from .portfolio import Portfolio
from .types import ClosedTrade, OpenTrade, OrderResult, OrderStatus, TradeEvent

__all__ = [
    "ClosedTrade",
    "IndicatorConfig",
    "OpenTrade",
    "OrderResult",
    "OrderStatus",
    "Portfolio",
    "PortfolioConfig",
    "StrategyConfig",
    "TradeEvent",
]
