"""Slippage and proportional fee model."""

from __future__ import annotations

from .config import PortfolioConfig


class CostModel:
    """Costs:
    - slippage: moves the fill price against the trader (up on BUY, down on SELL)
    - commission: proportional to fill notional, applied on both sides
    """

    def __init__(self, cfg: PortfolioConfig):
        self.cfg = cfg

    @property
    def fee_rate(self) -> float:
        return float(self.cfg.transaction_cost_rate)

    @property
    def slippage_rate(self) -> float:
        return float(self.cfg.slippage_rate)

    def fill_price(self, price: float, side: str) -> float:
        """Price actually obtained for a market order on `side`."""
        if side.upper() == "BUY":
            return float(price) * (1.0 + self.slippage_rate)
        return float(price) * (1.0 - self.slippage_rate)

    def cost_per_share(self, price: float) -> float:
        """Approximate all-in cost of one share, used for sizing.

        Adds the rates instead of compounding them, so the exact
        ``buy_cost`` can come out slightly higher.
        """
        return float(price) * (1.0 + self.fee_rate + self.slippage_rate)

    def fee(self, fill: float, qty: int) -> float:
        return float(fill) * int(qty) * self.fee_rate

    def buy_cost(self, fill: float, qty: int) -> float:
        return float(fill) * int(qty) * (1.0 + self.fee_rate)

    def sell_proceeds(self, fill: float, qty: int) -> float:
        return float(fill) * int(qty) * (1.0 - self.fee_rate)
