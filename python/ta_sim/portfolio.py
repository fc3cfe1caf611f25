"""Single-position long-only portfolio.

Owns cash, holdings, the open trade, the closed-trade log and the equity
curve. Two states:
- FLAT: holdings == 0, no open trade
- LONG: holdings > 0, exactly one open trade

Orders that cannot be honoured are skipped, not raised: ``buy``/``sell``
return an :class:`OrderResult` whose status says why nothing happened, and
the portfolio is left exactly as it was.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable, List, Optional, Tuple

from .config import PortfolioConfig
from .cost_model import CostModel
from .types import ClosedTrade, OpenTrade, OrderResult, OrderStatus, TradeEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[TradeEvent], None]


class Portfolio:
    """Cash + shares accounting for one symbol and one run.

    Instances are not shared between runs; parameter sweeps create one per
    backtest.
    """

    def __init__(self, cfg: PortfolioConfig = PortfolioConfig(), listeners: Iterable[EventListener] = ()):
        self.cfg = cfg
        self.cost_model = CostModel(cfg)

        self.initial_capital = float(cfg.initial_capital)
        self.cash = float(cfg.initial_capital)
        self.equity = float(cfg.initial_capital)
        self.holdings = 0

        self._open_trade: Optional[OpenTrade] = None
        self._trade_log: List[ClosedTrade] = []
        self._equity_curve: List[float] = [float(cfg.initial_capital)]
        self._listeners = list(listeners)

    # ---------- read-only views ----------

    @property
    def risk_per_trade(self) -> float:
        return float(self.cfg.risk_per_trade)

    @property
    def is_long(self) -> bool:
        return self.holdings > 0

    @property
    def open_trade(self) -> Optional[OpenTrade]:
        return self._open_trade

    @property
    def trade_log(self) -> Tuple[ClosedTrade, ...]:
        return tuple(self._trade_log)

    @property
    def equity_curve(self) -> Tuple[float, ...]:
        return tuple(self._equity_curve)

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    # ---------- sizing ----------

    def calculate_position_size(self, entry_price: float, stop_loss: float) -> int:
        """Whole units to buy so that hitting the stop loses at most
        ``equity * risk_per_trade``, capped by what cash can pay for.

        Returns 0 when the stop is not below the entry (no shorts) or when
        there is nothing to spend.
        """
        if entry_price <= stop_loss or entry_price <= 0:
            return 0
        if self.equity <= 0 or self.cash <= 0:
            return 0

        capital_to_risk = self.equity * self.risk_per_trade
        risk_per_share = entry_price - stop_loss
        max_affordable = self.cash / self.cost_model.cost_per_share(entry_price)
        return int(math.floor(min(capital_to_risk / risk_per_share, max_affordable)))

    # ---------- lifecycle ----------

    def buy(self, price: float, stop_loss: float, take_profit: float, atr: float, timestamp: Any) -> OrderResult:
        """FLAT -> LONG at market, sized by the risk budget."""
        if self.is_long:
            return self._skip(OrderStatus.SKIPPED_POSITION_OPEN, "BUY", timestamp)
        if price <= stop_loss:
            return self._skip(OrderStatus.SKIPPED_INVALID_STOP, "BUY", timestamp)

        quantity = self.calculate_position_size(price, stop_loss)
        if quantity <= 0:
            return self._skip(OrderStatus.SKIPPED_ZERO_QUANTITY, "BUY", timestamp)

        entry_price = self.cost_model.fill_price(price, "BUY")
        cost = self.cost_model.buy_cost(entry_price, quantity)
        # sizing used the additive cost approximation; re-check the exact cost
        if self.cash < cost:
            return self._skip(OrderStatus.SKIPPED_INSUFFICIENT_FUNDS, "BUY", timestamp)

        self.cash -= cost
        self.holdings = quantity
        self._open_trade = OpenTrade(
            entry_price=entry_price,
            quantity=quantity,
            stop_loss=float(stop_loss),
            take_profit=float(take_profit),
            atr_at_entry=float(atr),
            entry_time=timestamp,
            direction="LONG",
            cost_basis=cost,
        )

        event = TradeEvent(
            timestamp=timestamp,
            side="BUY",
            reason="entry",
            price=entry_price,
            quantity=quantity,
            fee_paid=self.cost_model.fee(entry_price, quantity),
            cash_after=self.cash,
        )
        logger.info(
            "BUY %d @ %.2f | Stop: %.2f | Target: %.2f",
            quantity,
            entry_price,
            stop_loss,
            take_profit,
        )
        return self._emit(event)

    def sell(self, price: float, reason: str, timestamp: Any) -> OrderResult:
        """LONG -> FLAT at market; realizes pnl and logs the closed trade."""
        trade = self._open_trade
        if not self.is_long or trade is None:
            return self._skip(OrderStatus.SKIPPED_NO_POSITION, "SELL", timestamp)

        quantity = self.holdings
        exit_price = self.cost_model.fill_price(price, "SELL")
        proceeds = self.cost_model.sell_proceeds(exit_price, quantity)
        pnl = proceeds - trade.cost_basis
        pnl_pct = (exit_price - trade.entry_price) / trade.entry_price * 100.0

        self.cash += proceeds
        self.holdings = 0
        self._open_trade = None
        self._trade_log.append(
            ClosedTrade(
                entry_price=trade.entry_price,
                exit_price=exit_price,
                quantity=quantity,
                pnl=pnl,
                pnl_pct=pnl_pct,
                reason=reason,
                entry_time=trade.entry_time,
                exit_time=timestamp,
                direction=trade.direction,
            )
        )

        event = TradeEvent(
            timestamp=timestamp,
            side="SELL",
            reason=reason,
            price=exit_price,
            quantity=quantity,
            fee_paid=self.cost_model.fee(exit_price, quantity),
            cash_after=self.cash,
            pnl=pnl,
            pnl_pct=pnl_pct,
        )
        logger.info(
            "SELL %d @ %.2f | Reason: %s | PnL: %.2f (%.2f%%)",
            quantity,
            exit_price,
            reason,
            pnl,
            pnl_pct,
        )
        return self._emit(event)

    def check_exit(self, low: float, high: float) -> Optional[Tuple[str, float]]:
        """Return ``(reason, level)`` if the bar's range touched the stop or target.

        The stop is checked first: when one bar spans both levels the
        intrabar order is unknown, so assume the worse outcome.
        """
        trade = self._open_trade
        if trade is None:
            return None
        if low <= trade.stop_loss:
            return "stop-loss", trade.stop_loss
        if high >= trade.take_profit:
            return "take-profit", trade.take_profit
        return None

    # ---------- valuation ----------

    def equity_at(self, price: float) -> float:
        """Mark-to-market equity at `price`."""
        return float(self.cash + self.holdings * float(price))

    def record_equity(self, price: float) -> float:
        """Value the book at `price` and append it to the equity curve."""
        self.equity = self.equity_at(price)
        self._equity_curve.append(self.equity)
        return self.equity

    # ---------- internal helpers ----------

    def _skip(self, status: OrderStatus, side: str, timestamp: Any) -> OrderResult:
        logger.debug("%s skipped at %s: %s", side, timestamp, status.value)
        return OrderResult(status=status)

    def _emit(self, event: TradeEvent) -> OrderResult:
        for listener in self._listeners:
            listener(event)
        return OrderResult(status=OrderStatus.EXECUTED, event=event)
