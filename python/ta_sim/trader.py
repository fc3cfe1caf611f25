"""Single-symbol rule-based trader driving a :class:`Portfolio`.

Per bar t:
- check the open trade's stop/target against High/Low of bar t (intrabar)
- read previous-bar indicators (`PrevContext`) to avoid lookahead
- execute signal entries/exits at Open(t)
- record equity at Close(t)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Tuple

from .config import PortfolioConfig, StrategyConfig
from .data_manager import OhlcvDataManager
from .portfolio import Portfolio
from .types import OrderResult, PrevContext

logger = logging.getLogger(__name__)


class TickerTrader:
    """EMA-trend trader with ADX strength and OBV volume confirmation.

    Entry (FLAT): fast EMA above slow EMA, ADX at or above the threshold and,
    if enabled, OBV above its SMA. Stop and target are placed in ATR units
    around the entry open.
    Exit (LONG): stop-loss / take-profit touched intrabar, or fast EMA
    crossing below slow EMA.
    """

    def __init__(
        self,
        dm: OhlcvDataManager,
        strat_cfg: StrategyConfig = StrategyConfig(),
        pf_cfg: PortfolioConfig = PortfolioConfig(),
    ):
        self.dm = dm
        self.symbol = dm.symbol
        self.strat_cfg = strat_cfg
        self.portfolio = Portfolio(pf_cfg)

        self.equity_curve: List[Tuple[datetime, float]] = []
        self.skipped: List[Tuple[datetime, OrderResult]] = []

    # ---------- public API ----------

    def run_full_backtest(self) -> None:
        """Run full history in the data manager."""
        for t in range(len(self.dm)):
            self.step(t)

    def step(self, t: int) -> None:
        """Process bar index t."""
        ts = self.dm.get_bar_timestamp(t)
        O, H, L, C = self.dm.get_ohlc(t)
        pf = self.portfolio

        # 1) Intrabar stop / target
        hit = pf.check_exit(low=L, high=H)
        if hit is not None:
            reason, level = hit
            # a gap through the level fills at the open
            fill = min(O, level) if reason == "stop-loss" else max(O, level)
            self._record(ts, pf.sell(fill, reason, ts))
            self._end_of_bar(t, ts, C)
            return

        # 2) Prev-bar context
        ctx = self.dm.get_prev_context(t)
        if not ctx.valid:
            self._end_of_bar(t, ts, C)
            return

        # 3) Signal decision, executed at Open(t)
        if pf.is_long:
            if self._exit_signal(ctx):
                self._record(ts, pf.sell(O, "signal-exit", ts))
        elif self._entry_signal(ctx):
            atr_prev = float(ctx.atr_prev)
            stop = O - self.strat_cfg.stop_atr_mult * atr_prev
            target = O + self.strat_cfg.target_atr_mult * atr_prev
            self._record(ts, pf.buy(O, stop, target, atr_prev, ts))

        # 4) Record equity at close
        self._end_of_bar(t, ts, C)

    # ---------- rules ----------

    def _entry_signal(self, ctx: PrevContext) -> bool:
        cfg = self.strat_cfg
        if not ctx.ema_fast_prev > ctx.ema_slow_prev:
            return False
        if ctx.adx_prev < cfg.adx_threshold:
            return False
        if cfg.require_obv_confirm:
            if ctx.obv_prev is None or ctx.obv_sma_prev is None:
                return False
            return ctx.obv_prev > ctx.obv_sma_prev
        return True

    def _exit_signal(self, ctx: PrevContext) -> bool:
        return ctx.ema_fast_prev < ctx.ema_slow_prev

    # ---------- internal helpers ----------

    def _record(self, ts: datetime, result: OrderResult) -> None:
        if not result.executed:
            logger.debug("%s %s: order skipped (%s)", self.symbol, ts, result.status.value)
            self.skipped.append((ts, result))

    def _end_of_bar(self, t: int, ts: datetime, C: float) -> None:
        # close out on the last bar so the trade log covers every position
        # and the final equity point includes the exit costs
        if t == len(self.dm) - 1 and self.portfolio.is_long:
            self._record(ts, self.portfolio.sell(C, "end-of-data", ts))
        self._append_equity(ts, C)

    def _append_equity(self, ts: datetime, valuation_price: float) -> None:
        equity = self.portfolio.record_equity(valuation_price)
        self.equity_curve.append((ts, equity))
