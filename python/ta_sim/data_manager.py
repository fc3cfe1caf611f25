"""Data manager: computes indicators once and provides prev-bar context."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional

from .config import IndicatorConfig
from .data_provider import OhlcvFrame
from .indicators import Series, adx, atr, ema, obv, sma
from .types import PrevContext


def _at(series: Series, i: int) -> Optional[float]:
    # empty series ("not computable") reads as warm-up everywhere
    if i < 0 or i >= len(series):
        return None
    return series[i]


class OhlcvDataManager:
    """Holds OHLCV and indicator series for a single symbol."""

    def __init__(self, frame: OhlcvFrame, ind_cfg: IndicatorConfig = IndicatorConfig()):
        self.symbol = frame.symbol
        self.df = frame.df.copy()
        self.ind_cfg = ind_cfg

        self.indicators: Dict[str, Series] = {}
        self._compute_indicators()

    def _compute_indicators(self) -> None:
        cfg = self.ind_cfg
        high = self.df["High"]
        low = self.df["Low"]
        close = self.df["Close"]

        obv_series = obv(close, self.df["Volume"])
        self.indicators = {
            "emaFast": ema(close, cfg.ema_fast),
            "emaSlow": ema(close, cfg.ema_slow),
            "atr": atr(high, low, close, cfg.atr_period),
            "adx": adx(high, low, close, cfg.adx_period),
            "obv": obv_series,
            "obvSma": sma(obv_series, cfg.obv_sma) if obv_series else [],
        }

    def __len__(self) -> int:
        return int(len(self.df))

    def get_bar_timestamp(self, i: int) -> datetime:
        return self.df.index[i].to_pydatetime()

    def get_ohlc(self, i: int) -> tuple[float, float, float, float]:
        row = self.df.iloc[i]
        return float(row["Open"]), float(row["High"]), float(row["Low"]), float(row["Close"])

    def get_prev_context(self, i: int) -> PrevContext:
        """Return indicator context based on previous bar (i-1).

        Valid only once the trend (EMAs, ADX) and stop-distance (ATR)
        indicators are all defined on bar i-1.
        """
        ts = self.get_bar_timestamp(i)
        p = i - 1
        ind = self.indicators
        ctx = PrevContext(
            valid=False,
            timestamp=ts,
            close_prev=float(self.df["Close"].iloc[p]) if p >= 0 else None,
            ema_fast_prev=_at(ind["emaFast"], p),
            ema_slow_prev=_at(ind["emaSlow"], p),
            atr_prev=_at(ind["atr"], p),
            adx_prev=_at(ind["adx"], p),
            obv_prev=_at(ind["obv"], p),
            obv_sma_prev=_at(ind["obvSma"], p),
        )
        required = [ctx.ema_fast_prev, ctx.ema_slow_prev, ctx.atr_prev, ctx.adx_prev]
        valid = all(v is not None for v in required)
        if not valid:
            return ctx
        return replace(ctx, valid=True)
