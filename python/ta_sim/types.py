"""Shared types for the simulator.

The guiding principle is to keep the runtime objects small and explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Bar:
    """OHLCV bar.

    All prices must be float (already adjusted to the desired currency scale).
    """

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


class OrderStatus(str, Enum):
    """Outcome of a buy/sell request. Anything but EXECUTED left state untouched."""

    EXECUTED = "EXECUTED"
    SKIPPED_POSITION_OPEN = "SKIPPED_POSITION_OPEN"
    SKIPPED_INVALID_STOP = "SKIPPED_INVALID_STOP"
    SKIPPED_ZERO_QUANTITY = "SKIPPED_ZERO_QUANTITY"
    SKIPPED_INSUFFICIENT_FUNDS = "SKIPPED_INSUFFICIENT_FUNDS"
    SKIPPED_NO_POSITION = "SKIPPED_NO_POSITION"


@dataclass(frozen=True)
class OpenTrade:
    """The single open position held by a Portfolio."""

    entry_price: float  # after slippage
    quantity: int
    stop_loss: float
    take_profit: float
    atr_at_entry: float
    entry_time: Any
    direction: str = "LONG"

    # cash debited on entry, fee included
    cost_basis: float = 0.0


@dataclass(frozen=True)
class ClosedTrade:
    """A completed round trip. Appended to the trade log, never mutated."""

    entry_price: float
    exit_price: float
    quantity: int
    pnl: float
    pnl_pct: float
    reason: str
    entry_time: Any
    exit_time: Any
    direction: str = "LONG"


@dataclass(frozen=True)
class TradeEvent:
    """A single executed state transition (entry or exit)."""

    timestamp: Any
    side: str  # 'BUY'/'SELL'
    reason: str
    price: float
    quantity: int
    fee_paid: float
    cash_after: float

    # exit-only fields
    pnl: Optional[float] = None
    pnl_pct: Optional[float] = None


@dataclass(frozen=True)
class OrderResult:
    status: OrderStatus
    event: Optional[TradeEvent] = None

    @property
    def executed(self) -> bool:
        return self.status is OrderStatus.EXECUTED


@dataclass(frozen=True)
class PrevContext:
    """Previous-bar indicator context used to avoid lookahead.

    Indicator fields are None while the indicator is still warming up.
    """

    valid: bool
    timestamp: Any
    close_prev: Optional[float]

    ema_fast_prev: Optional[float]
    ema_slow_prev: Optional[float]
    atr_prev: Optional[float]
    adx_prev: Optional[float]
    obv_prev: Optional[float]
    obv_sma_prev: Optional[float]
