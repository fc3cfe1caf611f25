"""Indicator computation utilities.

Every function takes plain numeric sequences (lists, numpy arrays or pandas
Series) and returns a new list of the same length as its input, with ``None``
for the warm-up indices where the indicator is not yet defined.

An empty list means "not computable" (too little history, mismatched
lengths). A non-positive period is a caller bug and raises ``ValueError``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

Series = List[Optional[float]]


def _as_array(data: Sequence[float]) -> np.ndarray:
    # copy so callers' arrays are never written through
    return np.array(data, dtype=float, copy=True).reshape(-1)


def _check_period(period: int) -> int:
    if int(period) <= 0:
        raise ValueError("period must be positive")
    return int(period)


def _padded(values: np.ndarray, total: int) -> Series:
    """Left-pad `values` with None up to `total` entries."""
    pad = total - len(values)
    return [None] * pad + [float(v) for v in values]


def _same_length(*arrays: np.ndarray) -> bool:
    return len({len(a) for a in arrays}) == 1


def sma(data: Sequence[float], period: int) -> Series:
    """Simple moving average over the trailing `period` values."""
    period = _check_period(period)
    x = _as_array(data)
    if len(x) < period:
        return []
    means = pd.Series(x).rolling(window=period).mean().to_numpy()
    return _padded(means[period - 1:], len(x))


def ema(data: Sequence[float], period: int) -> Series:
    """Exponential moving average seeded with the first raw value.

    Same recursive form as pandas ``ewm(span=period, adjust=False)``:
    ``ema[i] = (x[i] - ema[i-1]) * k + ema[i-1]`` with ``k = 2 / (period + 1)``.
    There is no warm-up segment; `period` only sizes ``k`` and guards against
    short input.
    """
    period = _check_period(period)
    x = _as_array(data)
    if len(x) < period:
        return []
    k = 2.0 / (period + 1)
    out = np.empty_like(x)
    out[0] = x[0]
    for i in range(1, len(x)):
        out[i] = (x[i] - out[i - 1]) * k + out[i - 1]
    return _padded(out, len(x))


def true_range(highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]) -> np.ndarray:
    """True range for bars 1..N-1 (bar 0 has no previous close).

    Empty when the three series differ in length.
    """
    high = _as_array(highs)
    low = _as_array(lows)
    close = _as_array(closes)
    if len(high) == 0 or not _same_length(high, low, close):
        return np.empty(0)
    prev_close = close[:-1]
    return np.max(
        np.vstack(
            [
                high[1:] - low[1:],
                np.abs(high[1:] - prev_close),
                np.abs(low[1:] - prev_close),
            ]
        ),
        axis=0,
    )


def _wilder(prev: float, value: float, period: int) -> float:
    return (prev * (period - 1) + value) / period


def atr(highs: Sequence[float], lows: Sequence[float], closes: Sequence[float], period: int = 14) -> Series:
    """Average True Range with Wilder smoothing.

    Seeded with the simple mean of the first `period` true ranges, which
    lands on bar index `period`; the first `period` entries are None.
    """
    period = _check_period(period)
    high, low, close = _as_array(highs), _as_array(lows), _as_array(closes)
    if not _same_length(high, low, close) or len(high) < period + 1:
        return []

    tr = true_range(high, low, close)
    out = [float(tr[:period].mean())]
    for i in range(period, len(tr)):
        out.append(_wilder(out[-1], tr[i], period))
    return _padded(np.asarray(out), len(high))


def adx(highs: Sequence[float], lows: Sequence[float], closes: Sequence[float], period: int = 14) -> Series:
    """Average Directional Index.

    +DM/-DM follow the usual rule (a move counts only when it is positive and
    larger than the opposite move). TR, +DM and -DM are seeded with their
    mean over the first `period` bars and Wilder-smoothed; the first DX seeds
    ADX, which is then Wilder-smoothed as well.

    Zero denominators resolve to 0: a flat smoothed TR gives +DI = -DI = 0,
    and +DI + -DI == 0 gives DX = 0.
    """
    period = _check_period(period)
    high, low, close = _as_array(highs), _as_array(lows), _as_array(closes)
    if not _same_length(high, low, close) or len(high) < 2 * period:
        return []

    up_move = high[1:] - high[:-1]
    down_move = low[:-1] - low[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = true_range(high, low, close)

    s_tr = tr[:period].mean()
    s_plus = plus_dm[:period].mean()
    s_minus = minus_dm[:period].mean()

    out: list[float] = []
    for i in range(period, len(tr)):
        s_tr = _wilder(s_tr, tr[i], period)
        s_plus = _wilder(s_plus, plus_dm[i], period)
        s_minus = _wilder(s_minus, minus_dm[i], period)

        if s_tr > 0:
            plus_di = 100.0 * s_plus / s_tr
            minus_di = 100.0 * s_minus / s_tr
        else:
            plus_di = minus_di = 0.0
        di_sum = plus_di + minus_di
        dx = 100.0 * abs(plus_di - minus_di) / di_sum if di_sum > 0 else 0.0

        out.append(dx if not out else _wilder(out[-1], dx, period))
    return _padded(np.asarray(out), len(high))


def obv(closes: Sequence[float], volumes: Sequence[float]) -> Series:
    """On-balance volume, seeded with the first bar's volume."""
    close = _as_array(closes)
    volume = _as_array(volumes)
    if len(close) == 0 or not _same_length(close, volume):
        return []
    direction = np.sign(np.diff(close))
    out = np.concatenate([[volume[0]], direction * volume[1:]]).cumsum()
    return _padded(out, len(close))
