"""Very small random-search parameter sweep.

Each evaluation builds its own data manager, trader and Portfolio, so runs
share no mutable state.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import pandas as pd

from .backtest import run_backtest
from .config import IndicatorConfig, PortfolioConfig, StrategyConfig
from .data_provider import OhlcvFrame
from .metrics import max_drawdown, total_return


@dataclass(frozen=True)
class OptResult:
    score: float
    total_return: float
    max_dd: float
    n_trades: int
    params: StrategyConfig


def _score_equity(eq: pd.Series, dd_penalty: float) -> tuple[float, float, float]:
    mdd = max_drawdown(eq)
    ret = total_return(eq)
    if not (pd.notna(ret) and pd.notna(mdd)):
        return float("-inf"), float("nan"), float("nan")
    return float(ret - dd_penalty * mdd), float(ret), float(mdd)


def random_search(
    frame: OhlcvFrame,
    n_evals: int = 50,
    seed: int = 7,
    dd_penalty: float = 0.5,
    ind_cfg: IndicatorConfig = IndicatorConfig(),
    pf_cfg: PortfolioConfig = PortfolioConfig(),
    output_dir: Optional[str | Path] = None,
) -> list[OptResult]:
    """Random search over a small hand-picked grid, best first."""
    rng = random.Random(seed)

    adx_threshold = [15.0, 20.0, 25.0, 30.0]
    stop_mult = [1.0, 1.5, 2.0, 3.0]
    target_mult = [2.0, 3.0, 4.0, 6.0]
    obv_confirm = [True, False]

    results: list[OptResult] = []
    for _ in range(int(n_evals)):
        cfg = StrategyConfig(
            adx_threshold=rng.choice(adx_threshold),
            stop_atr_mult=rng.choice(stop_mult),
            target_atr_mult=rng.choice(target_mult),
            require_obv_confirm=rng.choice(obv_confirm),
        )
        res = run_backtest(frame, ind_cfg=ind_cfg, strat_cfg=cfg, pf_cfg=pf_cfg)
        score, ret, mdd = _score_equity(res.equity, dd_penalty=dd_penalty)
        results.append(OptResult(score=score, total_return=ret, max_dd=mdd, n_trades=len(res.trades), params=cfg))

    # sort best-first
    results.sort(key=lambda r: r.score, reverse=True)

    if output_dir is not None:
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        rows = []
        for r in results:
            d = asdict(r.params)
            d.update({"score": r.score, "total_return": r.total_return, "max_dd": r.max_dd, "n_trades": r.n_trades})
            rows.append(d)
        pd.DataFrame(rows).to_csv(out_dir / "opt_results.csv", index=False, encoding="utf-8")

    return results
