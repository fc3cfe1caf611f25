"""Backtest runner utilities."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path

import pandas as pd

from .config import IndicatorConfig, PortfolioConfig, StrategyConfig
from .data_manager import OhlcvDataManager
from .data_provider import CsvProvider, OhlcvFrame
from .metrics import cagr, max_drawdown, total_return, trade_stats
from .portfolio import Portfolio
from .trader import TickerTrader

logger = logging.getLogger(__name__)


@dataclass
class BacktestResult:
    symbol: str
    equity: pd.Series  # index: bar timestamp
    trades: pd.DataFrame  # one row per ClosedTrade
    portfolio: Portfolio

    def summary(self) -> dict:
        out = {
            "total_return": total_return(self.equity),
            "cagr": cagr(self.equity),
            "max_drawdown": max_drawdown(self.equity),
        }
        out.update(trade_stats(self.trades))
        return out


def run_backtest(
    frame: OhlcvFrame,
    ind_cfg: IndicatorConfig = IndicatorConfig(),
    strat_cfg: StrategyConfig = StrategyConfig(),
    pf_cfg: PortfolioConfig = PortfolioConfig(),
) -> BacktestResult:
    """Run the rule-based trader over one symbol's full history."""
    dm = OhlcvDataManager(frame, ind_cfg)
    trader = TickerTrader(dm=dm, strat_cfg=strat_cfg, pf_cfg=pf_cfg)
    trader.run_full_backtest()

    eq = pd.DataFrame(trader.equity_curve, columns=["Date", "Equity"]).set_index("Date")["Equity"]
    trades = pd.DataFrame([asdict(x) for x in trader.portfolio.trade_log])
    logger.info(
        "%s: %d bars, %d closed trades, %d skipped orders",
        frame.symbol,
        len(frame),
        len(trades),
        len(trader.skipped),
    )
    return BacktestResult(symbol=frame.symbol, equity=eq, trades=trades, portfolio=trader.portfolio)


def run_backtest_from_csv(
    csv_path: str | Path,
    symbol: str,
    output_dir: str | Path = "outputs",
    ind_cfg: IndicatorConfig = IndicatorConfig(),
    strat_cfg: StrategyConfig = StrategyConfig(),
    pf_cfg: PortfolioConfig = PortfolioConfig(),
) -> dict[str, Path]:
    """Load a CSV, run the backtest and write equity/trades CSVs."""
    frame = CsvProvider().fetch(csv_path=csv_path, symbol=symbol)
    result = run_backtest(frame, ind_cfg, strat_cfg, pf_cfg)

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    eq_path = out_dir / f"equity_{symbol.replace('.', '_')}.csv"
    tr_path = out_dir / f"trades_{symbol.replace('.', '_')}.csv"
    result.equity.to_frame().to_csv(eq_path, encoding="utf-8")
    result.trades.to_csv(tr_path, index=False, encoding="utf-8")
    return {"equity": eq_path, "trades": tr_path}
