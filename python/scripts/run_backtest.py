from __future__ import annotations

import argparse
import json
import logging

from ta_sim.backtest import run_backtest
from ta_sim.config import IndicatorConfig, PortfolioConfig, StrategyConfig
from ta_sim.data_provider import CsvProvider
from ta_sim.optimize import random_search


def load_params_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--csv", type=str, required=True, help="OHLCV CSV path (Date,Open,High,Low,Close,Volume).")
    p.add_argument("--symbol", type=str, default="SYMBOL")
    p.add_argument("--output_dir", type=str, default="outputs")
    p.add_argument("--params_json", type=str, default=None, help="JSON with initialCapital/riskPerTrade/transactionCost/slippage.")
    p.add_argument("--adx_threshold", type=float, default=20.0)
    p.add_argument("--stop_atr_mult", type=float, default=2.0)
    p.add_argument("--target_atr_mult", type=float, default=4.0)
    p.add_argument("--no_obv_confirm", action="store_true", help="Do not require OBV above its SMA on entry.")
    p.add_argument("--optimize", type=int, default=0, help="Run a random search with this many evaluations instead.")
    p.add_argument("--log_level", type=str, default="INFO")
    args = p.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pf_cfg = PortfolioConfig()
    if args.params_json:
        pf_cfg = PortfolioConfig.from_params_dict(load_params_json(args.params_json))

    frame = CsvProvider().fetch(csv_path=args.csv, symbol=args.symbol)

    if args.optimize > 0:
        results = random_search(frame, n_evals=args.optimize, pf_cfg=pf_cfg, output_dir=args.output_dir)
        best = results[0]
        print(f"best score={best.score:.4f} return={best.total_return:.4f} max_dd={best.max_dd:.4f}")
        print(best.params)
        return

    strat_cfg = StrategyConfig(
        adx_threshold=args.adx_threshold,
        stop_atr_mult=args.stop_atr_mult,
        target_atr_mult=args.target_atr_mult,
        require_obv_confirm=not args.no_obv_confirm,
    )
    result = run_backtest(frame, IndicatorConfig(), strat_cfg, pf_cfg)
    for k, v in result.summary().items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    main()
