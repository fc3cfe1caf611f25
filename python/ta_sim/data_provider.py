"""CSV data provider and a standardized OHLCV schema."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd

from .types import Bar

REQUIRED_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]


@dataclass(frozen=True)
class OhlcvFrame:
    """Standard OHLCV dataframe wrapper."""

    df: pd.DataFrame  # columns: Open, High, Low, Close, Volume; index: datetime
    symbol: str

    def __len__(self) -> int:
        return int(len(self.df))

    def bars(self) -> List[Bar]:
        return [
            Bar(
                timestamp=ts.to_pydatetime(),
                open=float(row.Open),
                high=float(row.High),
                low=float(row.Low),
                close=float(row.Close),
                volume=float(row.Volume),
            )
            for ts, row in zip(self.df.index, self.df.itertuples(index=False))
        ]


def standardize_ohlcv_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename case variants to Open/High/Low/Close/Volume and sort by time."""
    rename_map = {}
    for col in df.columns:
        c = str(col).strip().lower()
        if c == "open":
            rename_map[col] = "Open"
        elif c == "high":
            rename_map[col] = "High"
        elif c == "low":
            rename_map[col] = "Low"
        elif c == "close":
            rename_map[col] = "Close"
        elif c in {"adj close", "adjclose"}:
            # Keep adjusted close separate to avoid duplicate "Close" columns.
            rename_map[col] = "AdjClose"
        elif c in {"volume", "vol"}:
            rename_map[col] = "Volume"
    df = df.rename(columns=rename_map).copy()

    # If the source only has AdjClose, use it as Close.
    if "Close" not in df.columns and "AdjClose" in df.columns:
        df = df.rename(columns={"AdjClose": "Close"})

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required OHLCV columns: {missing}")

    df = df[REQUIRED_COLUMNS].astype(float)
    df = df[~df.index.duplicated(keep="last")].sort_index()
    return df


class CsvProvider:
    """Load OHLCV data from a CSV file."""

    def fetch(self, csv_path: str | Path, symbol: str, datetime_col: str = "Date") -> OhlcvFrame:
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(str(path))

        df = pd.read_csv(path)
        if datetime_col not in df.columns:
            # try common alternatives
            for cand in ["Datetime", "datetime", "date", "timestamp", "Time", "time"]:
                if cand in df.columns:
                    datetime_col = cand
                    break

        if datetime_col not in df.columns:
            raise ValueError(f"CSV must contain a datetime column. Tried '{datetime_col}' and common aliases.")

        df[datetime_col] = pd.to_datetime(df[datetime_col])
        df = df.set_index(datetime_col).sort_index()

        df = standardize_ohlcv_columns(df)
        return OhlcvFrame(df=df, symbol=symbol)
