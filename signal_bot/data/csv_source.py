"""
CSV candle loader.

Accepted layouts:
- time,open,high,low,close,volume  (time parseable by pandas)
- Binance kline dumps with open_time in epoch milliseconds (extra columns are dropped)
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import pandas as pd

from signal_bot.core.logger import get_logger
from signal_bot.core.types import OHLCV_COLUMNS

logger = get_logger("data.csv")

PRICE_COLUMNS = ["open", "high", "low", "close", "volume"]


def load_candles_csv(path: Union[str, Path]) -> pd.DataFrame:
    """Read a candle CSV into the canonical frame: ascending, unique times, positional index."""
    path = Path(path)
    raw = pd.read_csv(path)
    raw.columns = [str(c).strip().lower() for c in raw.columns]

    missing = [c for c in PRICE_COLUMNS if c not in raw.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")
    if "time" in raw.columns:
        times = pd.to_datetime(raw["time"], utc=True)
    elif "open_time" in raw.columns:
        times = pd.to_datetime(raw["open_time"], unit="ms", utc=True)
    else:
        raise ValueError(f"{path}: needs a 'time' or 'open_time' column")

    df = raw[PRICE_COLUMNS].astype(float)
    df.insert(0, "time", times)
    before = len(df)
    df = df.sort_values("time", kind="stable").drop_duplicates(subset="time", keep="last").reset_index(drop=True)
    if len(df) != before:
        logger.warning("%s: dropped %d duplicate candles", path.name, before - len(df))
    logger.debug("Loaded %d candles from %s", len(df), path)
    return df[OHLCV_COLUMNS]
