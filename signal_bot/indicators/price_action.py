"""Trailing volume average and swing extremes used for stop placement."""

from __future__ import annotations

import pandas as pd


def _window(df: pd.DataFrame, end_index: int, lookback: int) -> pd.DataFrame:
    """Rows end_index-lookback+1 .. end_index clamped to the frame; empty when invalid."""
    if df.empty or end_index < 0 or lookback <= 0:
        return df.iloc[0:0]
    end = min(end_index, len(df) - 1)
    start = max(0, end - lookback + 1)
    return df.iloc[start:end + 1]


def average_volume(df: pd.DataFrame, end_index: int, lookback: int) -> float:
    """Mean volume of the `lookback` rows ending at end_index inclusive. 0.0 at end_index <= 0 or an empty window."""
    if end_index <= 0:
        return 0.0
    window = _window(df, end_index, lookback)
    if window.empty:
        return 0.0
    return float(window["volume"].mean())


def find_swing_low(df: pd.DataFrame, index: int, lookback: int = 5) -> float:
    """Lowest low of the `lookback` rows ending at index inclusive."""
    window = _window(df, index, lookback)
    if window.empty:
        return 0.0
    return float(window["low"].min())


def find_swing_high(df: pd.DataFrame, index: int, lookback: int = 5) -> float:
    """Highest high of the `lookback` rows ending at index inclusive."""
    window = _window(df, index, lookback)
    if window.empty:
        return 0.0
    return float(window["high"].max())
