"""Timeframe strings ('15m', '1h', '1d') to minutes / timedeltas."""

from __future__ import annotations
from datetime import timedelta

_UNIT_MINUTES = {"m": 1, "h": 60, "d": 60 * 24}


def timeframe_minutes(tf: str) -> int:
    """Convert Binance-style timeframe (e.g. '15m', '1h', '1d') to minutes."""
    tf = tf.strip().lower()
    unit = tf[-1:] if tf else ""
    if unit not in _UNIT_MINUTES or not tf[:-1].isdigit():
        raise ValueError(f"Unsupported timeframe: {tf}")
    return int(tf[:-1]) * _UNIT_MINUTES[unit]


def timeframe_delta(tf: str) -> timedelta:
    return timedelta(minutes=timeframe_minutes(tf))
