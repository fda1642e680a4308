"""Indicators: EMA/RSI/MACD and price-action helpers."""

from signal_bot.indicators.technical import ema, rsi, macd, MacdResult
from signal_bot.indicators.price_action import average_volume, find_swing_low, find_swing_high

__all__ = [
    "ema",
    "rsi",
    "macd",
    "MacdResult",
    "average_volume",
    "find_swing_low",
    "find_swing_high",
]
