"""Utils: timeframes, price rounding."""

from signal_bot.utils.prices import round_price
from signal_bot.utils.timeframes import timeframe_minutes, timeframe_delta

__all__ = ["round_price", "timeframe_minutes", "timeframe_delta"]
