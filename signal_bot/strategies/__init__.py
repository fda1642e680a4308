"""Strategies: base interface and implementations."""

from signal_bot.strategies.base import BaseStrategy
from signal_bot.strategies.retest_15m import RetestStrategy, BarContext

__all__ = ["BaseStrategy", "RetestStrategy", "BarContext"]
