"""Backtesting: bar-by-bar signal replay scored in R multiples."""

from signal_bot.backtesting.replay import SignalReplay, ReplayResult, ReplayTrade

__all__ = ["SignalReplay", "ReplayResult", "ReplayTrade"]
