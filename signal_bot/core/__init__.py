"""Core: config, types, logging."""

from signal_bot.core.config import load_config, Config, StrategySettings
from signal_bot.core.types import (
    Candle,
    SignalType,
    TradeSignal,
    candles_to_frame,
    frame_to_candles,
)
from signal_bot.core.logger import get_logger, setup_logging

__all__ = [
    "load_config",
    "Config",
    "StrategySettings",
    "Candle",
    "SignalType",
    "TradeSignal",
    "candles_to_frame",
    "frame_to_candles",
    "get_logger",
    "setup_logging",
]
