"""Data: candle loaders."""

from signal_bot.data.csv_source import load_candles_csv

__all__ = ["load_candles_csv"]
