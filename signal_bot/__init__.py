"""Signal engine for a 15m/1h EMA retest futures strategy."""

__version__ = "0.1.0"
