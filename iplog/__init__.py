"""Filter IP access logs by address range and time window, then count hits."""

__version__ = "0.1.0"
