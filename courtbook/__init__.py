"""Courtbook: player stat aggregation and playoff brackets."""

__version__ = "0.1.0"
