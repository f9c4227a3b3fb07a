"""Biathlon race configuration, event log processing and results reporting."""

__version__ = "0.1.0"