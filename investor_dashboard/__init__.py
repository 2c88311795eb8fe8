"""Macro and equity market dashboard backed by FRED."""

__version__ = "0.1.0"
