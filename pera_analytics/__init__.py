"""Pera Analytics: scoring and ranking engine for a university running club."""

__version__ = "0.1.0"
