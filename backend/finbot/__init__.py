"""Finbot - slash-command bridge between chat gateways and finance services."""

__version__ = "1.0.0"
