# errors.py
from __future__ import annotations


class ConfigurationError(ValueError):
    """Bad machine description, setup line or message symbol."""
