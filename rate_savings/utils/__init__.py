"""Utility functions."""

from .helpers import (
    format_currency,
    format_percentage,
    format_rate,
    get_projection_defaults,
    load_config,
    setup_logging,
)

__all__ = [
    "format_currency",
    "format_percentage",
    "format_rate",
    "get_projection_defaults",
    "load_config",
    "setup_logging",
]
