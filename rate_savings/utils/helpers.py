"""Utility functions for configuration, logging, and formatting."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

DEFAULT_PROJECTION_SETTINGS: Dict[str, Any] = {
    "horizon_years": 25,
    "baseline_growth_pct": 3.5,
    "comparison_growth_pct": 0.0,
    "milestone_interval": 5,
}

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load the main configuration file.

    Args:
        config_path: Optional path to config file. If not provided,
                     uses default config/config.yaml

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the config file does not exist
    """
    if config_path is None:
        config_path = get_project_root() / "config" / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_projection_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge the config's projection section over the built-in defaults.

    Args:
        config: Loaded configuration (may be empty or None)

    Returns:
        Projection settings dictionary
    """
    settings = dict(DEFAULT_PROJECTION_SETTINGS)
    if config:
        settings.update(config.get("projection") or {})
    return settings


def setup_logging(
    level: str = "INFO",
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Optional custom log format
        log_file: Optional log file path

    Returns:
        Configured logger
    """
    if log_format is None:
        log_format = DEFAULT_LOG_FORMAT

    logger = logging.getLogger("rate_savings")
    logger.setLevel(getattr(logging, level.upper()))

    # Avoid stacking handlers when called more than once
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    return logger


def format_currency(amount: float, currency: str = "USD") -> str:
    """Format a number as currency.

    Args:
        amount: Amount to format
        currency: Currency code (default USD)

    Returns:
        Formatted currency string, e.g. ``-$1,234.50``
    """
    text = f"{abs(amount):,.2f}"
    # Amounts that round to zero are shown unsigned
    sign = "-" if amount < 0 and text != "0.00" else ""
    if currency == "USD":
        return f"{sign}${text}"
    return f"{sign}{text} {currency}"


def format_rate(rate: float, decimals: int = 4, currency: str = "USD") -> str:
    """Format a per-unit rate at higher precision than currency.

    Examples:
        >>> format_rate(0.1333333)
        '$0.1333'
    """
    if currency == "USD":
        return f"${rate:,.{decimals}f}"
    return f"{rate:,.{decimals}f} {currency}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a decimal fraction as a percentage.

    Args:
        value: Fraction to format (0.035 -> 3.5%)
        decimals: Number of decimal places

    Returns:
        Formatted percentage string
    """
    return f"{value * 100:.{decimals}f}%"
