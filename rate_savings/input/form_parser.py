"""Sanitize raw form values into engine inputs.

Form fields arrive as strings (or numbers from numeric widgets). Blank or
unparseable fields become ``None`` so the engine can report exactly which
input is missing.
"""

import logging
import math
from typing import Any, Dict, Optional, Union

from ..core.errors import ValidationError
from ..core.normalizer import BillingInput
from ..core.projections import DEFAULT_HORIZON_YEARS, MAX_HORIZON_YEARS, ProjectionParams

logger = logging.getLogger(__name__)

RawValue = Optional[Union[str, int, float]]

DEFAULT_BASELINE_GROWTH_PCT = 3.5
DEFAULT_COMPARISON_GROWTH_PCT = 0.0


def parse_number(raw: RawValue) -> Optional[float]:
    """Parse a form value into a float.

    Surrounding whitespace, a leading ``$`` and thousands separators are
    ignored.

    Examples:
        >>> parse_number(" $1,200.50 ")
        1200.5
        >>> parse_number("") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:]
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            logger.debug(f"Ignoring non-numeric form value: {raw!r}")
            return None

    if not math.isfinite(value):
        return None
    return value


def parse_billing_form(
    monthly_dollars: RawValue,
    monthly_usage: RawValue = None,
    annual_usage: RawValue = None
) -> BillingInput:
    """Build a BillingInput from the calculator form fields."""
    return BillingInput(
        monthly_dollars=parse_number(monthly_dollars),
        monthly_usage=parse_number(monthly_usage),
        annual_usage=parse_number(annual_usage),
    )


def parse_horizon(raw: RawValue, default: int = DEFAULT_HORIZON_YEARS) -> int:
    """Parse the projection horizon in years.

    Raises:
        ValidationError: If the value is not a whole number from 1 to
            MAX_HORIZON_YEARS
    """
    value = parse_number(raw)
    if value is None:
        if raw is not None and str(raw).strip():
            raise ValidationError("invalid_horizon")
        return default
    if value < 1 or value > MAX_HORIZON_YEARS or value != int(value):
        raise ValidationError("invalid_horizon")
    return int(value)


def parse_projection_form(
    comparison_rate: RawValue = None,
    baseline_growth_pct: RawValue = None,
    comparison_growth_pct: RawValue = None,
    horizon_years: RawValue = None,
    defaults: Optional[Dict[str, Any]] = None
) -> ProjectionParams:
    """Build ProjectionParams from the savings form fields.

    Percentages are converted to fractions. Baseline growth is clamped to
    be non-negative; comparison growth is passed through as entered and
    may be negative.

    Args:
        comparison_rate: Comparison $/unit (blank or <= 0 means none)
        baseline_growth_pct: Growth of the current rate in percent
        comparison_growth_pct: Growth of the comparison rate in percent
        horizon_years: Number of years to project
        defaults: Projection settings from config (see get_projection_defaults)

    Returns:
        ProjectionParams
    """
    defaults = defaults or {}

    baseline_pct = parse_number(baseline_growth_pct)
    if baseline_pct is None:
        baseline_pct = float(defaults.get("baseline_growth_pct", DEFAULT_BASELINE_GROWTH_PCT))
    baseline_pct = max(0.0, baseline_pct)

    comparison_pct = parse_number(comparison_growth_pct)
    if comparison_pct is None:
        comparison_pct = float(defaults.get("comparison_growth_pct", DEFAULT_COMPARISON_GROWTH_PCT))

    horizon = parse_horizon(
        horizon_years,
        default=int(defaults.get("horizon_years", DEFAULT_HORIZON_YEARS))
    )

    rate = parse_number(comparison_rate)
    if rate is not None and rate <= 0:
        rate = None

    return ProjectionParams(
        horizon_years=horizon,
        baseline_growth_rate=baseline_pct / 100,
        comparison_growth_rate=comparison_pct / 100,
        comparison_rate0=rate,
    )
