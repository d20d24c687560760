"""Normalize raw billing inputs into a per-unit baseline rate."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .errors import ValidationError

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def _is_positive(value: Optional[float]) -> bool:
    """Return True for a finite number greater than zero."""
    if value is None:
        return False
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class BillingInput:
    """Raw values entered by the user on the calculator form."""

    monthly_dollars: Optional[float]
    monthly_usage: Optional[float] = None
    annual_usage: Optional[float] = None


@dataclass(frozen=True)
class Baseline:
    """Canonical price per usage unit and the yearly usage it applies to."""

    rate_per_unit: float
    annual_usage: float

    @property
    def monthly_usage(self) -> float:
        """Average usage per month."""
        return self.annual_usage / MONTHS_PER_YEAR

    @property
    def is_valid(self) -> bool:
        """Whether this baseline can be projected."""
        return _is_positive(self.rate_per_unit) and _is_positive(self.annual_usage)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "rate_per_unit": self.rate_per_unit,
            "annual_usage": self.annual_usage,
            "monthly_usage": self.monthly_usage,
        }


class RateNormalizer:
    """Turn a monthly bill plus monthly or annual usage into a Baseline.

    The rate is period-normalized: the monthly bill is annualized and
    divided by annual usage, so the result is the same whichever usage
    figure the user supplied.
    """

    def resolve_annual_usage(self, billing: BillingInput) -> float:
        """Pick the authoritative usage figure, expressed per year.

        Args:
            billing: Raw billing input

        Returns:
            Annual usage in units per year

        Raises:
            ValidationError: If neither usage figure is positive
        """
        # Annual usage wins whenever it is supplied
        if _is_positive(billing.annual_usage):
            return float(billing.annual_usage)
        if _is_positive(billing.monthly_usage):
            return float(billing.monthly_usage) * MONTHS_PER_YEAR
        raise ValidationError("missing_usage")

    def normalize(self, billing: BillingInput) -> Baseline:
        """Normalize billing input into a Baseline.

        Args:
            billing: Raw billing input

        Returns:
            Baseline with an unrounded rate per unit

        Raises:
            ValidationError: If the bill amount or usage is missing or invalid
        """
        if not _is_positive(billing.monthly_dollars):
            raise ValidationError("missing_or_invalid_bill_amount")

        annual_usage = self.resolve_annual_usage(billing)
        rate_per_unit = (float(billing.monthly_dollars) * MONTHS_PER_YEAR) / annual_usage

        logger.debug(
            f"Normalized ${billing.monthly_dollars}/month over {annual_usage} units/year "
            f"to {rate_per_unit} per unit"
        )
        return Baseline(rate_per_unit=rate_per_unit, annual_usage=annual_usage)


def normalize(billing: BillingInput) -> Baseline:
    """Normalize billing input with the default normalizer."""
    return RateNormalizer().normalize(billing)
