"""Year-by-year cost and savings projections."""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import PreconditionViolation, ValidationError
from .normalizer import MONTHS_PER_YEAR, Baseline

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_YEARS = 25
MAX_HORIZON_YEARS = 500
DEFAULT_MILESTONE_INTERVAL = 5
RATE_PRECISION = 6
CURRENCY_PRECISION = 2

# Above 2**52 every float is a whole number, so rounding is a no-op
_EXACT_INTEGER_LIMIT = 2 ** 52


def round_half_up(value: float, places: int) -> float:
    """Round to ``places`` decimals, ties away from zero.

    The exact binary value of ``value`` decides the direction, so 1000.125
    rounds to 1000.13 and -1000.125 to -1000.13.
    """
    if not math.isfinite(value) or abs(value) >= _EXACT_INTEGER_LIMIT:
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ProjectionParams:
    """Inputs that change on every interaction with the savings screen.

    Growth rates are decimal fractions (0.035 means 3.5%/yr). A missing or
    non-positive ``comparison_rate0`` means no comparison is offered and
    the comparison side costs nothing.
    """

    horizon_years: int = DEFAULT_HORIZON_YEARS
    baseline_growth_rate: float = 0.035
    comparison_growth_rate: float = 0.0
    comparison_rate0: Optional[float] = None

    @property
    def has_comparison(self) -> bool:
        """Whether a positive comparison rate was supplied."""
        return self.comparison_rate0 is not None and self.comparison_rate0 > 0


@dataclass(frozen=True)
class YearRecord:
    """Projected rates, costs and savings for a single year."""

    year: int
    baseline_rate_escalated: float
    comparison_rate_escalated: float
    baseline_cost: float
    comparison_cost: float
    annual_savings: float
    cumulative_savings: float

    def as_row(self) -> Tuple[int, float, float, float, float, float, float]:
        """Return the values in table/CSV column order."""
        return (
            self.year,
            self.baseline_rate_escalated,
            self.comparison_rate_escalated,
            self.baseline_cost,
            self.comparison_cost,
            self.annual_savings,
            self.cumulative_savings,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "year": self.year,
            "baseline_rate_escalated": self.baseline_rate_escalated,
            "comparison_rate_escalated": self.comparison_rate_escalated,
            "baseline_cost": self.baseline_cost,
            "comparison_cost": self.comparison_cost,
            "annual_savings": self.annual_savings,
            "cumulative_savings": self.cumulative_savings,
        }


class SeriesProjector:
    """Project escalating baseline and comparison costs over a horizon.

    Escalation compounds and starts in year 2, so year 1 carries the
    starting rates unchanged. Escalated rates are stored at 6 decimals and
    money at 2 decimals; the cumulative total is the running sum of the
    stored (already rounded) annual savings.
    """

    def _check_preconditions(self, baseline: Optional[Baseline], params: ProjectionParams) -> None:
        if baseline is None:
            raise PreconditionViolation("project() called without a baseline")
        if not baseline.is_valid:
            raise PreconditionViolation(
                f"project() called with an invalid baseline: rate={baseline.rate_per_unit}, "
                f"usage={baseline.annual_usage}"
            )
        horizon = params.horizon_years
        if isinstance(horizon, bool) or not isinstance(horizon, int) or horizon < 1:
            raise PreconditionViolation(f"horizon_years must be a positive integer, got {horizon!r}")
        if not projection_in_range(baseline, params):
            raise PreconditionViolation(
                f"Escalating over {horizon} years overflows: baseline growth "
                f"{params.baseline_growth_rate}, comparison growth {params.comparison_growth_rate}"
            )

    def _escalate(self, start_rate: float, growth_rate: float, year: int) -> float:
        """Return ``start_rate`` compounded for ``year - 1`` years."""
        if year == 1:
            return start_rate
        return round_half_up(start_rate * (1 + growth_rate) ** (year - 1), RATE_PRECISION)

    def project(self, baseline: Baseline, params: ProjectionParams) -> List[YearRecord]:
        """Build the yearly series for a baseline and a set of parameters.

        Args:
            baseline: Normalized baseline rate and usage
            params: Horizon, growth rates and comparison rate

        Returns:
            One YearRecord per year, years 1..horizon_years

        Raises:
            PreconditionViolation: If the baseline or horizon is unusable, or
                escalation over the horizon overflows
        """
        self._check_preconditions(baseline, params)

        usage = baseline.annual_usage
        records = []
        cumulative = 0.0

        for year in range(1, params.horizon_years + 1):
            growth = (1 + params.baseline_growth_rate) ** (year - 1)
            baseline_rate = baseline.rate_per_unit * growth

            if params.has_comparison:
                comparison_rate = params.comparison_rate0 * (1 + params.comparison_growth_rate) ** (year - 1)
            else:
                comparison_rate = 0.0

            baseline_cost = round_half_up(baseline_rate * usage, CURRENCY_PRECISION)
            comparison_cost = round_half_up(comparison_rate * usage, CURRENCY_PRECISION)
            annual_savings = round_half_up(baseline_rate * usage - comparison_rate * usage, CURRENCY_PRECISION)

            # Accumulate the rounded figure, never the full-precision one
            cumulative = cumulative + annual_savings

            records.append(YearRecord(
                year=year,
                baseline_rate_escalated=self._escalate(baseline.rate_per_unit, params.baseline_growth_rate, year),
                comparison_rate_escalated=(
                    self._escalate(params.comparison_rate0, params.comparison_growth_rate, year)
                    if params.has_comparison else 0.0
                ),
                baseline_cost=baseline_cost,
                comparison_cost=comparison_cost,
                annual_savings=annual_savings,
                cumulative_savings=cumulative,
            ))

        logger.debug(
            f"Projected {len(records)} years: cumulative savings {cumulative:.2f}"
        )
        return records


def project(baseline: Baseline, params: ProjectionParams) -> List[YearRecord]:
    """Project a series with the default projector."""
    return SeriesProjector().project(baseline, params)


def _final_year_cost(rate: float, growth_rate: float, usage: float, horizon_years: int) -> float:
    try:
        return rate * (1 + growth_rate) ** (horizon_years - 1) * usage
    except OverflowError:
        return math.inf


def projection_in_range(baseline: Baseline, params: ProjectionParams) -> bool:
    """Whether every yearly cost and saving stays a finite number.

    Costs grow or shrink monotonically, so only the first and last years
    need checking.
    """
    usage = baseline.annual_usage
    horizon = params.horizon_years
    baseline_costs = [
        baseline.rate_per_unit * usage,
        _final_year_cost(baseline.rate_per_unit, params.baseline_growth_rate, usage, horizon),
    ]
    comparison_costs = [0.0, 0.0]
    if params.has_comparison:
        comparison_costs = [
            params.comparison_rate0 * usage,
            _final_year_cost(params.comparison_rate0, params.comparison_growth_rate, usage, horizon),
        ]
    return all(
        math.isfinite(b) and math.isfinite(c) and math.isfinite(b - c)
        for b, c in zip(baseline_costs, comparison_costs)
    )


def check_projection_range(baseline: Baseline, params: ProjectionParams) -> None:
    """Reject growth rates that cannot be projected over the horizon.

    Raises:
        ValidationError: If a yearly cost would overflow
    """
    if not projection_in_range(baseline, params):
        raise ValidationError("growth_out_of_range")


def milestone_years(
    records: Sequence[YearRecord],
    interval: int = DEFAULT_MILESTONE_INTERVAL
) -> List[int]:
    """Select the years to annotate on a chart.

    Every ``interval``-th year is a milestone, and so is the final year.

    Args:
        records: Projected series
        interval: Spacing between milestones in years

    Returns:
        Sorted 1-indexed year numbers
    """
    if interval < 1:
        raise ValueError("interval must be at least 1")
    if not records:
        return []

    final_year = records[-1].year
    years = [r.year for r in records if r.year % interval == 0]
    if final_year not in years:
        years.append(final_year)
    return years


def milestone_indices(
    records: Sequence[YearRecord],
    interval: int = DEFAULT_MILESTONE_INTERVAL
) -> List[int]:
    """Zero-based positions of the milestone years within ``records``."""
    wanted = set(milestone_years(records, interval))
    return [i for i, r in enumerate(records) if r.year in wanted]


def monthly_equivalent(annual_value: float) -> float:
    """Convert a yearly amount to its monthly equivalent."""
    return annual_value / MONTHS_PER_YEAR


def monthly_baseline_costs(records: Sequence[YearRecord]) -> List[float]:
    """Monthly equivalent of each year's baseline cost."""
    return [monthly_equivalent(r.baseline_cost) for r in records]


def total_savings(records: Sequence[YearRecord]) -> float:
    """Cumulative savings at the end of the horizon (0 for an empty series)."""
    if not records:
        return 0.0
    return records[-1].cumulative_savings
