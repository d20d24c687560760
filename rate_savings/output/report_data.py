"""Prepare summary data for display and report generation."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..core.normalizer import Baseline
from ..core.projections import ProjectionParams, YearRecord, monthly_equivalent, total_savings
from ..utils.helpers import format_currency, format_percentage, format_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionSummary:
    """Headline figures for a projected series."""

    horizon_years: int
    baseline_growth_rate: float
    comparison_growth_rate: float
    has_comparison: bool
    total_baseline_cost: float
    total_comparison_cost: float
    cumulative_savings: float
    first_year_savings: float
    break_even_year: Optional[int]

    @property
    def average_monthly_savings(self) -> float:
        if self.horizon_years <= 0:
            return 0.0
        return monthly_equivalent(self.cumulative_savings / self.horizon_years)

    def summary_text(self) -> str:
        """One-line description of the cumulative outcome."""
        return (
            f"Cumulative savings over {self.horizon_years} years "
            f"(Amount you pay now growth {format_percentage(self.baseline_growth_rate)}/yr "
            f"vs Fixed growth {format_percentage(self.comparison_growth_rate)}/yr): "
            f"{format_currency(self.cumulative_savings)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "horizon_years": self.horizon_years,
            "baseline_growth_rate": self.baseline_growth_rate,
            "comparison_growth_rate": self.comparison_growth_rate,
            "has_comparison": self.has_comparison,
            "total_baseline_cost": round(self.total_baseline_cost, 2),
            "total_comparison_cost": round(self.total_comparison_cost, 2),
            "cumulative_savings": round(self.cumulative_savings, 2),
            "first_year_savings": round(self.first_year_savings, 2),
            "average_monthly_savings": round(self.average_monthly_savings, 2),
            "break_even_year": self.break_even_year,
        }


def build_summary(records: Sequence[YearRecord], params: ProjectionParams) -> ProjectionSummary:
    """Summarize a projected series.

    ``break_even_year`` is the first year whose cumulative savings are
    positive, or None if that never happens within the horizon.
    """
    break_even = next((r.year for r in records if r.cumulative_savings > 0), None)

    return ProjectionSummary(
        horizon_years=len(records),
        baseline_growth_rate=params.baseline_growth_rate,
        comparison_growth_rate=params.comparison_growth_rate,
        has_comparison=params.has_comparison,
        total_baseline_cost=sum(r.baseline_cost for r in records),
        total_comparison_cost=sum(r.comparison_cost for r in records),
        cumulative_savings=total_savings(records),
        first_year_savings=records[0].annual_savings if records else 0.0,
        break_even_year=break_even,
    )


def describe_baseline(baseline: Baseline, usage_unit: str = "kWh") -> Dict[str, str]:
    """Display strings for the calculator result and the savings header."""
    return {
        "rate": f"{format_currency(baseline.rate_per_unit)} per {usage_unit} (Amount you pay now)",
        "rate_precise": f"{format_rate(baseline.rate_per_unit)}/{usage_unit}",
        "monthly_usage": f"{baseline.monthly_usage:.2f}",
        "annual_usage": f"{baseline.annual_usage:.2f}",
    }


class ProjectionReport:
    """Bundle a baseline, its parameters and projected series for export."""

    def __init__(
        self,
        baseline: Baseline,
        params: ProjectionParams,
        records: List[YearRecord],
        title: str = "Electricity Savings Projection"
    ):
        """Initialize the report.

        Args:
            baseline: Normalized baseline
            params: Parameters used for the projection
            records: Projected series
            title: Report title
        """
        self.baseline = baseline
        self.params = params
        self.records = records
        self.title = title
        self.generated_at = datetime.now(timezone.utc)

    def build_summary(self) -> Dict[str, Any]:
        """Build the summary section.

        Returns:
            Summary dictionary
        """
        projection_summary = build_summary(self.records, self.params)
        summary = projection_summary.to_dict()
        summary.update({
            "title": self.title,
            "generated_at": self.generated_at.isoformat(),
            "rate_per_unit": self.baseline.rate_per_unit,
            "annual_usage": self.baseline.annual_usage,
            "monthly_usage": self.baseline.monthly_usage,
            "comparison_rate": self.params.comparison_rate0 if self.params.has_comparison else None,
            "summary_text": projection_summary.summary_text(),
        })
        return summary

    def get_all_data(self) -> Dict[str, Any]:
        """Get all report data.

        Returns:
            Complete report data dictionary
        """
        return {
            "summary": self.build_summary(),
            "years": [r.to_dict() for r in self.records],
        }
