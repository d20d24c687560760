"""Chart-ready series derived from a projection.

Everything here is plain data; rendering (Plotly figures, bubble
placement) lives in the dashboard.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from ..core.projections import (
    DEFAULT_MILESTONE_INTERVAL,
    YearRecord,
    milestone_indices,
    monthly_baseline_costs,
)
from ..utils.helpers import format_currency

SAVINGS_LABEL = "Annual Savings ($/yr)"
BASELINE_LABEL = "Amount you pay now (Cost $/yr)"
COMPARISON_LABEL = "Fixed Cost ($/yr)"


@dataclass(frozen=True)
class ChartDataset:
    """One line on the chart."""

    key: str
    label: str
    values: List[float]


@dataclass(frozen=True)
class MilestoneAnnotation:
    """A bubble anchored on the baseline cost line showing its monthly cost."""

    index: int
    year: int
    baseline_cost: float
    monthly_cost: float

    @property
    def text(self) -> str:
        return f"{format_currency(self.monthly_cost)}/mo"


@dataclass(frozen=True)
class ChartSeries:
    """Year labels, the selected datasets and milestone annotations."""

    labels: List[str]
    datasets: List[ChartDataset] = field(default_factory=list)
    annotations: List[MilestoneAnnotation] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.labels


def year_labels(records: Sequence[YearRecord]) -> List[str]:
    """Labels for the x axis, e.g. ``Year 1``."""
    return [f"Year {r.year}" for r in records]


def milestone_annotations(
    records: Sequence[YearRecord],
    interval: int = DEFAULT_MILESTONE_INTERVAL
) -> List[MilestoneAnnotation]:
    """Build annotations for every milestone year."""
    monthly_costs = monthly_baseline_costs(records)
    annotations = []
    for index in milestone_indices(records, interval):
        record = records[index]
        annotations.append(MilestoneAnnotation(
            index=index,
            year=record.year,
            baseline_cost=record.baseline_cost,
            monthly_cost=monthly_costs[index],
        ))
    return annotations


def build_chart_series(
    records: Sequence[YearRecord],
    show_savings: bool = True,
    show_baseline: bool = True,
    show_comparison: bool = True,
    milestone_interval: int = DEFAULT_MILESTONE_INTERVAL
) -> ChartSeries:
    """Select the datasets to draw according to the chart toggles.

    Args:
        records: Projected series
        show_savings: Include annual savings
        show_baseline: Include the current-rate cost line
        show_comparison: Include the comparison cost line
        milestone_interval: Spacing of milestone annotations in years

    Returns:
        ChartSeries with datasets in savings, baseline, comparison order
    """
    datasets = []
    if show_savings:
        datasets.append(ChartDataset("annual_savings", SAVINGS_LABEL, [r.annual_savings for r in records]))
    if show_baseline:
        datasets.append(ChartDataset("baseline_cost", BASELINE_LABEL, [r.baseline_cost for r in records]))
    if show_comparison:
        datasets.append(ChartDataset("comparison_cost", COMPARISON_LABEL, [r.comparison_cost for r in records]))

    return ChartSeries(
        labels=year_labels(records),
        datasets=datasets,
        annotations=milestone_annotations(records, milestone_interval),
    )
