"""Project many billing scenarios in one pass."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .core.errors import ValidationError
from .core.normalizer import Baseline, RateNormalizer
from .core.projections import ProjectionParams, SeriesProjector, YearRecord, check_projection_range
from .input.scenario_parser import Scenario
from .output.report_data import build_summary

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Outcome of projecting a single scenario."""

    name: str
    baseline: Optional[Baseline] = None
    params: Optional[ProjectionParams] = None
    records: List[YearRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat summary dictionary."""
        result: Dict[str, Any] = {"name": self.name, "error": self.error}
        if self.baseline is not None:
            result.update({
                "rate_per_unit": round(self.baseline.rate_per_unit, 6),
                "annual_usage": self.baseline.annual_usage,
            })
        if self.params is not None and self.records:
            summary = build_summary(self.records, self.params)
            result.update({
                "comparison_rate": self.params.comparison_rate0 if self.params.has_comparison else None,
                "horizon_years": self.params.horizon_years,
                "first_year_savings": round(summary.first_year_savings, 2),
                "cumulative_savings": round(summary.cumulative_savings, 2),
            })
        return result


def run_batch(
    scenarios: Sequence[Scenario],
    defaults: Optional[Dict[str, Any]] = None
) -> List[ScenarioResult]:
    """Normalize and project every scenario.

    Invalid rows are reported on their result instead of stopping the batch.

    Args:
        scenarios: Parsed scenarios
        defaults: Projection settings used for blank scenario fields

    Returns:
        One ScenarioResult per scenario, in input order
    """
    normalizer = RateNormalizer()
    projector = SeriesProjector()
    results = []

    for scenario in scenarios:
        try:
            baseline = normalizer.normalize(scenario.billing)
            params = scenario.to_params(defaults)
            check_projection_range(baseline, params)
        except ValidationError as e:
            logger.warning(f"Skipping scenario {scenario.name}: {e.message}")
            results.append(ScenarioResult(name=scenario.name, error=e.message))
            continue

        records = projector.project(baseline, params)
        results.append(ScenarioResult(
            name=scenario.name,
            baseline=baseline,
            params=params,
            records=records,
        ))

    ok = sum(1 for r in results if r.ok)
    logger.info(f"Projected {ok}/{len(results)} scenarios")
    return results
