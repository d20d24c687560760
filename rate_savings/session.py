"""Calculator session state and the derived savings view.

The session is an immutable value owned by whichever front end drives it
(CLI, Streamlit). Recalculating produces a new session; the savings view
is recomputed from the current session and form values on every change.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .core.errors import VALIDATION_MESSAGES, ValidationError
from .core.normalizer import Baseline, BillingInput, RateNormalizer
from .core.projections import (
    DEFAULT_MILESTONE_INTERVAL,
    ProjectionParams,
    SeriesProjector,
    YearRecord,
    check_projection_range,
)
from .input.form_parser import RawValue, parse_projection_form
from .output.chart_data import ChartSeries, build_chart_series
from .output.csv_export import export_csv
from .output.report_data import ProjectionSummary, build_summary
from .output.table import build_table_rows

logger = logging.getLogger(__name__)

NO_BASELINE_MESSAGE = "Please calculate on the Calculator tab first."
AWAITING_COMPARISON_MESSAGE = "Awaiting fixed rate to generate savings graph…"


@dataclass(frozen=True)
class CalculatorSession:
    """The most recent successful calculation, if any."""

    baseline: Optional[Baseline] = None

    @property
    def has_baseline(self) -> bool:
        return self.baseline is not None and self.baseline.is_valid

    def calculate(self, billing: BillingInput) -> "CalculatorSession":
        """Return a new session for ``billing``.

        Raises:
            ValidationError: If the input is invalid; this session is unchanged
        """
        baseline = RateNormalizer().normalize(billing)
        return CalculatorSession(baseline=baseline)

    def reset(self) -> "CalculatorSession":
        """Return an empty session."""
        return CalculatorSession()


@dataclass(frozen=True)
class SavingsForm:
    """Raw values from the savings screen, as entered."""

    comparison_rate: RawValue = None
    baseline_growth_pct: RawValue = None
    comparison_growth_pct: RawValue = None
    horizon_years: RawValue = None
    show_savings: bool = True
    show_baseline: bool = True
    show_comparison: bool = True


@dataclass(frozen=True)
class ProjectionView:
    """Everything the savings screen renders for one state."""

    message: str
    params: Optional[ProjectionParams] = None
    records: List[YearRecord] = field(default_factory=list)
    summary: Optional[ProjectionSummary] = None
    table_rows: List[List[str]] = field(default_factory=list)
    chart: Optional[ChartSeries] = None

    @property
    def is_cleared(self) -> bool:
        """True when nothing should be drawn."""
        return not self.records

    def csv_text(self) -> str:
        """CSV export of the current series."""
        return export_csv(self.records)


def derive_projection(
    session: CalculatorSession,
    form: SavingsForm,
    require_comparison: bool = False,
    defaults: Optional[Dict[str, Any]] = None
) -> ProjectionView:
    """Compute the savings view from the current session and form.

    Args:
        session: Current calculator session
        form: Raw savings form values and chart toggles
        require_comparison: Clear the view when no comparison rate is
            entered (explicit "update graph"); live updates pass False
        defaults: Projection settings from config

    Returns:
        ProjectionView; cleared views carry only a message
    """
    if not session.has_baseline:
        return ProjectionView(message=NO_BASELINE_MESSAGE)

    defaults = defaults or {}
    try:
        params = parse_projection_form(
            comparison_rate=form.comparison_rate,
            baseline_growth_pct=form.baseline_growth_pct,
            comparison_growth_pct=form.comparison_growth_pct,
            horizon_years=form.horizon_years,
            defaults=defaults,
        )
        check_projection_range(session.baseline, params)
    except ValidationError as e:
        logger.warning(f"Invalid savings form: {e}")
        return ProjectionView(message=e.message)

    if require_comparison and not params.has_comparison:
        return ProjectionView(message=VALIDATION_MESSAGES["missing_comparison_rate"], params=params)

    records = SeriesProjector().project(session.baseline, params)
    summary = build_summary(records, params)
    message = summary.summary_text() if params.has_comparison else AWAITING_COMPARISON_MESSAGE

    return ProjectionView(
        message=message,
        params=params,
        records=records,
        summary=summary,
        table_rows=build_table_rows(records),
        chart=build_chart_series(
            records,
            show_savings=form.show_savings,
            show_baseline=form.show_baseline,
            show_comparison=form.show_comparison,
            milestone_interval=int(defaults.get("milestone_interval", DEFAULT_MILESTONE_INTERVAL)),
        ),
    )
