"""Projection engine: rate normalization and yearly savings series."""

from .errors import PreconditionViolation, RateSavingsError, ValidationError
from .normalizer import Baseline, BillingInput, RateNormalizer, normalize
from .projections import (
    ProjectionParams,
    SeriesProjector,
    YearRecord,
    check_projection_range,
    milestone_indices,
    milestone_years,
    monthly_baseline_costs,
    monthly_equivalent,
    project,
    projection_in_range,
    round_half_up,
    total_savings,
)

__all__ = [
    "Baseline",
    "BillingInput",
    "PreconditionViolation",
    "ProjectionParams",
    "RateNormalizer",
    "RateSavingsError",
    "SeriesProjector",
    "ValidationError",
    "YearRecord",
    "check_projection_range",
    "milestone_indices",
    "milestone_years",
    "monthly_baseline_costs",
    "monthly_equivalent",
    "normalize",
    "project",
    "projection_in_range",
    "round_half_up",
    "total_savings",
]
