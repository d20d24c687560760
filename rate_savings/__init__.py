"""Electricity rate savings projections."""

from .core import (
    Baseline,
    BillingInput,
    PreconditionViolation,
    ProjectionParams,
    RateNormalizer,
    SeriesProjector,
    ValidationError,
    YearRecord,
    normalize,
    project,
)

__version__ = "1.0.0"

__all__ = [
    "Baseline",
    "BillingInput",
    "PreconditionViolation",
    "ProjectionParams",
    "RateNormalizer",
    "SeriesProjector",
    "ValidationError",
    "YearRecord",
    "normalize",
    "project",
]
