"""CSV/Excel parser for batches of billing scenarios."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..core.normalizer import BillingInput
from ..core.projections import ProjectionParams
from .form_parser import parse_billing_form, parse_projection_form

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """One row of a scenario file: a bill, its usage and an offer to compare."""

    name: str
    billing: BillingInput
    comparison_rate: Optional[float] = None
    baseline_growth_pct: Optional[float] = None
    comparison_growth_pct: Optional[float] = None
    horizon_years: Optional[float] = None

    def to_params(self, defaults: Optional[Dict[str, Any]] = None) -> ProjectionParams:
        """Build projection parameters, filling blanks from ``defaults``."""
        return parse_projection_form(
            comparison_rate=self.comparison_rate,
            baseline_growth_pct=self.baseline_growth_pct,
            comparison_growth_pct=self.comparison_growth_pct,
            horizon_years=self.horizon_years,
            defaults=defaults,
        )


class ScenarioParser:
    """Parser for CSV and Excel files listing billing scenarios.

    Supports various column naming conventions. Only the bill amount
    column is required; rows with a blank bill are still returned so the
    normalizer can report them.
    """

    # Common column name mappings
    COLUMN_MAPPINGS = {
        "name": ["name", "scenario", "label", "customer", "account"],
        "monthly_dollars": ["monthly_dollars", "monthly_bill", "bill", "dollars", "bill_amount", "amount"],
        "monthly_usage": ["monthly_usage", "monthly_kwh", "kwh", "usage"],
        "annual_usage": ["annual_usage", "annual_kwh", "yearly_kwh", "yearly_usage"],
        "comparison_rate": ["comparison_rate", "fixed_rate", "offer_rate", "comparison", "fixed"],
        "baseline_growth_pct": ["baseline_growth_pct", "growth_pct", "growth", "growth_rate"],
        "comparison_growth_pct": ["comparison_growth_pct", "fixed_growth_pct", "fixed_growth", "fixed_growth_rate"],
        "horizon_years": ["horizon_years", "years", "horizon"],
    }

    REQUIRED_COLUMNS = ["monthly_dollars"]

    def __init__(self, file_path: Union[str, Path]):
        """Initialize the parser.

        Args:
            file_path: Path to CSV or Excel file
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"Input file not found: {self.file_path}")

        self.df: Optional[pd.DataFrame] = None
        self._column_map: Dict[str, str] = {}

    def parse(self, sheet_name: Optional[str] = None) -> List[Scenario]:
        """Parse the input file.

        Args:
            sheet_name: Sheet name for Excel files (default: first sheet)

        Returns:
            List of scenarios in file order

        Raises:
            ValueError: If the format is unsupported or the bill column is missing
        """
        suffix = self.file_path.suffix.lower()

        if suffix == ".csv":
            self.df = pd.read_csv(self.file_path)
        elif suffix in [".xlsx", ".xls"]:
            self.df = pd.read_excel(self.file_path, sheet_name=sheet_name or 0)
        else:
            raise ValueError(f"Unsupported file format: {suffix}")

        # Normalize column names
        self.df.columns = [str(c).lower().strip().replace(" ", "_") for c in self.df.columns]

        self._map_columns()

        missing = [c for c in self.REQUIRED_COLUMNS if c not in self._column_map]
        if missing:
            raise ValueError(f"Missing required column(s): {', '.join(missing)}")

        scenarios = self._convert_to_scenarios()

        logger.info(f"Parsed {len(scenarios)} scenarios from {self.file_path.name}")
        return scenarios

    def _map_columns(self) -> None:
        """Map actual column names to standard names."""
        self._column_map = {}
        actual_columns = set(self.df.columns)

        for standard_name, variants in self.COLUMN_MAPPINGS.items():
            for variant in variants:
                if variant in actual_columns:
                    self._column_map[standard_name] = variant
                    break

        unmapped = [c for c in actual_columns if c not in self._column_map.values()]
        logger.debug(f"Mapped columns: {list(self._column_map.keys())}")
        if unmapped:
            logger.debug(f"Ignored columns: {unmapped}")

    def _get_column_value(self, row: pd.Series, standard_name: str) -> Optional[Any]:
        """Get a value from a row using its standard column name."""
        if standard_name in self._column_map:
            value = row.get(self._column_map[standard_name])
            if pd.notna(value):
                return value
        return None

    def _convert_to_scenarios(self) -> List[Scenario]:
        scenarios = []

        for position, (_, row) in enumerate(self.df.iterrows(), start=1):
            name = self._get_column_value(row, "name")
            scenarios.append(Scenario(
                name=str(name).strip() if name is not None else f"Scenario {position}",
                billing=parse_billing_form(
                    self._get_column_value(row, "monthly_dollars"),
                    self._get_column_value(row, "monthly_usage"),
                    self._get_column_value(row, "annual_usage"),
                ),
                comparison_rate=self._get_column_value(row, "comparison_rate"),
                baseline_growth_pct=self._get_column_value(row, "baseline_growth_pct"),
                comparison_growth_pct=self._get_column_value(row, "comparison_growth_pct"),
                horizon_years=self._get_column_value(row, "horizon_years"),
            ))

        return scenarios

    def get_summary(self) -> Dict[str, Any]:
        """Get summary information about the parsed file.

        Returns:
            Summary dictionary
        """
        if self.df is None:
            raise RuntimeError("Call parse() before get_summary()")

        return {
            "total_scenarios": len(self.df),
            "columns": list(self.df.columns),
            "mapped_columns": dict(self._column_map),
        }
