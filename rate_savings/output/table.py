"""Table rows and DataFrame views of a projected series."""

from typing import List, Sequence

import pandas as pd

from ..core.projections import YearRecord
from ..utils.helpers import format_currency, format_rate

# Display headers, in YearRecord.as_row() order
PROJECTION_COLUMNS = [
    "Year",
    "Amount you pay now $/kWh",
    "Fixed $/kWh",
    "Amount you pay now (Cost $/yr)",
    "Fixed Cost ($/yr)",
    "Annual Savings ($/yr)",
    "Cumulative Savings ($)",
]

RECORD_FIELDS = [
    "year",
    "baseline_rate_escalated",
    "comparison_rate_escalated",
    "baseline_cost",
    "comparison_cost",
    "annual_savings",
    "cumulative_savings",
]

RATE_FIELDS = ("baseline_rate_escalated", "comparison_rate_escalated")


def build_table_rows(records: Sequence[YearRecord], currency: str = "USD") -> List[List[str]]:
    """Format each record as a display row.

    Money columns use currency formatting; rate columns are shown with
    four decimals so sub-cent differences stay visible.
    """
    rows = []
    for record in records:
        values = record.to_dict()
        row = [str(record.year)]
        for field in RECORD_FIELDS[1:]:
            if field in RATE_FIELDS:
                row.append(format_rate(values[field], currency=currency))
            else:
                row.append(format_currency(values[field], currency=currency))
        rows.append(row)
    return rows


def records_to_dataframe(
    records: Sequence[YearRecord],
    formatted: bool = False,
    currency: str = "USD"
) -> pd.DataFrame:
    """Convert records to a DataFrame with one row per year.

    Args:
        records: Projected series
        formatted: Display strings under the human-readable headers
            instead of raw values under the record field names
        currency: Currency for formatted money columns

    Returns:
        DataFrame of the series
    """
    if formatted:
        return pd.DataFrame(build_table_rows(records, currency=currency), columns=PROJECTION_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in records], columns=RECORD_FIELDS)
