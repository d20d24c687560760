"""CSV export of a projected series.

Every field is double-quoted with embedded quotes doubled, and rows are
joined with CRLF. Rates are written with 6 decimals and money with 2,
independent of how the table displays them.
"""

import io
import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from ..core.projections import YearRecord, round_half_up
from .table import PROJECTION_COLUMNS, RATE_FIELDS, RECORD_FIELDS

logger = logging.getLogger(__name__)

DEFAULT_CSV_FILENAME = "savings_{years}yrs.csv"
LINE_TERMINATOR = "\r\n"


def _fixed(value: float, decimals: int) -> str:
    text = f"{round_half_up(value, decimals):.{decimals}f}"
    # Avoid "-0.00" for values that round to zero
    if float(text) == 0:
        text = f"{0.0:.{decimals}f}"
    return text


def _quote(field: str) -> str:
    return '"' + field.replace('"', '""') + '"'


def format_csv_row(record: YearRecord) -> List[str]:
    """Return the unquoted CSV fields for a record."""
    year, *values = record.as_row()
    row = [str(year)]
    for field, value in zip(RECORD_FIELDS[1:], values):
        decimals = 6 if field in RATE_FIELDS else 2
        row.append(_fixed(value, decimals))
    return row


def export_csv(records: Sequence[YearRecord]) -> str:
    """Render records as CSV text with a header row."""
    rows = [PROJECTION_COLUMNS] + [format_csv_row(r) for r in records]
    return LINE_TERMINATOR.join(",".join(_quote(f) for f in row) for row in rows)


def csv_filename(horizon_years: int, pattern: str = DEFAULT_CSV_FILENAME) -> str:
    """Default download name, e.g. ``savings_25yrs.csv``."""
    return pattern.format(years=horizon_years)


def write_csv(records: Sequence[YearRecord], output_path: Union[str, Path]) -> Path:
    """Write the CSV export to disk.

    Args:
        records: Projected series
        output_path: Destination file

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(export_csv(records))
    logger.info(f"CSV export saved to {output_path}")
    return output_path


def read_csv(source: Union[str, Path]) -> pd.DataFrame:
    """Read an exported CSV back into a DataFrame keyed by record field names.

    Args:
        source: CSV text, or a Path to a CSV file

    Returns:
        DataFrame with one row per year
    """
    if isinstance(source, Path):
        df = pd.read_csv(source)
    else:
        df = pd.read_csv(io.StringIO(source))

    if list(df.columns) != PROJECTION_COLUMNS:
        raise ValueError(f"Unexpected CSV header: {list(df.columns)}")

    df.columns = RECORD_FIELDS
    return df
