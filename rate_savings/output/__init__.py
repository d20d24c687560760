"""Output generation: table rows, chart data, CSV and Excel exports."""

from .chart_data import ChartSeries, build_chart_series
from .csv_export import csv_filename, export_csv, read_csv, write_csv
from .excel_generator import ExcelGenerator
from .report_data import ProjectionReport, ProjectionSummary, build_summary, describe_baseline
from .table import PROJECTION_COLUMNS, build_table_rows, records_to_dataframe

__all__ = [
    "ChartSeries",
    "ExcelGenerator",
    "PROJECTION_COLUMNS",
    "ProjectionReport",
    "ProjectionSummary",
    "build_chart_series",
    "build_summary",
    "build_table_rows",
    "csv_filename",
    "describe_baseline",
    "export_csv",
    "read_csv",
    "records_to_dataframe",
    "write_csv",
]
