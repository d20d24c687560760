"""Generate Excel reports from projection data."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from openpyxl import Workbook
from openpyxl.chart import LineChart, Reference
from openpyxl.styles import Border, Font, PatternFill, Side

from .report_data import ProjectionReport
from .table import PROJECTION_COLUMNS, RATE_FIELDS, RECORD_FIELDS

logger = logging.getLogger(__name__)


class ExcelGenerator:
    """Generate Excel workbooks with a summary, yearly detail and a chart."""

    # Style definitions
    HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
    HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
    SAVINGS_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
    LOSS_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
    CURRENCY_FORMAT = "$#,##0.00"
    RATE_FORMAT = "$0.000000"
    PERCENT_FORMAT = "0.0%"
    THIN_BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self, output_path: Union[str, Path]):
        """Initialize the generator.

        Args:
            output_path: Path for the output Excel file
        """
        self.output_path = Path(output_path)
        self.workbook = Workbook()
        # Remove default sheet
        self.workbook.remove(self.workbook.active)

    def generate(self, report: ProjectionReport) -> Path:
        """Generate the projection workbook.

        Args:
            report: ProjectionReport with baseline, parameters and series

        Returns:
            Path to generated file
        """
        data = report.get_all_data()

        self._create_summary_sheet(data["summary"])
        self._create_yearly_sheet(data["years"])

        self.workbook.save(self.output_path)
        logger.info(f"Excel report saved to {self.output_path}")
        return self.output_path

    def generate_batch(self, rows: Sequence[Dict[str, Any]]) -> Path:
        """Generate a workbook with one summary row per scenario.

        Args:
            rows: Scenario summary dictionaries (see ScenarioResult.to_dict)

        Returns:
            Path to generated file
        """
        ws = self.workbook.create_sheet("Scenarios")

        columns = [
            ("Scenario", "name", 25),
            ("Rate $/kWh", "rate_per_unit", 14),
            ("Annual kWh", "annual_usage", 14),
            ("Fixed $/kWh", "comparison_rate", 14),
            ("Years", "horizon_years", 8),
            ("First Year Savings", "first_year_savings", 18),
            ("Cumulative Savings", "cumulative_savings", 20),
            ("Error", "error", 45),
        ]
        self._write_header(ws, [(header, width) for header, _, width in columns])

        for row_num, row in enumerate(rows, 2):
            for col, (_, field, _) in enumerate(columns, 1):
                cell = ws.cell(row=row_num, column=col, value=row.get(field))
                if field in ("rate_per_unit", "comparison_rate"):
                    cell.number_format = self.RATE_FORMAT
                elif field in ("first_year_savings", "cumulative_savings"):
                    cell.number_format = self.CURRENCY_FORMAT

        ws.freeze_panes = "A2"

        self.workbook.save(self.output_path)
        logger.info(f"Scenario workbook saved to {self.output_path}")
        return self.output_path

    def _write_header(self, ws, headers: List[tuple]) -> None:
        for col, (header, width) in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = self.HEADER_FILL
            cell.font = self.HEADER_FONT
            cell.border = self.THIN_BORDER
            ws.column_dimensions[cell.column_letter].width = width

    def _create_summary_sheet(self, summary: Dict[str, Any]) -> None:
        """Create the Summary sheet."""
        ws = self.workbook.create_sheet("Summary")

        ws["A1"] = summary["title"]
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        ws["A2"] = f"Generated: {summary['generated_at']}"
        ws["A2"].font = Font(italic=True)

        row = 4
        metrics = [
            ("Amount you pay now ($/kWh)", summary["rate_per_unit"], self.RATE_FORMAT),
            ("Monthly Usage (kWh)", summary["monthly_usage"], "#,##0.00"),
            ("Annual Usage (kWh)", summary["annual_usage"], "#,##0.00"),
            ("Fixed Rate ($/kWh)", summary["comparison_rate"], self.RATE_FORMAT),
            ("Amount you pay now growth", summary["baseline_growth_rate"], self.PERCENT_FORMAT),
            ("Fixed growth", summary["comparison_growth_rate"], self.PERCENT_FORMAT),
            ("Years Projected", summary["horizon_years"], None),
            ("Total Cost at Current Rate", summary["total_baseline_cost"], self.CURRENCY_FORMAT),
            ("Total Cost at Fixed Rate", summary["total_comparison_cost"], self.CURRENCY_FORMAT),
            ("Cumulative Savings", summary["cumulative_savings"], self.CURRENCY_FORMAT),
            ("Average Monthly Savings", summary["average_monthly_savings"], self.CURRENCY_FORMAT),
            ("Break-even Year", summary["break_even_year"], None),
        ]

        for label, value, fmt in metrics:
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            cell = ws.cell(row=row, column=2, value=value)
            if fmt:
                cell.number_format = fmt
            row += 1

        row += 1
        ws.cell(row=row, column=1, value=summary["summary_text"]).font = Font(italic=True)

        ws.column_dimensions["A"].width = 32
        ws.column_dimensions["B"].width = 20

    def _create_yearly_sheet(self, years: List[Dict[str, Any]]) -> None:
        """Create the Yearly Projection sheet with a cost/savings chart."""
        ws = self.workbook.create_sheet("Yearly Projection")

        self._write_header(ws, [(header, 22 if i else 8) for i, header in enumerate(PROJECTION_COLUMNS)])

        for row_num, year in enumerate(years, 2):
            for col, field in enumerate(RECORD_FIELDS, 1):
                cell = ws.cell(row=row_num, column=col, value=year[field])
                if field in RATE_FIELDS:
                    cell.number_format = self.RATE_FORMAT
                elif field != "year":
                    cell.number_format = self.CURRENCY_FORMAT
                if field == "annual_savings":
                    cell.fill = self.SAVINGS_FILL if year[field] >= 0 else self.LOSS_FILL

        ws.freeze_panes = "A2"

        if years:
            last_row = len(years) + 1
            chart = LineChart()
            chart.title = "Annual Cost and Savings"
            chart.y_axis.title = "Dollars ($/yr)"
            chart.x_axis.title = "Year"

            # Baseline cost, comparison cost and annual savings columns
            for col in (4, 5, 6):
                data_ref = Reference(ws, min_col=col, min_row=1, max_row=last_row)
                chart.add_data(data_ref, titles_from_data=True)
            cats = Reference(ws, min_col=1, min_row=2, max_row=last_row)
            chart.set_categories(cats)
            chart.width = 24
            chart.height = 12

            ws.add_chart(chart, "I3")
