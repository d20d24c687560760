#!/usr/bin/env python3
"""CLI entry point for Rate Savings."""

import argparse
import logging
import sys
from pathlib import Path

from rate_savings.batch import run_batch
from rate_savings.core.errors import ValidationError
from rate_savings.input.form_parser import parse_billing_form
from rate_savings.input.scenario_parser import ScenarioParser
from rate_savings.output.csv_export import write_csv
from rate_savings.output.excel_generator import ExcelGenerator
from rate_savings.output.report_data import ProjectionReport, describe_baseline
from rate_savings.output.table import records_to_dataframe
from rate_savings.session import CalculatorSession, SavingsForm, derive_projection
from rate_savings.utils.helpers import get_projection_defaults, load_config, setup_logging

EXIT_INVALID_INPUT = 2


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Electricity Rate Savings - Project the cost of your current rate against a fixed offer"
    )

    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument(
        "--bill", "-b",
        type=str,
        help="Dollar amount of your monthly utility bill"
    )
    input_group.add_argument(
        "--input", "-i",
        type=str,
        help="Path to CSV/Excel file with billing scenarios"
    )

    parser.add_argument(
        "--monthly-kwh",
        type=str,
        help="Monthly usage in kWh (ignored when --annual-kwh is given)"
    )

    parser.add_argument(
        "--annual-kwh",
        type=str,
        help="Annual usage in kWh"
    )

    parser.add_argument(
        "--fixed-rate", "-f",
        type=str,
        help="Fixed comparison rate in $/kWh"
    )

    parser.add_argument(
        "--growth", "-g",
        type=str,
        help="Annual growth of the rate you pay now, in percent (default: 3.5)"
    )

    parser.add_argument(
        "--fixed-growth",
        type=str,
        help="Annual growth of the fixed rate, in percent; may be negative (default: 0)"
    )

    parser.add_argument(
        "--years", "-y",
        type=str,
        help="Number of years to project (default: 25)"
    )

    parser.add_argument(
        "--csv",
        type=str,
        help="Write the yearly projection to this CSV file"
    )

    parser.add_argument(
        "--excel", "-o",
        type=str,
        help="Write an Excel report to this file"
    )

    parser.add_argument(
        "--table",
        action="store_true",
        help="Print the year-by-year table"
    )

    parser.add_argument(
        "--dashboard",
        action="store_true",
        help="Launch the Streamlit dashboard"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(argv)


def run_projection(args, config) -> int:
    """Normalize a single bill and print its projection.

    Args:
        args: Command line arguments
        config: Application configuration

    Returns:
        Process exit code
    """
    logger = logging.getLogger(__name__)
    defaults = get_projection_defaults(config)
    usage_unit = config.get("display", {}).get("usage_unit", "kWh")

    billing = parse_billing_form(args.bill, args.monthly_kwh, args.annual_kwh)
    try:
        session = CalculatorSession().calculate(billing)
    except ValidationError as e:
        logger.warning(f"Invalid billing input: {e}")
        print(e.message)
        return EXIT_INVALID_INPUT

    form = SavingsForm(
        comparison_rate=args.fixed_rate,
        baseline_growth_pct=args.growth,
        comparison_growth_pct=args.fixed_growth,
        horizon_years=args.years,
    )
    view = derive_projection(session, form, defaults=defaults)
    if view.is_cleared:
        print(view.message)
        return EXIT_INVALID_INPUT

    baseline_text = describe_baseline(session.baseline, usage_unit)
    print("\n" + "=" * 60)
    print("ELECTRICITY RATE SAVINGS")
    print("=" * 60)
    print(f"Rate:          {baseline_text['rate']}")
    print(f"Monthly usage: {baseline_text['monthly_usage']} {usage_unit}")
    print(f"Annual usage:  {baseline_text['annual_usage']} {usage_unit}")
    print("-" * 60)
    print(view.message)
    print("=" * 60)

    if args.table:
        print()
        print(records_to_dataframe(view.records, formatted=True).to_string(index=False))

    if args.csv:
        write_csv(view.records, args.csv)
        print(f"\nCSV saved to: {args.csv}")

    if args.excel:
        report = ProjectionReport(session.baseline, view.params, view.records)
        output_path = ExcelGenerator(args.excel).generate(report)
        print(f"\nReport saved to: {output_path}")

    return 0


def run_scenarios(args, config) -> int:
    """Project every scenario in an input file.

    Args:
        args: Command line arguments
        config: Application configuration

    Returns:
        Process exit code
    """
    logger = logging.getLogger(__name__)

    try:
        parser = ScenarioParser(args.input)
        scenarios = parser.parse()
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    summary = parser.get_summary()
    logger.info(f"Loaded {summary['total_scenarios']} scenarios, columns mapped: {summary['mapped_columns']}")

    results = run_batch(scenarios, defaults=get_projection_defaults(config))

    print("\n" + "=" * 60)
    print("SCENARIO SUMMARY")
    print("=" * 60)
    for result in results:
        row = result.to_dict()
        if result.ok:
            print(f"{result.name:<30} ${row['cumulative_savings']:>14,.2f} over {row['horizon_years']} years")
        else:
            print(f"{result.name:<30} {result.error}")
    print("=" * 60)

    if args.excel:
        output_path = ExcelGenerator(args.excel).generate_batch([r.to_dict() for r in results])
        print(f"\nReport saved to: {output_path}")

    return 0 if all(r.ok for r in results) else EXIT_INVALID_INPUT


def launch_dashboard():
    """Launch the Streamlit dashboard."""
    import subprocess
    dashboard_path = Path(__file__).parent / "dashboard" / "app.py"

    if not dashboard_path.exists():
        print(f"Dashboard not found: {dashboard_path}")
        sys.exit(1)

    subprocess.run(["streamlit", "run", str(dashboard_path)])


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        # Built-in defaults cover everything the config provides
        config = {}

    log_config = config.get("logging", {})
    setup_logging(
        "DEBUG" if args.verbose else log_config.get("level", "INFO"),
        log_format=log_config.get("format"),
        log_file=log_config.get("file"),
    )

    if args.dashboard:
        launch_dashboard()
        return 0
    if args.input:
        return run_scenarios(args, config)
    return run_projection(args, config)


if __name__ == "__main__":
    sys.exit(main())
