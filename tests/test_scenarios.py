"""Tests for scenario files and batch projection."""

import pytest

from rate_savings.batch import run_batch
from rate_savings.input.form_parser import parse_billing_form
from rate_savings.input.scenario_parser import Scenario, ScenarioParser


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "scenarios.csv"
    path.write_text(
        "Name,Monthly Bill,Monthly kWh,Annual kWh,Fixed Rate,Fixed Growth,Years\n"
        "Home,120,900,,0.09,,\n"
        "Cabin,100,500,7200,0.11,-1,10\n"
        "Broken,,900,,0.09,,\n",
        encoding="utf-8",
    )
    return path


class TestScenarioParser:
    """Tests for ScenarioParser class."""

    def test_parse(self, scenario_file):
        scenarios = ScenarioParser(scenario_file).parse()

        assert [s.name for s in scenarios] == ["Home", "Cabin", "Broken"]
        assert scenarios[0].billing.monthly_dollars == 120
        assert scenarios[0].billing.monthly_usage == 900
        assert scenarios[0].billing.annual_usage is None
        assert scenarios[1].billing.annual_usage == 7200
        assert scenarios[2].billing.monthly_dollars is None

    def test_to_params(self, scenario_file):
        scenarios = ScenarioParser(scenario_file).parse()

        params = scenarios[1].to_params()
        assert params.horizon_years == 10
        assert params.comparison_rate0 == pytest.approx(0.11)
        assert params.comparison_growth_rate == pytest.approx(-0.01)

        params = scenarios[0].to_params({"horizon_years": 25})
        assert params.horizon_years == 25

    def test_default_names(self, tmp_path):
        path = tmp_path / "bills.csv"
        path.write_text("bill,kwh\n80,600\n", encoding="utf-8")

        scenarios = ScenarioParser(path).parse()

        assert scenarios[0].name == "Scenario 1"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScenarioParser(tmp_path / "nope.csv")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "bills.txt"
        path.write_text("bill\n80\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported"):
            ScenarioParser(path).parse()

    def test_missing_bill_column(self, tmp_path):
        path = tmp_path / "bills.csv"
        path.write_text("kwh\n600\n", encoding="utf-8")

        with pytest.raises(ValueError, match="monthly_dollars"):
            ScenarioParser(path).parse()

    def test_summary_requires_parse(self, scenario_file):
        parser = ScenarioParser(scenario_file)

        with pytest.raises(RuntimeError):
            parser.get_summary()

        parser.parse()
        assert parser.get_summary()["total_scenarios"] == 3


class TestRunBatch:
    """Tests for run_batch."""

    def test_results(self, scenario_file):
        results = run_batch(ScenarioParser(scenario_file).parse())

        assert len(results) == 3
        home, cabin, broken = results

        assert home.ok
        assert len(home.records) == 25
        assert home.records[0].annual_savings == pytest.approx(468.00)

        assert cabin.ok
        assert cabin.baseline.annual_usage == 7200
        assert len(cabin.records) == 10

        assert not broken.ok
        assert "Monthly Utility Bill" in broken.error
        assert broken.records == []

    def test_to_dict(self, scenario_file):
        results = run_batch(ScenarioParser(scenario_file).parse())

        row = results[0].to_dict()
        assert row["name"] == "Home"
        assert row["rate_per_unit"] == pytest.approx(0.133333)
        assert row["first_year_savings"] == pytest.approx(468.00)
        assert row["horizon_years"] == 25
        assert row["error"] is None

        failed = results[2].to_dict()
        assert failed["error"] is not None
        assert "cumulative_savings" not in failed

    def test_overflowing_growth_reported_per_row(self):
        """Test that a scenario whose costs overflow is reported, not raised."""
        scenarios = [
            Scenario(name="Runaway", billing=parse_billing_form("120", "900"),
                     comparison_rate="0.09", baseline_growth_pct="1000", horizon_years="300"),
            Scenario(name="Normal", billing=parse_billing_form("120", "900"), comparison_rate="0.09"),
        ]

        runaway, normal = run_batch(scenarios)

        assert not runaway.ok
        assert "too large to project" in runaway.error
        assert normal.ok
        assert len(normal.records) == 25
