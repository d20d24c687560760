"""Tests for the command line entry point."""

import pytest

import run


class TestCli:
    """Tests for run.main."""

    def test_single_projection(self, capsys, tmp_path):
        csv_path = tmp_path / "savings.csv"

        code = run.main([
            "--bill", "120", "--monthly-kwh", "900", "--fixed-rate", "0.09",
            "--table", "--csv", str(csv_path),
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "$0.13 per kWh" in out
        assert "Cumulative savings over 25 years" in out
        assert csv_path.exists()
        assert "Cumulative Savings ($)" in out
        assert "$1,440.00" in out

    def test_excel_output(self, tmp_path):
        excel_path = tmp_path / "savings.xlsx"

        code = run.main(["--bill", "120", "--annual-kwh", "10800", "--fixed-rate", "0.09",
                         "--years", "10", "--excel", str(excel_path)])

        assert code == 0
        assert excel_path.exists()

    def test_missing_bill(self, capsys):
        code = run.main(["--monthly-kwh", "900"])

        assert code == run.EXIT_INVALID_INPUT
        assert "Monthly Utility Bill" in capsys.readouterr().out

    def test_missing_usage(self, capsys):
        code = run.main(["--bill", "120"])

        assert code == run.EXIT_INVALID_INPUT
        assert "Monthly kWh OR Annual kWh" in capsys.readouterr().out

    def test_invalid_years(self, capsys):
        code = run.main(["--bill", "120", "--monthly-kwh", "900", "--years", "0"])

        assert code == run.EXIT_INVALID_INPUT
        assert "whole number of years" in capsys.readouterr().out

    def test_growth_too_large(self, capsys):
        code = run.main(["--bill", "120", "--monthly-kwh", "900", "--fixed-rate", "0.09",
                         "--growth", "1000", "--years", "300"])

        assert code == run.EXIT_INVALID_INPUT
        assert "too large to project" in capsys.readouterr().out

    def test_missing_scenario_file(self, tmp_path):
        assert run.main(["--input", str(tmp_path / "missing.csv")]) == 1

    def test_scenario_file(self, capsys, tmp_path):
        path = tmp_path / "scenarios.csv"
        path.write_text("name,bill,kwh,fixed_rate\nHome,120,900,0.09\n", encoding="utf-8")
        excel_path = tmp_path / "scenarios.xlsx"

        code = run.main(["--input", str(path), "--excel", str(excel_path)])

        assert code == 0
        assert "Home" in capsys.readouterr().out
        assert excel_path.exists()

    def test_bill_and_input_are_exclusive(self):
        with pytest.raises(SystemExit):
            run.main(["--bill", "120", "--input", "x.csv"])
