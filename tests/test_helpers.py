"""Tests for utility helpers."""

import logging

import pytest

from rate_savings.utils.helpers import (
    format_currency,
    format_percentage,
    format_rate,
    get_projection_defaults,
    load_config,
    setup_logging,
)


class TestConfig:
    """Tests for configuration loading."""

    def test_load_default_config(self):
        config = load_config()

        assert config["projection"]["horizon_years"] == 25
        assert config["projection"]["baseline_growth_pct"] == 3.5

    def test_load_custom_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("projection:\n  horizon_years: 30\n", encoding="utf-8")

        assert load_config(str(path)) == {"projection": {"horizon_years": 30}}

    def test_empty_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == {}

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_projection_defaults(self):
        settings = get_projection_defaults({"projection": {"horizon_years": 30}})

        assert settings["horizon_years"] == 30
        assert settings["baseline_growth_pct"] == 3.5
        assert settings["comparison_growth_pct"] == 0.0
        assert settings["milestone_interval"] == 5

    def test_projection_defaults_without_config(self):
        assert get_projection_defaults(None)["horizon_years"] == 25
        assert get_projection_defaults({"projection": None})["horizon_years"] == 25


class TestFormatting:
    """Tests for display formatting."""

    @pytest.mark.parametrize("amount,expected", [
        (1440, "$1,440.00"),
        (0.1333333, "$0.13"),
        (-720, "-$720.00"),
        (0, "$0.00"),
        (-1e-12, "$0.00"),
        (-0.1 - 0.2 + 0.3, "$0.00"),
        (-0.0, "$0.00"),
        (-0.006, "-$0.01"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_currency_other(self):
        assert format_currency(12.5, "EUR") == "12.50 EUR"
        assert format_currency(-1e-12, "EUR") == "0.00 EUR"

    def test_format_rate(self):
        assert format_rate(0.1333333) == "$0.1333"
        assert format_rate(0.1333333, decimals=6) == "$0.133333"

    def test_format_percentage(self):
        assert format_percentage(0.035) == "3.5%"
        assert format_percentage(-0.02, decimals=2) == "-2.00%"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_package_logger(self):
        logger = setup_logging("DEBUG")

        assert logger.name == "rate_savings"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_calls_do_not_stack_handlers(self, tmp_path):
        setup_logging("INFO")
        logger = setup_logging("INFO", log_file=str(tmp_path / "app.log"))

        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
