"""Tests for calculator session state and the derived savings view."""

import pytest

from rate_savings.core.errors import VALIDATION_MESSAGES, ValidationError
from rate_savings.core.normalizer import BillingInput
from rate_savings.session import (
    AWAITING_COMPARISON_MESSAGE,
    NO_BASELINE_MESSAGE,
    CalculatorSession,
    SavingsForm,
    derive_projection,
)


@pytest.fixture
def session():
    return CalculatorSession().calculate(BillingInput(monthly_dollars=120, monthly_usage=900))


class TestCalculatorSession:
    """Tests for CalculatorSession class."""

    def test_empty_session(self):
        session = CalculatorSession()

        assert session.has_baseline is False
        assert session.baseline is None

    def test_calculate_returns_new_session(self, session):
        assert session.has_baseline
        assert session.baseline.annual_usage == 10800

    def test_failed_calculation_keeps_previous_state(self, session):
        with pytest.raises(ValidationError):
            session.calculate(BillingInput(monthly_dollars=100))

        assert session.baseline.annual_usage == 10800

    def test_recalculate_replaces_baseline(self, session):
        updated = session.calculate(BillingInput(monthly_dollars=100, annual_usage=7200))

        assert updated.baseline.annual_usage == 7200
        assert session.baseline.annual_usage == 10800

    def test_reset(self, session):
        assert session.reset().has_baseline is False


class TestDeriveProjection:
    """Tests for derive_projection."""

    def test_no_baseline(self):
        view = derive_projection(CalculatorSession(), SavingsForm(comparison_rate="0.09"))

        assert view.is_cleared
        assert view.message == NO_BASELINE_MESSAGE
        assert view.csv_text().count("\r\n") == 0

    def test_full_view(self, session):
        view = derive_projection(session, SavingsForm(comparison_rate="0.09", baseline_growth_pct="3.5"))

        assert not view.is_cleared
        assert len(view.records) == 25
        assert len(view.table_rows) == 25
        assert view.records[0].annual_savings == pytest.approx(468.00)
        assert view.message.startswith("Cumulative savings over 25 years")
        assert view.summary.cumulative_savings == view.records[-1].cumulative_savings
        assert [a.year for a in view.chart.annotations] == [5, 10, 15, 20, 25]

    def test_live_update_without_comparison(self, session):
        view = derive_projection(session, SavingsForm())

        assert view.message == AWAITING_COMPARISON_MESSAGE
        assert len(view.records) == 25
        assert all(r.comparison_cost == 0 for r in view.records)

    def test_update_requires_comparison(self, session):
        view = derive_projection(session, SavingsForm(comparison_rate=""), require_comparison=True)

        assert view.is_cleared
        assert "positive fixed comparison rate" in view.message

    def test_invalid_horizon(self, session):
        view = derive_projection(session, SavingsForm(comparison_rate="0.09", horizon_years="abc"))

        assert view.is_cleared
        assert "whole number of years" in view.message

    def test_horizon_above_limit(self, session):
        view = derive_projection(session, SavingsForm(comparison_rate="0.09", horizon_years="1e9"))

        assert view.is_cleared
        assert view.message == VALIDATION_MESSAGES["invalid_horizon"]

    def test_growth_too_large_for_horizon(self, session):
        """Test that an overflowing escalation clears the view instead of raising."""
        form = SavingsForm(comparison_rate="0.09", baseline_growth_pct="1000", horizon_years="300")

        view = derive_projection(session, form)

        assert view.is_cleared
        assert view.message == VALIDATION_MESSAGES["growth_out_of_range"]

    def test_large_growth_short_horizon(self, session):
        form = SavingsForm(comparison_rate="0.09", baseline_growth_pct="1000", horizon_years="3")

        view = derive_projection(session, form)

        assert len(view.records) == 3
        assert view.records[2].baseline_cost == pytest.approx(1440.00 * 121)

    def test_negative_baseline_growth_clamped(self, session):
        view = derive_projection(session, SavingsForm(comparison_rate="0.09", baseline_growth_pct="-5"))

        assert view.params.baseline_growth_rate == 0.0
        assert view.records[1].baseline_cost == view.records[0].baseline_cost

    def test_chart_toggles(self, session):
        form = SavingsForm(comparison_rate="0.09", show_savings=False, show_baseline=False)

        view = derive_projection(session, form)

        assert [d.key for d in view.chart.datasets] == ["comparison_cost"]

    def test_config_defaults(self, session):
        defaults = {"horizon_years": 10, "baseline_growth_pct": 2.0, "milestone_interval": 4}

        view = derive_projection(session, SavingsForm(comparison_rate="0.09"), defaults=defaults)

        assert len(view.records) == 10
        assert view.params.baseline_growth_rate == pytest.approx(0.02)
        assert [a.year for a in view.chart.annotations] == [4, 8, 10]

    def test_csv_text(self, session):
        view = derive_projection(session, SavingsForm(comparison_rate="0.09"))

        assert view.csv_text().count("\r\n") == 25
