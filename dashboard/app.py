"""Streamlit dashboard main application."""

import sys
import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from components.charts import create_cumulative_chart, create_savings_chart
from rate_savings.core.errors import ValidationError
from rate_savings.input.form_parser import parse_billing_form
from rate_savings.output.csv_export import csv_filename
from rate_savings.output.excel_generator import ExcelGenerator
from rate_savings.output.report_data import ProjectionReport, describe_baseline
from rate_savings.output.table import PROJECTION_COLUMNS
from rate_savings.session import CalculatorSession, SavingsForm, derive_projection
from rate_savings.utils.helpers import get_projection_defaults, load_config

st.set_page_config(
    page_title="Electricity Rate Savings",
    page_icon="⚡",
    layout="wide",
)

st.markdown("""
    <style>
    .main-header {
        font-size: 2.2rem;
        font-weight: 700;
        color: #1F4E79;
        margin-bottom: 0.5rem;
    }

    .sub-header {
        color: #666;
        font-size: 1rem;
        margin-bottom: 1.5rem;
    }

    .result-box {
        background: linear-gradient(135deg, #f8f9fa 0%, #e9ecef 100%);
        padding: 1.2rem;
        border-radius: 12px;
        border-left: 4px solid #27ae60;
        font-size: 1.2rem;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    </style>
""", unsafe_allow_html=True)

CALCULATOR_FIELDS = ["monthly_kwh", "annual_kwh", "monthly_dollars"]


@st.cache_data
def get_defaults():
    """Projection defaults from config/config.yaml (built-ins if absent)."""
    try:
        config = load_config()
    except FileNotFoundError:
        config = {}
    return get_projection_defaults(config)


def init_session_state():
    """Initialize session state variables."""
    if "calculator" not in st.session_state:
        st.session_state["calculator"] = CalculatorSession()
    if "calculator_message" not in st.session_state:
        st.session_state["calculator_message"] = ""


def on_calculate():
    """Normalize the calculator form into a new session."""
    billing = parse_billing_form(
        st.session_state.get("monthly_dollars"),
        st.session_state.get("monthly_kwh"),
        st.session_state.get("annual_kwh"),
    )
    try:
        session = st.session_state["calculator"].calculate(billing)
    except ValidationError as e:
        st.session_state["calculator_message"] = e.message
        return

    st.session_state["calculator"] = session
    st.session_state["calculator_message"] = describe_baseline(session.baseline)["rate"]


def on_reset():
    """Clear the calculator form and result."""
    for key in CALCULATOR_FIELDS:
        st.session_state[key] = ""
    st.session_state["calculator_message"] = ""


def on_calculator_edit():
    """Editing any calculator field clears the displayed result."""
    st.session_state["calculator_message"] = ""


def excel_bytes(report: ProjectionReport) -> bytes:
    """Render the Excel report to bytes for download."""
    with tempfile.TemporaryDirectory() as tmp:
        path = ExcelGenerator(Path(tmp) / "report.xlsx").generate(report)
        return path.read_bytes()


def render_calculator():
    """Render the Calculator tab."""
    st.markdown("### What do you pay now?")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.text_input("Monthly Utility Bill ($)", key="monthly_dollars", on_change=on_calculator_edit)
    with col2:
        st.text_input("Monthly kWh", key="monthly_kwh", on_change=on_calculator_edit)
    with col3:
        st.text_input("Annual kWh (optional, overrides monthly)", key="annual_kwh", on_change=on_calculator_edit)

    btn1, btn2, _ = st.columns([1, 1, 4])
    with btn1:
        st.button("Calculate", type="primary", on_click=on_calculate)
    with btn2:
        st.button("Reset", on_click=on_reset)

    message = st.session_state["calculator_message"]
    if message:
        st.markdown(f'<div class="result-box">{message}</div>', unsafe_allow_html=True)


def render_savings(defaults):
    """Render the Savings Over Time tab."""
    session = st.session_state["calculator"]

    if not session.has_baseline:
        st.info("Please calculate your inputs on the Calculator tab first.")
        return

    baseline_text = describe_baseline(session.baseline)
    m1, m2, m3 = st.columns(3)
    m1.metric("Amount you pay now", baseline_text["rate_precise"])
    m2.metric("Monthly Usage (kWh)", baseline_text["monthly_usage"])
    m3.metric("Annual Usage (kWh)", baseline_text["annual_usage"])

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        fixed_rate = st.text_input("Fixed comparison rate ($/kWh)", key="fixed_rate")
    with col2:
        growth = st.text_input(
            "Amount you pay now growth (%/yr)",
            value=str(defaults["baseline_growth_pct"]),
            key="growth_rate",
        )
    with col3:
        fixed_growth = st.text_input(
            "Fixed growth (%/yr, may be negative)",
            value=str(defaults["comparison_growth_pct"]),
            key="fixed_growth_rate",
        )
    with col4:
        years = st.text_input("Years", value=str(defaults["horizon_years"]), key="horizon_years")

    t1, t2, t3, t4 = st.columns(4)
    show_savings = t1.checkbox("Annual Savings", value=True)
    show_baseline = t2.checkbox("Amount you pay now", value=True)
    show_fixed = t3.checkbox("Fixed Cost", value=True)
    update_clicked = t4.button("Update Graph", type="primary")

    form = SavingsForm(
        comparison_rate=fixed_rate,
        baseline_growth_pct=growth,
        comparison_growth_pct=fixed_growth,
        horizon_years=years,
        show_savings=show_savings,
        show_baseline=show_baseline,
        show_comparison=show_fixed,
    )
    view = derive_projection(session, form, require_comparison=update_clicked, defaults=defaults)

    if view.summary is not None and view.params.has_comparison:
        st.success(view.message)
    else:
        st.info(view.message)

    if view.is_cleared:
        return

    st.plotly_chart(create_savings_chart(view.chart), use_container_width=True)

    with st.expander("Cumulative savings"):
        st.plotly_chart(
            create_cumulative_chart(view.chart.labels, [r.cumulative_savings for r in view.records]),
            use_container_width=True,
        )

    st.markdown("### Year-by-Year")
    st.dataframe(
        pd.DataFrame(view.table_rows, columns=PROJECTION_COLUMNS),
        use_container_width=True,
        hide_index=True,
    )

    d1, d2, _ = st.columns([1, 1, 4])
    with d1:
        st.download_button(
            "Export CSV",
            data=view.csv_text(),
            file_name=csv_filename(view.params.horizon_years),
            mime="text/csv",
        )
    with d2:
        st.download_button(
            "Export Excel",
            data=excel_bytes(ProjectionReport(session.baseline, view.params, view.records)),
            file_name=f"savings_{view.params.horizon_years}yrs.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )


def main():
    """Main dashboard entry point."""
    init_session_state()
    defaults = get_defaults()

    st.markdown('<div class="main-header">Electricity Rate Savings</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="sub-header">Compare what you pay now against a fixed rate offer</div>',
        unsafe_allow_html=True,
    )

    calc_tab, savings_tab = st.tabs(["Calculator", "Savings Over Time"])
    with calc_tab:
        render_calculator()
    with savings_tab:
        render_savings(defaults)


main()
