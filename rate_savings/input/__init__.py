"""Input handling: form sanitization and batch scenario files."""

from .form_parser import (
    parse_billing_form,
    parse_horizon,
    parse_number,
    parse_projection_form,
)
from .scenario_parser import Scenario, ScenarioParser

__all__ = [
    "Scenario",
    "ScenarioParser",
    "parse_billing_form",
    "parse_horizon",
    "parse_number",
    "parse_projection_form",
]
