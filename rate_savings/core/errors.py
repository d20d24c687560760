"""Exceptions raised by the projection engine."""

from typing import Dict, Optional

# User-facing text for each validation code
VALIDATION_MESSAGES: Dict[str, str] = {
    "missing_or_invalid_bill_amount": "Please enter the Dollar amount of your Monthly Utility Bill.",
    "missing_usage": "Please enter either Monthly kWh OR Annual kWh.",
    "invalid_horizon": "Please enter a whole number of years from 1 to 500.",
    "growth_out_of_range": "The growth rates are too large to project over this many years.",
    "missing_comparison_rate": "Enter a positive fixed comparison rate ($/kWh) to draw the graph.",
}


class RateSavingsError(Exception):
    """Base class for all rate savings errors."""


class ValidationError(RateSavingsError, ValueError):
    """Raised when user-supplied input is missing or invalid.

    Always recoverable by re-entering the offending value. ``str(error)``
    is the machine-readable code; ``error.message`` is the text to show
    the user.
    """

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(code)
        self.code = code
        self.message = message or VALIDATION_MESSAGES.get(code, code)


class PreconditionViolation(RateSavingsError, RuntimeError):
    """Raised when the projector is invoked without a valid baseline.

    This is an integration bug, not a user-facing condition.
    """
