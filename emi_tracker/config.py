"""Centralized configuration for the EMI tracker.

This module contains the business rule constants, display formats and
user-facing messages shared by the ledger and its presentation helpers.
"""
import os

# =============================================================================
# BUSINESS RULES
# =============================================================================

# Months in a year, used to derive the monthly rate from the annual one
MONTHS_PER_YEAR = 12

# Valid range for the installment due day (day of month)
MIN_DUE_DAY = 1
MAX_DUE_DAY = 31

# Due day pre-filled in a fresh draft
DEFAULT_DUE_DAY = 1

# =============================================================================
# DISPLAY FORMATS
# =============================================================================

# Date format for storage (ISO 8601)
DATE_FORMAT_STORAGE = "%Y-%m-%d"

# Date format for display
DATE_FORMAT_DISPLAY = "%B %d, %Y"

# Currency shown next to amounts
CURRENCY_SYMBOL = "₹"

# Decimal places used when displaying amounts
CURRENCY_DECIMALS = 2

# =============================================================================
# NOTIFICATIONS
# =============================================================================

# Seconds a status message stays visible before it is cleared
NOTIFICATION_DURATION_SECONDS = 3.0

VALIDATION_ERROR_MESSAGE = (
    "Please fill in all fields with valid values "
    "(dates must be valid and end date after start date)."
)
LOAN_ADDED_MESSAGE = "Loan added successfully!"
LOAN_UPDATED_MESSAGE = "Loan updated successfully!"
LOAN_DELETED_MESSAGE = "Loan deleted successfully!"
LOAN_NOT_FOUND_MESSAGE = "Loan not found."
ALREADY_PAID_MESSAGE = "All months already paid for this loan!"

# Formatted with the new paid month count and the loan name
PAID_MONTH_MESSAGE = "Paid month {paid_months} for {name}!"

# =============================================================================
# LOGGING
# =============================================================================

DEFAULT_LOG_LEVEL = "INFO"

# Environment variable overriding DEFAULT_LOG_LEVEL
LOG_LEVEL_ENV_VAR = "EMI_TRACKER_LOG_LEVEL"


def get_log_level() -> str:
    """Return the configured log level, honouring the environment override."""
    return os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
