"""Amortization math for the EMI tracker.

Pure functions computing the installment amount, the outstanding principal
after a number of paid installments, and the whole months between two dates.
None of them round: rounding for display belongs to ``reports``.
"""
from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse

from emi_tracker.config import MONTHS_PER_YEAR

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Parse a date from a date, datetime or ISO-8601 string.

    Args:
        value: The value to parse.

    Returns:
        The calendar date, or None if the value is empty or unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def elapsed_months(start: DateLike, end: DateLike) -> int:
    """Whole calendar months between two dates.

    Only the year and month take part: 2024-01-31 to 2024-02-01 counts as one
    month, 2024-01-01 to 2024-01-31 as zero.

    Args:
        start: Start date.
        end: End date.

    Returns:
        The month difference, or 0 if either date fails to parse.
    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return 0

    diff_years = end_date.year - start_date.year
    diff_months = end_date.month - start_date.month
    return diff_years * MONTHS_PER_YEAR + diff_months


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual percentage rate to a monthly fraction."""
    return annual_rate_percent / MONTHS_PER_YEAR / 100


def installment_amount(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Fixed monthly installment (EMI) amortizing a loan over its term.

    Args:
        principal: Amount borrowed.
        annual_rate_percent: Nominal annual interest rate in percent.
        term_months: Number of monthly installments.

    Returns:
        The installment amount; 0 for a non-positive term and the straight-line
        share ``principal / term_months`` for a zero rate or one too small to
        register in floating point.
    """
    if term_months <= 0:
        return 0.0
    if annual_rate_percent == 0:
        return principal / term_months

    r = monthly_rate(annual_rate_percent)
    # P*r*(1+r)^n / ((1+r)^n - 1), divided through by (1+r)^n so large rates
    # underflow towards P*r instead of overflowing.
    discount = (1 + r) ** -term_months
    if discount == 1:
        return principal / term_months
    return principal * r / (1 - discount)


def remaining_principal(principal: float, annual_rate_percent: float,
                        total_term_months: int, paid_months: int) -> float:
    """Outstanding principal after ``paid_months`` installments.

    Assumes every installment was paid on the original schedule, so the value
    is recomputed from the loan terms on every call.

    Args:
        principal: Original amount borrowed.
        annual_rate_percent: Nominal annual interest rate in percent.
        total_term_months: Total number of installments.
        paid_months: Installments paid so far.

    Returns:
        The outstanding principal, never negative; 0 once the term is paid.

    Raises:
        ValueError: If paid_months is negative.
    """
    if paid_months < 0:
        raise ValueError(f"paid_months must not be negative, got {paid_months}")
    if paid_months >= total_term_months:
        return 0.0
    if annual_rate_percent == 0:
        return principal - (principal / total_term_months) * paid_months

    r = monthly_rate(annual_rate_percent)
    # P*((1+r)^n - (1+r)^m) / ((1+r)^n - 1), scaled by (1+r)^-n.
    discount = (1 + r) ** -total_term_months
    if discount == 1:
        return principal - (principal / total_term_months) * paid_months
    paid_discount = (1 + r) ** (paid_months - total_term_months)
    remaining = principal * (1 - paid_discount) / (1 - discount)
    return remaining if remaining > 0 else 0.0
