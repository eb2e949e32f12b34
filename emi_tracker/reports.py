"""
Report module for the EMI tracker.
Builds display-ready loan summaries from ledger values. Nothing here derives
tenure or installments: every figure comes from the loan record or the
amortization helpers it exposes.
"""
from datetime import date
from typing import Any, Dict, Iterable

import pandas as pd

from emi_tracker.config import CURRENCY_DECIMALS, CURRENCY_SYMBOL, DATE_FORMAT_DISPLAY
from emi_tracker.data_structures import Loan

SUMMARY_COLUMNS = [
    "id", "name", "amount", "interest_rate", "start_date", "end_date",
    "your_emi", "calculated_emi", "due_day", "months_paid", "total_tenure_months",
    "total_paid", "remaining_principal", "remaining_months", "status",
]


def format_currency(value: float) -> str:
    """Format an amount for display, e.g. ``₹22613.65``."""
    return f"{CURRENCY_SYMBOL}{value:.{CURRENCY_DECIMALS}f}"


def format_date(value: date) -> str:
    """Format a date for display, e.g. ``January 01, 2024``."""
    return value.strftime(DATE_FORMAT_DISPLAY)


def loan_summary(loan: Loan) -> Dict[str, Any]:
    """Collect the figures shown on a loan card.

    Amounts are left unrounded; dates are formatted for display.
    """
    return {
        "id": loan.id,
        "name": loan.name,
        "amount": loan.principal,
        "interest_rate": loan.annual_rate,
        "start_date": format_date(loan.start_date),
        "end_date": format_date(loan.end_date),
        "your_emi": loan.declared_installment,
        "calculated_emi": loan.derived_installment,
        "due_day": loan.due_day,
        "months_paid": loan.paid_months,
        "total_tenure_months": loan.total_tenure_months,
        "total_paid": loan.total_paid,
        "remaining_principal": loan.remaining_principal,
        "remaining_months": loan.remaining_months,
        "status": loan.status.value,
    }


def loans_to_dataframe(loans: Iterable[Loan]) -> pd.DataFrame:
    """Build a summary DataFrame, one row per loan in display order.

    Accepts a LoanLedger or any iterable of loans.
    """
    rows = [loan_summary(loan) for loan in loans]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def portfolio_totals(loans: Iterable[Loan]) -> Dict[str, float]:
    """Totals across loans: borrowed, paid so far and still outstanding."""
    df = loans_to_dataframe(loans)
    if df.empty:
        return {"amount": 0.0, "total_paid": 0.0, "remaining_principal": 0.0, "active_loans": 0}
    return {
        "amount": float(df["amount"].sum()),
        "total_paid": float(df["total_paid"].sum()),
        "remaining_principal": float(df["remaining_principal"].sum()),
        "active_loans": int((df["status"] == "ACTIVE").sum()),
    }
