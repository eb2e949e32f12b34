"""Services package for the EMI tracker business logic."""

from .loan_ledger import LoanLedger

__all__ = ['LoanLedger']
