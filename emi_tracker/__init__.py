"""EMI tracker: personal loan amortization and payment tracking."""

from emi_tracker.amortization import (
    elapsed_months,
    installment_amount,
    parse_date,
    remaining_principal,
)
from emi_tracker.data_structures import Loan, LoanDraft, LoanField, LoanStatus, ValidatedFields
from emi_tracker.exceptions import (
    EmiTrackerError,
    LoanNotFoundError,
    PaymentRejectedError,
    ValidationError,
)
from emi_tracker.result import ErrorType, Result
from emi_tracker.services.loan_ledger import LoanLedger

__all__ = [
    "EmiTrackerError",
    "ErrorType",
    "Loan",
    "LoanDraft",
    "LoanField",
    "LoanLedger",
    "LoanNotFoundError",
    "LoanStatus",
    "PaymentRejectedError",
    "Result",
    "ValidatedFields",
    "ValidationError",
    "elapsed_months",
    "installment_amount",
    "parse_date",
    "remaining_principal",
]
