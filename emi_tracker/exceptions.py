"""Custom exceptions for the EMI tracker."""
from emi_tracker.config import ALREADY_PAID_MESSAGE, VALIDATION_ERROR_MESSAGE


class EmiTrackerError(Exception):
    """Base exception for all EMI tracker errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(EmiTrackerError):
    """Raised when user-entered loan fields fail validation.

    The failing fields are deliberately not reported individually; the
    message is always the single generic validation message.
    """

    def __init__(self, message: str = VALIDATION_ERROR_MESSAGE):
        super().__init__(message)


class LoanNotFoundError(EmiTrackerError):
    """Raised when a loan cannot be found."""

    def __init__(self, loan_id: str = None):
        details = {}
        if loan_id:
            details['loan_id'] = loan_id

        message = "Loan not found"
        if loan_id:
            message = f"Loan '{loan_id}' not found"

        super().__init__(message, details)
        self.loan_id = loan_id


class PaymentRejectedError(EmiTrackerError):
    """Raised when a payment is recorded on a loan that is already retired."""

    def __init__(self, loan_id: str, paid_months: int, total_tenure_months: int):
        details = {
            'loan_id': loan_id,
            'paid_months': paid_months,
            'total_tenure_months': total_tenure_months,
        }
        super().__init__(ALREADY_PAID_MESSAGE, details)
        self.loan_id = loan_id
