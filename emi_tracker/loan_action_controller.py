"""Loan Action Controller for the EMI tracker.

This module connects user actions to the ledger, keeping the form state and
status messages in step with each outcome.
"""
from typing import Any, Optional

from emi_tracker.config import (
    LOAN_ADDED_MESSAGE,
    LOAN_DELETED_MESSAGE,
    LOAN_NOT_FOUND_MESSAGE,
    LOAN_UPDATED_MESSAGE,
    PAID_MONTH_MESSAGE,
)
from emi_tracker.data_structures import Loan, LoanField
from emi_tracker.exceptions import LoanNotFoundError, PaymentRejectedError, ValidationError
from emi_tracker.logging import get_logger
from emi_tracker.result import ErrorType, Result
from emi_tracker.services.loan_ledger import LoanLedger
from emi_tracker.ui_state_manager import StatusNotifier, UIStateManager

logger = get_logger(__name__)


class LoanActionController:
    """Controller for loan actions coming from the presentation layer.

    Each action calls the ledger, updates the form state on success and
    posts a status message. Failures never propagate: they are reported
    through the notifier and returned as a failed Result.

    Attributes:
        ledger: LoanLedger holding the loans.
        ui_state: UIStateManager with the add/edit draft.
        notifier: StatusNotifier receiving success and error messages.
    """

    def __init__(self, ledger: LoanLedger = None, ui_state: UIStateManager = None,
                 notifier: StatusNotifier = None):
        self.ledger = ledger if ledger is not None else LoanLedger()
        self.ui_state = ui_state if ui_state is not None else UIStateManager()
        self.notifier = notifier if notifier is not None else StatusNotifier()

    def _fail(self, message: str, error_type: str) -> Result[Loan]:
        logger.debug("Loan action failed (%s): %s", error_type, message)
        self.notifier.error(message)
        return Result.fail(message, error_type)

    def start_adding_loan(self) -> None:
        self.ui_state.start_adding()

    def update_field(self, loan_field: LoanField, value: Any) -> None:
        """Apply a single form input to the current draft."""
        self.ui_state.set_field(loan_field, value)

    def add_loan(self) -> Result[Loan]:
        """Add a loan from the current draft.

        Returns:
            Result holding the new loan. On failure the draft is kept so the
            user can correct it.
        """
        try:
            loan = self.ledger.add_loan(self.ui_state.draft)
        except ValidationError as e:
            return self._fail(e.message, ErrorType.VALIDATION)

        self.ui_state.cancel()
        self.notifier.success(LOAN_ADDED_MESSAGE)
        return Result.ok(loan)

    def start_editing_loan(self, loan_id: str) -> Optional[Loan]:
        """Open the edit form for a loan.

        Returns:
            The loan being edited, or None if it doesn't exist.
        """
        loan = self.ledger.find_loan(loan_id)
        if loan is None:
            self.notifier.error(LOAN_NOT_FOUND_MESSAGE)
            return None
        self.ui_state.start_editing(loan)
        return loan

    def cancel_editing(self) -> None:
        self.ui_state.cancel()

    def save_edited_loan(self, loan_id: str = None) -> Result[Loan]:
        """Commit the draft to the loan being edited.

        Args:
            loan_id: Loan to update; defaults to the loan the form was opened for.

        Returns:
            Result holding the updated loan.
        """
        loan_id = loan_id or self.ui_state.editing_loan_id
        try:
            loan = self.ledger.edit_loan(loan_id, self.ui_state.draft)
        except ValidationError as e:
            return self._fail(e.message, ErrorType.VALIDATION)
        except LoanNotFoundError:
            self.ui_state.cancel()
            return self._fail(LOAN_NOT_FOUND_MESSAGE, ErrorType.NOT_FOUND)

        self.ui_state.cancel()
        self.notifier.success(LOAN_UPDATED_MESSAGE)
        return Result.ok(loan)

    def delete_loan(self, loan_id: str) -> Result[Loan]:
        """Delete a loan, closing its edit form if it was open."""
        loan = self.ledger.find_loan(loan_id)
        if not self.ledger.delete_loan(loan_id):
            return self._fail(LOAN_NOT_FOUND_MESSAGE, ErrorType.NOT_FOUND)

        if self.ui_state.editing_loan_id == loan_id:
            self.ui_state.cancel()
        self.notifier.success(LOAN_DELETED_MESSAGE)
        return Result.ok(loan)

    def pay_month(self, loan_id: str) -> Result[Loan]:
        """Record the next installment of a loan as paid."""
        try:
            loan = self.ledger.record_payment(loan_id)
        except LoanNotFoundError:
            return self._fail(LOAN_NOT_FOUND_MESSAGE, ErrorType.NOT_FOUND)
        except PaymentRejectedError as e:
            return self._fail(e.message, ErrorType.PAYMENT_REJECTED)

        self.notifier.success(PAID_MONTH_MESSAGE.format(paid_months=loan.paid_months, name=loan.name))
        return Result.ok(loan)
