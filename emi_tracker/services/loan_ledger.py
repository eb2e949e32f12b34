"""Loan ledger service for the EMI tracker.

This service owns the session's loan collection and handles:
- Field validation and normalization
- Loan creation and editing (tenure and installment derivation)
- Loan deletion
- Payment recording against the loan term
"""
import math
import uuid
from dataclasses import replace
from typing import Dict, Iterator, List, Mapping, Optional, Union

from emi_tracker.amortization import elapsed_months, installment_amount, parse_date
from emi_tracker.config import MAX_DUE_DAY, MIN_DUE_DAY, VALIDATION_ERROR_MESSAGE
from emi_tracker.data_structures import Loan, LoanDraft, LoanField, ValidatedFields, to_number
from emi_tracker.exceptions import LoanNotFoundError, PaymentRejectedError, ValidationError
from emi_tracker.logging import get_logger
from emi_tracker.result import ErrorType, Result

logger = get_logger(__name__)

LoanFields = Union[LoanDraft, Mapping[Union[LoanField, str], object]]


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


class LoanLedger:
    """Handles loan lifecycle operations.

    Loans are kept in insertion order, which is also their display order.
    Stored loans are immutable; edits and payments build a replacement and
    swap it in as the last step, so a method that raises leaves the
    collection untouched and loans handed out earlier keep their values.
    """

    def __init__(self):
        self._loans: Dict[str, Loan] = {}

    def __len__(self) -> int:
        return len(self._loans)

    def __contains__(self, loan_id) -> bool:
        return loan_id in self._loans

    def __iter__(self) -> Iterator[Loan]:
        return iter(list(self._loans.values()))

    @property
    def loans(self) -> List[Loan]:
        """Snapshot of all loans in display order."""
        return list(self._loans.values())

    def find_loan(self, loan_id: str) -> Optional[Loan]:
        return self._loans.get(loan_id)

    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by id.

        Raises:
            LoanNotFoundError: If the loan doesn't exist.
        """
        loan = self._loans.get(loan_id)
        if loan is None:
            raise LoanNotFoundError(loan_id)
        return loan

    def validate(self, fields: LoanFields) -> Result[ValidatedFields]:
        """Validate and normalize user-entered loan fields.

        Checks run in order: name, principal, rate, dates, declared
        installment, due day and finally the tenure derived from the dates.
        Any failure produces the same generic validation message.

        Args:
            fields: A LoanDraft or a mapping keyed by LoanField.

        Returns:
            Result holding ValidatedFields on success.
        """
        draft = fields if isinstance(fields, LoanDraft) else LoanDraft.from_mapping(fields)

        name = str(draft.name).strip()
        principal = to_number(draft.principal)
        annual_rate = to_number(draft.annual_rate)
        start_date = parse_date(draft.start_date)
        end_date = parse_date(draft.end_date)
        declared_installment = to_number(draft.declared_installment)
        due_day = to_number(draft.due_day)

        valid = (
            bool(name)
            and _is_positive(principal)
            and math.isfinite(annual_rate) and annual_rate >= 0
            and start_date is not None and end_date is not None
            and _is_positive(declared_installment)
            and math.isfinite(due_day) and due_day.is_integer()
            and MIN_DUE_DAY <= due_day <= MAX_DUE_DAY
        )
        tenure_months = elapsed_months(start_date, end_date) if valid else 0
        # A rate large enough to push the installment past float range is
        # rejected like any other bad input.
        valid = (
            valid and tenure_months > 0
            and math.isfinite(installment_amount(principal, annual_rate, tenure_months))
        )

        if not valid:
            logger.debug("Rejected loan fields: %s", draft)
            return Result.fail(VALIDATION_ERROR_MESSAGE, ErrorType.VALIDATION)

        return Result.ok(ValidatedFields(
            name=name,
            principal=principal,
            annual_rate=annual_rate,
            start_date=start_date,
            end_date=end_date,
            declared_installment=declared_installment,
            due_day=int(due_day),
            tenure_months=tenure_months,
        ))

    def _require_valid(self, fields: LoanFields) -> ValidatedFields:
        result = self.validate(fields)
        if not result:
            raise ValidationError(result.error)
        return result.value

    def add_loan(self, fields: LoanFields) -> Loan:
        """Create a loan from user-entered fields.

        Args:
            fields: A LoanDraft or a mapping keyed by LoanField.

        Returns:
            The stored loan, with paid_months set to 0.

        Raises:
            ValidationError: If the fields are invalid.
        """
        valid = self._require_valid(fields)
        loan = Loan(
            id=str(uuid.uuid4()),
            name=valid.name,
            principal=valid.principal,
            annual_rate=valid.annual_rate,
            start_date=valid.start_date,
            end_date=valid.end_date,
            declared_installment=valid.declared_installment,
            due_day=valid.due_day,
            total_tenure_months=valid.tenure_months,
            derived_installment=installment_amount(
                valid.principal, valid.annual_rate, valid.tenure_months
            ),
            paid_months=0,
        )
        self._loans[loan.id] = loan
        logger.info("Added loan %s (%s): %d months, derived installment %.2f",
                    loan.id, loan.name, loan.total_tenure_months, loan.derived_installment)
        return loan

    def edit_loan(self, loan_id: str, fields: LoanFields) -> Loan:
        """Replace the user-entered fields of an existing loan.

        Tenure and derived installment are recomputed; paid_months is kept
        as it is, so a longer term can move a retired loan back to active.

        Returns:
            The updated loan.

        Raises:
            ValidationError: If the fields are invalid.
            LoanNotFoundError: If the loan doesn't exist.
        """
        valid = self._require_valid(fields)
        loan = self._loans.get(loan_id)
        if loan is None:
            logger.warning("Edit requested for unknown loan %s", loan_id)
            raise LoanNotFoundError(loan_id)

        loan = replace(
            loan,
            name=valid.name,
            principal=valid.principal,
            annual_rate=valid.annual_rate,
            start_date=valid.start_date,
            end_date=valid.end_date,
            declared_installment=valid.declared_installment,
            due_day=valid.due_day,
            total_tenure_months=valid.tenure_months,
            derived_installment=installment_amount(
                valid.principal, valid.annual_rate, valid.tenure_months
            ),
        )
        self._loans[loan_id] = loan
        logger.info("Updated loan %s (%s): %d months, %d paid",
                    loan.id, loan.name, loan.total_tenure_months, loan.paid_months)
        return loan

    def delete_loan(self, loan_id: str) -> bool:
        """Delete a loan if it exists.

        Returns:
            True if a loan was removed, False if there was nothing to remove.
        """
        loan = self._loans.pop(loan_id, None)
        if loan is None:
            logger.debug("Delete requested for unknown loan %s", loan_id)
            return False
        logger.info("Deleted loan %s (%s)", loan.id, loan.name)
        return True

    def record_payment(self, loan_id: str) -> Loan:
        """Mark one more installment of a loan as paid.

        Returns:
            The updated loan.

        Raises:
            LoanNotFoundError: If the loan doesn't exist.
            PaymentRejectedError: If every installment is already paid.
        """
        loan = self.get_loan(loan_id)
        if loan.paid_months >= loan.total_tenure_months:
            logger.warning("Payment rejected for retired loan %s (%d/%d)",
                           loan.id, loan.paid_months, loan.total_tenure_months)
            raise PaymentRejectedError(loan.id, loan.paid_months, loan.total_tenure_months)

        loan = replace(loan, paid_months=loan.paid_months + 1)
        self._loans[loan_id] = loan
        logger.info("Recorded payment %d/%d for loan %s",
                    loan.paid_months, loan.total_tenure_months, loan.id)
        return loan
