"""Data structures for the EMI tracker.

``Loan`` is the committed record owned by the ledger. ``LoanDraft`` holds the
user-entered fields of a loan being added or edited; it is a separate value
and never aliases a stored record.
"""
from dataclasses import dataclass, field, fields as dataclass_fields
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Union

from emi_tracker.amortization import remaining_principal
from emi_tracker.config import DATE_FORMAT_STORAGE, DEFAULT_DUE_DAY


class LoanStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RETIRED = "RETIRED"


class LoanField(str, Enum):
    """User-editable loan fields."""
    NAME = "name"
    PRINCIPAL = "principal"
    ANNUAL_RATE = "annual_rate"
    START_DATE = "start_date"
    END_DATE = "end_date"
    DECLARED_INSTALLMENT = "declared_installment"
    DUE_DAY = "due_day"

    @property
    def is_text(self) -> bool:
        """Whether the field keeps its raw text instead of a number."""
        return self in _TEXT_FIELDS


_TEXT_FIELDS = frozenset({LoanField.NAME, LoanField.START_DATE, LoanField.END_DATE})

FieldValue = Union[str, float, int, date]


def to_number(value: Any) -> float:
    """Convert a raw input value to a float.

    Blank strings become 0. Unparseable input and booleans become NaN, which
    later fails every range check in validation.
    """
    if isinstance(value, bool):
        return float("nan")
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return float("nan")


def coerce_field_value(loan_field: LoanField, value: Any) -> FieldValue:
    """Normalize a raw value for the given field.

    Text fields keep strings (and dates) as they are; numeric fields go
    through ``to_number``.
    """
    if loan_field.is_text:
        if value is None:
            return ""
        if isinstance(value, date):
            return value
        return str(value)
    return to_number(value)


@dataclass
class LoanDraft:
    """User-entered loan fields captured before an add or edit is committed."""
    name: str = ""
    principal: float = 0.0
    annual_rate: float = 0.0
    start_date: Union[str, date] = ""
    end_date: Union[str, date] = ""
    declared_installment: float = 0.0
    due_day: float = DEFAULT_DUE_DAY

    def set(self, loan_field: LoanField, value: Any) -> None:
        """Update a single field, converting the value by field kind."""
        loan_field = LoanField(loan_field)
        setattr(self, loan_field.value, coerce_field_value(loan_field, value))

    def get(self, loan_field: LoanField) -> FieldValue:
        return getattr(self, LoanField(loan_field).value)

    def copy(self) -> 'LoanDraft':
        return LoanDraft(**self.to_dict())

    def to_dict(self) -> Dict[str, FieldValue]:
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self)}

    @classmethod
    def from_mapping(cls, values: Mapping[Union[LoanField, str], Any]) -> 'LoanDraft':
        """Build a draft from a mapping keyed by LoanField or field name.

        Missing fields keep their defaults.

        Raises:
            ValueError: If a key is not a loan field.
        """
        draft = cls()
        for key, value in values.items():
            draft.set(LoanField(key), value)
        return draft

    @classmethod
    def from_loan(cls, loan: 'Loan') -> 'LoanDraft':
        """Copy the user-entered fields of a stored loan into a new draft."""
        return cls(
            name=loan.name,
            principal=loan.principal,
            annual_rate=loan.annual_rate,
            start_date=loan.start_date.strftime(DATE_FORMAT_STORAGE),
            end_date=loan.end_date.strftime(DATE_FORMAT_STORAGE),
            declared_installment=loan.declared_installment,
            due_day=loan.due_day,
        )


@dataclass(frozen=True)
class ValidatedFields:
    """Normalized loan fields that passed validation."""
    name: str
    principal: float
    annual_rate: float
    start_date: date
    end_date: date
    declared_installment: float
    due_day: int
    tenure_months: int


@dataclass(frozen=True)
class Loan:
    """A tracked loan and its payment progress.

    ``total_tenure_months`` and ``derived_installment`` are computed by the
    ledger whenever the loan is added or edited. Loans are immutable: the
    ledger swaps in a replaced record on every edit or payment, so a loan
    held by a caller is a snapshot that cannot alter the ledger.
    """
    id: str
    name: str
    principal: float
    annual_rate: float
    start_date: date
    end_date: date
    declared_installment: float
    due_day: int
    total_tenure_months: int
    derived_installment: float
    paid_months: int = field(default=0)

    @property
    def status(self) -> LoanStatus:
        if self.paid_months < self.total_tenure_months:
            return LoanStatus.ACTIVE
        return LoanStatus.RETIRED

    @property
    def is_retired(self) -> bool:
        return self.status == LoanStatus.RETIRED

    @property
    def remaining_months(self) -> int:
        return max(0, self.total_tenure_months - self.paid_months)

    @property
    def total_paid(self) -> float:
        """Amount paid so far at the user's declared installment."""
        return self.declared_installment * self.paid_months

    @property
    def remaining_principal(self) -> float:
        """Outstanding principal on the original amortization schedule."""
        return remaining_principal(
            self.principal, self.annual_rate, self.total_tenure_months, self.paid_months
        )
