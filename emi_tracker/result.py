"""Result pattern for consistent return types in the EMI tracker.

Validation and the action controller report outcomes through this class
instead of mixing return values, ``None`` and exceptions at the call site.
"""
from dataclasses import dataclass
from typing import Optional, TypeVar, Generic

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """Represents the outcome of an operation.

    Attributes:
        success: Whether the operation succeeded.
        value: The return value on success, None on failure.
        error: Error message on failure, None on success.
        error_type: Type/category of error (e.g., "NOT_FOUND", "VALIDATION").

    Usage:
        # Success case
        return Result.ok(validated_fields)

        # Failure case
        return Result.fail(VALIDATION_ERROR_MESSAGE, ErrorType.VALIDATION)

        # Checking result
        result = ledger.validate(draft)
        if result.success:
            print(f"Tenure: {result.value.tenure_months}")
        else:
            print(f"Error: {result.error}")
    """
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, value: T = None) -> 'Result[T]':
        """Create a successful result.

        Args:
            value: The return value.

        Returns:
            A Result with success=True and the given value.
        """
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, error_type: str = None) -> 'Result[T]':
        """Create a failure result.

        Args:
            error: Error message describing what went wrong.
            error_type: Optional error category for programmatic handling.

        Returns:
            A Result with success=False and error details.
        """
        return cls(success=False, error=error, error_type=error_type)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Get the value, raising an exception if the operation failed.

        Raises:
            ValueError: If the operation failed.
        """
        if not self.success:
            raise ValueError(f"Result unwrap failed: {self.error}")
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get the value or a default if the operation failed."""
        return self.value if self.success else default


class ErrorType:
    """Standard error type constants."""
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    PAYMENT_REJECTED = "PAYMENT_REJECTED"
