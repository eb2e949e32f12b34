"""UI State Manager for the EMI tracker.

This module provides the presentation-side state that sits in front of the
ledger: the add/edit draft and the transient status message.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from emi_tracker.config import NOTIFICATION_DURATION_SECONDS
from emi_tracker.data_structures import Loan, LoanDraft, LoanField


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str


class StatusNotifier:
    """Holds the current status message and clears it after a delay.

    Showing a new message cancels any pending clear of the previous one, so
    each message stays visible for the full duration.

    Attributes:
        duration: Seconds before a shown message is cleared.
        on_change: Callback invoked with the new Notification (or None when
            cleared).
    """

    def __init__(self, duration: float = NOTIFICATION_DURATION_SECONDS,
                 on_change: Callable[[Optional[Notification]], None] = None,
                 timer_factory: Callable[[float, Callable[[], None]], Any] = threading.Timer):
        """Initialize StatusNotifier.

        Args:
            duration: Display lifetime of a message in seconds.
            on_change: Optional listener for message changes.
            timer_factory: Builds the cancellable delayed-clear task; must
                return an object with start() and cancel().
        """
        self.duration = duration
        self.on_change = on_change
        self._timer_factory = timer_factory
        self._current: Optional[Notification] = None
        self._timer = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    @property
    def has_pending_clear(self) -> bool:
        return self._timer is not None

    def show(self, kind: NotificationKind, message: str) -> Notification:
        """Display a message and schedule it to be cleared.

        Args:
            kind: SUCCESS or ERROR.
            message: Text shown to the user.

        Returns:
            The notification now being displayed.
        """
        notification = Notification(NotificationKind(kind), message)
        with self._lock:
            self._cancel_timer()
            self._current = notification
            timer = self._timer_factory(self.duration, lambda: self._expire(notification))
            if hasattr(timer, "daemon"):
                timer.daemon = True
            self._timer = timer
            timer.start()
        self._notify()
        return notification

    def success(self, message: str) -> Notification:
        return self.show(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.show(NotificationKind.ERROR, message)

    def clear(self) -> None:
        """Clear the message now and drop any pending clear."""
        with self._lock:
            self._cancel_timer()
            changed = self._current is not None
            self._current = None
        if changed:
            self._notify()

    def cancel(self) -> None:
        """Drop the pending clear, keeping the current message."""
        with self._lock:
            self._cancel_timer()

    def _expire(self, notification: Notification) -> None:
        with self._lock:
            # A newer message replaced this one; its own timer will clear it.
            if self._current is not notification:
                return
            self._current = None
            self._timer = None
        self._notify()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self._current)


class UIStateManager:
    """Manages the add/edit form state.

    The draft is a separate LoanDraft value; starting an edit copies the
    loan's fields into a fresh draft, so typing never touches a stored loan.

    Attributes:
        draft: The fields currently being entered.
        is_adding_new: Whether the add form is open.
        editing_loan_id: Id of the loan being edited, if any.
    """

    def __init__(self):
        self.draft = LoanDraft()
        self.is_adding_new = False
        self.editing_loan_id: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_loan_id is not None

    def start_adding(self) -> None:
        """Open the add form with an empty draft."""
        self.editing_loan_id = None
        self.draft = LoanDraft()
        self.is_adding_new = True

    def start_editing(self, loan: Loan) -> None:
        """Open the edit form pre-filled with the loan's fields."""
        self.is_adding_new = False
        self.editing_loan_id = loan.id
        self.draft = LoanDraft.from_loan(loan)

    def set_field(self, loan_field: LoanField, value: Any) -> None:
        self.draft.set(loan_field, value)

    def reset_draft(self) -> None:
        self.draft = LoanDraft()

    def cancel(self) -> None:
        """Close whichever form is open and discard the draft."""
        self.is_adding_new = False
        self.editing_loan_id = None
        self.reset_draft()
