"""Domain models for checkout validation sessions."""

from dataclasses import dataclass
from enum import Enum


class ValidationState(Enum):
    """Lifecycle states of a validation session."""

    IDLE = "idle"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        """Return True when no transition leaves this state."""
        return not _TRANSITIONS[self]


_TRANSITIONS: dict[ValidationState, frozenset[ValidationState]] = {
    ValidationState.IDLE: frozenset({ValidationState.POLLING}),
    ValidationState.POLLING: frozenset(
        {
            ValidationState.SUCCEEDED,
            ValidationState.FAILED,
            ValidationState.TIMED_OUT,
            ValidationState.CANCELED,
        }
    ),
    ValidationState.SUCCEEDED: frozenset(),
    ValidationState.FAILED: frozenset(),
    ValidationState.TIMED_OUT: frozenset(),
    ValidationState.CANCELED: frozenset(),
}

_IMMUTABLE_FIELDS = frozenset({"session_token", "purchase_id", "validate_url"})


class SessionStateError(RuntimeError):
    """Raised when a session is driven through an illegal transition."""


@dataclass
class ValidationSession:
    """A single checkout attempt being validated against the order endpoint."""

    session_token: str
    purchase_id: str
    validate_url: str
    state: ValidationState = ValidationState.IDLE
    start_time: float | None = None
    last_poll_time: float | None = None

    def __post_init__(self) -> None:
        if not self.session_token:
            raise ValueError("session_token must not be empty")
        if not self.purchase_id:
            raise ValueError("purchase_id must not be empty")
        if not self.validate_url:
            raise ValueError("validate_url must not be empty")

    def __setattr__(self, name: str, value: object) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} is immutable once set")
        super().__setattr__(name, value)

    def transition(self, state: ValidationState) -> None:
        """Move the session forward to ``state``."""
        if state not in _TRANSITIONS[self.state]:
            raise SessionStateError(
                f"Illegal transition {self.state.value} -> {state.value}"
            )
        self.state = state

    def mark_started(self, now: float) -> None:
        """Enter polling and record the start time."""
        self.transition(ValidationState.POLLING)
        self.start_time = now

    def mark_polled(self, now: float) -> None:
        """Record that a poll attempt was dispatched."""
        self.last_poll_time = now

    def elapsed(self, now: float) -> float:
        """Seconds since the session started polling."""
        if self.start_time is None:
            return 0.0
        return now - self.start_time
