"""Order status and purchase outcome models."""

from dataclasses import dataclass
from enum import Enum

from checkout_validation.domain.sessions import ValidationState


class ChargeState(Enum):
    """Decoded charge state reported by the order-status endpoint."""

    PENDING = "pending"
    SUCCEEDED = "charge_succeed"
    FAILED = "charge_failed"

    @classmethod
    def from_raw(cls, raw: str | None) -> "ChargeState":
        """Decode a remote state string; unknown values are still pending."""
        if raw == cls.SUCCEEDED.value:
            return cls.SUCCEEDED
        if raw == cls.FAILED.value:
            return cls.FAILED
        return cls.PENDING


@dataclass(frozen=True)
class PurchaseItem:
    """A product line of a completed purchase."""

    name: str | None
    sku: str | None
    amount: float | None


@dataclass(frozen=True)
class OrderStatus:
    """A well-formed order-status response."""

    charge_state: ChargeState
    reason: str | None = None
    total_sum: float | None = None
    total_sum_currency: str | None = None
    session_id: str | None = None
    user_id: str | None = None
    payment_method_name: str | None = None
    bundle_sku: str | None = None
    bundle_name: str | None = None
    date: str | None = None
    user_country: str | None = None
    order_id: str | None = None
    products: tuple[PurchaseItem, ...] = ()


@dataclass(frozen=True)
class OutcomeRecord:
    """Final result of a validation session."""

    state: ValidationState
    purchase_id: str
    reason: str | None = None
    currency: str | None = None
    session_token: str | None = None
    customer_id: str | None = None
    payment_method_name: str | None = None
    offer_sku: str | None = None
    price: float | None = None
    offer_name: str | None = None
    date: str | None = None
    customer_country: str | None = None
    order_id: str | None = None
    items: tuple[PurchaseItem, ...] = ()

    @property
    def succeeded(self) -> bool:
        """Return True for a successful purchase."""
        return self.state is ValidationState.SUCCEEDED
