"""Translate order statuses into purchase outcomes."""

from checkout_validation.domain.orders import OrderStatus, OutcomeRecord
from checkout_validation.domain.sessions import ValidationState

TIMEOUT_REASON = "Order validation timed out."
CANCELED_REASON = "Order validation canceled by user."
SUPERSEDED_REASON = "Order validation superseded by a new checkout."
UNKNOWN_FAILURE_REASON = "Order charge failed."


def translate_order_status(status: OrderStatus, purchase_id: str) -> OutcomeRecord:
    """Map a successful order status to a normalized outcome."""
    return OutcomeRecord(
        state=ValidationState.SUCCEEDED,
        purchase_id=purchase_id,
        currency=status.total_sum_currency,
        session_token=status.session_id,
        customer_id=status.user_id,
        payment_method_name=status.payment_method_name,
        offer_sku=status.bundle_sku,
        price=status.total_sum,
        offer_name=status.bundle_name,
        date=status.date,
        customer_country=status.user_country,
        order_id=status.order_id,
        items=status.products,
    )


def failed_outcome(status: OrderStatus, purchase_id: str) -> OutcomeRecord:
    """Build the outcome for a charge the remote service rejected."""
    return OutcomeRecord(
        state=ValidationState.FAILED,
        purchase_id=purchase_id,
        reason=status.reason if status.reason is not None else UNKNOWN_FAILURE_REASON,
        order_id=status.order_id,
    )


def timeout_outcome(purchase_id: str) -> OutcomeRecord:
    return OutcomeRecord(
        state=ValidationState.TIMED_OUT, purchase_id=purchase_id, reason=TIMEOUT_REASON
    )


def canceled_outcome(purchase_id: str, reason: str = CANCELED_REASON) -> OutcomeRecord:
    return OutcomeRecord(
        state=ValidationState.CANCELED, purchase_id=purchase_id, reason=reason
    )
