"""Pydantic models for the checkout host API."""

from pydantic import BaseModel, model_validator

from checkout_validation.domain.orders import OutcomeRecord
from checkout_validation.domain.sessions import ValidationSession


class LaunchRequest(BaseModel):
    """Request to open a checkout and validate its order."""

    purchase_id: str
    redirect_url: str | None = None
    checkout_url: str | None = None
    session_token: str | None = None

    @model_validator(mode="after")
    def _check_source(self) -> "LaunchRequest":
        if self.redirect_url:
            return self
        if self.checkout_url and self.session_token:
            return self
        raise ValueError(
            "Provide redirect_url, or checkout_url together with session_token"
        )


class SessionView(BaseModel):
    """Public view of a validation session."""

    purchase_id: str
    state: str
    validate_url: str

    @classmethod
    def from_session(cls, session: ValidationSession) -> "SessionView":
        return cls(
            purchase_id=session.purchase_id,
            state=session.state.value,
            validate_url=session.validate_url,
        )


class ProductView(BaseModel):
    """Product line of a purchase outcome."""

    name: str | None
    sku: str | None
    amount: float | None


class OutcomeView(BaseModel):
    """Public view of a purchase outcome."""

    state: str
    purchase_id: str
    reason: str | None
    currency: str | None
    customer_id: str | None
    payment_method_name: str | None
    offer_sku: str | None
    price: float | None
    offer_name: str | None
    date: str | None
    customer_country: str | None
    order_id: str | None
    items: list[ProductView]

    @classmethod
    def from_outcome(cls, outcome: OutcomeRecord) -> "OutcomeView":
        return cls(
            state=outcome.state.value,
            purchase_id=outcome.purchase_id,
            reason=outcome.reason,
            currency=outcome.currency,
            customer_id=outcome.customer_id,
            payment_method_name=outcome.payment_method_name,
            offer_sku=outcome.offer_sku,
            price=outcome.price,
            offer_name=outcome.offer_name,
            date=outcome.date,
            customer_country=outcome.customer_country,
            order_id=outcome.order_id,
            items=[
                ProductView(name=item.name, sku=item.sku, amount=item.amount)
                for item in outcome.items
            ],
        )


class StatusView(BaseModel):
    """Current state of checkout validation."""

    active: SessionView | None
    request_in_flight: bool
    loading_visible: bool
    last_outcome: OutcomeView | None
