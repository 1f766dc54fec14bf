"""Pydantic models for checkout service payloads."""

from pydantic import BaseModel, ConfigDict, Field

from checkout_validation.domain.orders import ChargeState, OrderStatus, PurchaseItem


class _Payload(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )


class ProductPayload(_Payload):
    """Product line in an order-status response."""

    name: str | None = None
    sku: str | None = None
    amount: float | None = None


class OrderStatusPayload(_Payload):
    """Order-status response body."""

    state: str | None = None
    reason: str | None = None
    total_sum: float | None = Field(default=None, alias="totalSum")
    total_sum_currency: str | None = Field(default=None, alias="totalSumCurrency")
    session_id: str | None = Field(default=None, alias="sessionId")
    user_id: str | None = Field(default=None, alias="userId")
    payment_method_name: str | None = Field(default=None, alias="paymentMethodName")
    bundle_sku: str | None = Field(default=None, alias="bundleSKU")
    bundle_name: str | None = Field(default=None, alias="bundleName")
    date: str | None = None
    user_country: str | None = Field(default=None, alias="userCountry")
    order_id: str | None = Field(default=None, alias="orderId")
    products: list[ProductPayload] | None = None

    def to_domain(self) -> OrderStatus:
        """Decode the payload into an ``OrderStatus``."""
        return OrderStatus(
            charge_state=ChargeState.from_raw(self.state),
            reason=self.reason,
            total_sum=self.total_sum,
            total_sum_currency=self.total_sum_currency,
            session_id=self.session_id,
            user_id=self.user_id,
            payment_method_name=self.payment_method_name,
            bundle_sku=self.bundle_sku,
            bundle_name=self.bundle_name,
            date=self.date,
            user_country=self.user_country,
            order_id=self.order_id,
            products=tuple(
                PurchaseItem(name=product.name, sku=product.sku, amount=product.amount)
                for product in self.products or []
            ),
        )


class BootPaths(_Payload):
    """Endpoint paths section of a boot response."""

    base_url: str | None = Field(default=None, alias="baseUrl")
    get_order_path: str | None = Field(default=None, alias="getOrderPath")
    cancel_path: str | None = Field(default=None, alias="cancelPath")
    wrapper_url: str | None = Field(default=None, alias="wrapperUrl")


class BootOrderValidation(_Payload):
    """Order validation timing, in milliseconds."""

    timeout: int | None = None
    rate: int | None = None


class BootNetwork(_Payload):
    """Network section of boot settings."""

    order_validation: BootOrderValidation | None = Field(
        default=None, alias="orderValidation"
    )


class BootSettings(_Payload):
    """Settings section of a boot response."""

    network: BootNetwork | None = None


class BootResponse(_Payload):
    """Boot response describing checkout endpoints and timings."""

    paths: BootPaths | None = None
    settings: BootSettings | None = None

    @property
    def order_validation(self) -> BootOrderValidation | None:
        """Return order validation timings, if present."""
        if self.settings is None or self.settings.network is None:
            return None
        return self.settings.network.order_validation


def parse_order_status(payload: object) -> OrderStatus:
    """Validate a raw order-status body and decode it."""
    return OrderStatusPayload.model_validate(payload).to_domain()
