"""Pydantic models for orders submitted for fraud analysis.

Validation is fail-fast: ``validate`` raises on the first violation it finds,
walking owned children before the entity's own scalar fields.
"""

from datetime import datetime

from pydantic import Field

from . import validators
from .base import BaseOrder, WireModel
from .payments import PaymentDetails


class LineItem(WireModel):
    title: str | None = None
    price: float | None = None
    quantity: int | None = None
    product_id: str | None = None
    sku: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_valued_string(self.title, "Title")
        validators.validate_zero_or_positive(self.price, "Price")
        validators.validate_zero_or_positive(self.quantity, "Quantity")
        if validators.check_presence(self.product_id, "Product Id", not is_weak):
            validators.validate_valued_string(self.product_id, "Product Id")
        if validators.check_presence(self.sku, "SKU", not is_weak):
            validators.validate_valued_string(self.sku, "SKU")


class ShippingLine(WireModel):
    title: str | None = None
    price: float | None = None
    code: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_valued_string(self.title, "Title")
        validators.validate_zero_or_positive(self.price, "Price")


class DiscountCode(WireModel):
    code: str | None = None
    amount: float | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_valued_string(self.code, "Discount Code")
        validators.validate_zero_or_positive(self.amount, "Discount Amount")


class AddressInformation(WireModel):
    first_name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    company: str | None = None
    country: str | None = None
    country_code: str | None = None
    province: str | None = None
    province_code: str | None = None
    phone: str | None = None
    zip: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_valued_string(self.first_name, "First Name")
        validators.validate_valued_string(self.last_name, "Last Name")
        validators.validate_valued_string(self.address1, "Address 1")
        validators.validate_valued_string(self.city, "City")
        validators.validate_country_code(self.country_code)
        if validators.check_presence(self.phone, "Phone", not is_weak):
            validators.validate_valued_string(self.phone, "Phone")
        if validators.check_presence(self.zip, "Zip", not is_weak):
            validators.validate_valued_string(self.zip, "Zip")


class Customer(WireModel):
    id: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    verified_email: bool | None = None
    orders_count: int | None = None
    created_at: datetime | None = None
    note: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_valued_string(self.first_name, "First Name")
        validators.validate_valued_string(self.last_name, "Last Name")
        if validators.check_presence(self.id, "Customer Id", not is_weak):
            validators.validate_valued_string(self.id, "Customer Id")
        if validators.check_presence(self.email, "Customer Email", not is_weak):
            validators.validate_email_address(self.email, "Customer Email")
        if self.orders_count is not None:
            validators.validate_zero_or_positive(self.orders_count, "Orders Count")
        if self.created_at is not None:
            validators.validate_date_not_default(self.created_at, "Customer Created At")


class Order(BaseOrder):
    """Aggregate root describing one commerce transaction.

    Owns its customer, payment details, addresses, line items, shipping lines
    and discount codes. Fields are plain attributes; changing them after a
    successful ``validate`` is unsupported and requires validating again.

    Every owned object, collection and scalar is required in both modes.
    Weak mode (update-style requests) is passed down to the owned objects,
    which relax their own descriptive fields. Optional fields are checked
    with full strictness whenever they are present.
    """

    email: str | None = None
    customer: Customer | None = None
    payment_details: PaymentDetails | None = None
    billing_address: AddressInformation | None = None
    shipping_address: AddressInformation | None = None
    line_items: list[LineItem] | None = None
    shipping_lines: list[ShippingLine] | None = None
    gateway: str | None = None
    customer_browser_ip: str | None = Field(default=None, alias="browser_ip")
    currency: str | None = None
    total_price: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    discount_codes: list[DiscountCode] | None = None
    total_discounts: float | None = None
    total_price_usd: float | None = None
    cart_token: str | None = None
    closed_at: datetime | None = None
    financial_status: str | None = None
    fulfillment_status: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        super().validate(is_weak)

        validators.validate_non_empty(self.line_items, "Line Items")
        for item in self.line_items:
            item.validate(is_weak)
        validators.validate_non_empty(self.shipping_lines, "Shipping Lines")
        for line in self.shipping_lines:
            line.validate(is_weak)
        validators.validate_object_not_null(self.payment_details, "Payment Details")
        self.payment_details.validate(is_weak)
        validators.validate_object_not_null(self.billing_address, "Billing Address")
        self.billing_address.validate(is_weak)
        validators.validate_object_not_null(self.shipping_address, "Shipping Address")
        self.shipping_address.validate(is_weak)
        validators.validate_object_not_null(self.customer, "Customer")
        self.customer.validate(is_weak)

        validators.validate_email_address(self.email)
        validators.validate_ip(self.customer_browser_ip)
        validators.validate_currency(self.currency)
        validators.validate_zero_or_positive(self.total_price, "Total Price")
        validators.validate_valued_string(self.gateway, "Gateway")
        validators.validate_date_not_default(self.created_at, "Created At")
        validators.validate_date_not_default(self.updated_at, "Updated At")

        # optional fields
        for code in self.discount_codes or []:
            code.validate(is_weak)
        if self.total_price_usd is not None:
            validators.validate_zero_or_positive(self.total_price_usd, "Total Price USD")
        if self.total_discounts is not None:
            validators.validate_zero_or_positive(self.total_discounts, "Total Discounts")
        if self.closed_at is not None:
            validators.validate_date_not_default(self.closed_at, "Closed At")


class OrderCancellation(BaseOrder):
    """Request to cancel a previously submitted order."""

    cancel_reason: str | None = None
    cancelled_at: datetime | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        super().validate(is_weak)
        validators.validate_valued_string(self.cancel_reason, "Cancel Reason")
        validators.validate_date_not_default(self.cancelled_at, "Cancelled At")
