"""Shared test fixtures for the order risk SDK tests."""

import os
from datetime import UTC, datetime

import pytest

from src.domains.orders.models import (
    AddressInformation,
    Customer,
    DiscountCode,
    LineItem,
    Order,
    ShippingLine,
)
from src.domains.orders.payments import CreditCardPaymentDetails, PaypalPaymentDetails

os.environ.setdefault("AUTH_TOKEN", "test-shared-secret")
os.environ.setdefault("SHOP_DOMAIN", "shop.test")

SECRET = "test-shared-secret"
CREATED_AT = datetime(2026, 1, 15, 14, 0, 0, tzinfo=UTC)
UPDATED_AT = datetime(2026, 1, 15, 14, 5, 0, tzinfo=UTC)


def make_address(**kwargs) -> AddressInformation:
    defaults = {
        "first_name": "Marie",
        "last_name": "Jean-Baptiste",
        "address1": "12 Rue Capois",
        "city": "Port-au-Prince",
        "country": "Haiti",
        "country_code": "HT",
        "phone": "+50934567890",
        "zip": "HT6110",
    }
    defaults.update(kwargs)
    return AddressInformation(**defaults)


def make_customer(**kwargs) -> Customer:
    defaults = {
        "id": "cust-880e8400",
        "email": "marie@example.com",
        "first_name": "Marie",
        "last_name": "Jean-Baptiste",
        "verified_email": True,
        "orders_count": 3,
        "created_at": datetime(2025, 6, 1, 9, 0, 0, tzinfo=UTC),
    }
    defaults.update(kwargs)
    return Customer(**defaults)


def make_credit_card(**kwargs) -> CreditCardPaymentDetails:
    defaults = {
        "credit_card_bin": "424242",
        "avs_result_code": "Y",
        "cvv_result_code": "M",
        "credit_card_company": "Visa",
        "credit_card_number": "XXXX-XXXX-XXXX-4242",
    }
    defaults.update(kwargs)
    return CreditCardPaymentDetails(**defaults)


def make_paypal(**kwargs) -> PaypalPaymentDetails:
    defaults = {
        "payment_status": "Completed",
        "authorization_id": "AUTH-7788",
        "payer_email": "payer@example.com",
        "payer_status": "verified",
        "payer_address_status": "confirmed",
        "protection_eligibility": "Eligible",
        "pending_reason": "none",
    }
    defaults.update(kwargs)
    return PaypalPaymentDetails(**defaults)


def make_order(**kwargs) -> Order:
    defaults = {
        "merchant_order_id": 1001,
        "email": "marie@example.com",
        "customer": make_customer(),
        "payment_details": make_credit_card(),
        "billing_address": make_address(),
        "shipping_address": make_address(),
        "line_items": [
            LineItem(title="Kreyol cookbook", price=24.5, quantity=2, product_id="p-1", sku="BK-1")
        ],
        "shipping_lines": [ShippingLine(title="Standard", price=5.0, code="STD")],
        "gateway": "stripe",
        "customer_browser_ip": "10.0.1.50",
        "currency": "USD",
        "total_price": 54.0,
        "created_at": CREATED_AT,
        "updated_at": UPDATED_AT,
    }
    defaults.update(kwargs)
    return Order(**defaults)


def make_full_order(**kwargs) -> Order:
    """Order with every optional field populated."""
    defaults = {
        "discount_codes": [DiscountCode(code="WELCOME10", amount=5.0)],
        "total_discounts": 5.0,
        "total_price_usd": 54.0,
        "cart_token": "cart-5f1c",
        "closed_at": datetime(2026, 1, 16, 8, 0, 0, tzinfo=UTC),
        "financial_status": "paid",
        "fulfillment_status": "fulfilled",
    }
    defaults.update(kwargs)
    return make_order(**defaults)


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def valid_order() -> Order:
    return make_order()


@pytest.fixture
def full_order() -> Order:
    return make_full_order()


@pytest.fixture
def sample_notification_body() -> bytes:
    return (
        b'{"order": {"id": "1001", "status": "approved", "old_status": "submitted", '
        b'"description": "Reviewed and approved"}}'
    )
