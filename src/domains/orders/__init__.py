"""Order data model and field validation."""

from .models import (
    AddressInformation,
    Customer,
    DiscountCode,
    LineItem,
    Order,
    OrderCancellation,
    ShippingLine,
)
from .payments import CreditCardPaymentDetails, PaymentDetails, PaypalPaymentDetails

__all__ = [
    "AddressInformation",
    "CreditCardPaymentDetails",
    "Customer",
    "DiscountCode",
    "LineItem",
    "Order",
    "OrderCancellation",
    "PaymentDetails",
    "PaypalPaymentDetails",
    "ShippingLine",
]
