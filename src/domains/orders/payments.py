"""Payment details variants.

Each payment method is its own model with its own ``validate``. The set is
closed: ``PaymentDetails`` lists every variant, and adding a payment method
means adding a model and a tag here, never changing an existing variant.
The wire format carries no explicit tag, so inbound payloads are routed by
the fields they carry.
"""

from typing import Annotated, Any, ClassVar

from pydantic import Discriminator, Tag

from . import validators
from .base import WireModel


class CreditCardPaymentDetails(WireModel):
    payment_method: ClassVar[str] = "credit_card"

    credit_card_bin: str | None = None
    avs_result_code: str | None = None
    cvv_result_code: str | None = None
    credit_card_company: str | None = None
    credit_card_number: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_digits(self.credit_card_bin, "Credit Card Bin", length=6)
        strict = not is_weak
        if validators.check_presence(self.avs_result_code, "AVS Result Code", strict):
            validators.validate_valued_string(self.avs_result_code, "AVS Result Code")
        if validators.check_presence(self.cvv_result_code, "CVV Result Code", strict):
            validators.validate_valued_string(self.cvv_result_code, "CVV Result Code")
        if validators.check_presence(self.credit_card_company, "Credit Card Company", strict):
            validators.validate_valued_string(self.credit_card_company, "Credit Card Company")
        if validators.check_presence(self.credit_card_number, "Credit Card Number", strict):
            validators.validate_valued_string(self.credit_card_number, "Credit Card Number")


class PaypalPaymentDetails(WireModel):
    """Payment information for an order paid through PayPal.

    Only ``payment_status`` is required, in both strict and weak mode. The
    descriptive fields are passed through as received from PayPal.
    """

    payment_method: ClassVar[str] = "paypal"

    payment_status: str | None = None
    authorization_id: str | None = None
    payer_email: str | None = None
    payer_status: str | None = None
    payer_address_status: str | None = None
    protection_eligibility: str | None = None
    pending_reason: str | None = None

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_valued_string(self.payment_status, "Payment Status")
        if self.payer_email is not None:
            validators.validate_email_address(self.payer_email, "Payer Email")


PAYPAL_ONLY_FIELDS = frozenset(PaypalPaymentDetails.model_fields) - frozenset(
    CreditCardPaymentDetails.model_fields
)


def payment_method_of(value: Any) -> str:
    """Resolve the variant tag of a model instance or an inbound mapping."""
    if isinstance(value, dict):
        if PAYPAL_ONLY_FIELDS & value.keys():
            return PaypalPaymentDetails.payment_method
        return CreditCardPaymentDetails.payment_method
    return getattr(value, "payment_method", CreditCardPaymentDetails.payment_method)


PaymentDetails = Annotated[
    Annotated[CreditCardPaymentDetails, Tag(CreditCardPaymentDetails.payment_method)]
    | Annotated[PaypalPaymentDetails, Tag(PaypalPaymentDetails.payment_method)],
    Discriminator(payment_method_of),
]
