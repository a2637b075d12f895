"""Inbound verdict notifications."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class OrderStatus(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    DECLINED = "declined"
    CAPTURED = "captured"
    CANCELLED = "cancelled"
    ERROR = "error"


class Notification(BaseModel):
    """Verdict for a previously transmitted order.

    The signature arrives in a request header and is not part of the model.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | int
    status: str
    old_status: str | None = None
    description: str | None = None

    @property
    def order_id(self) -> str:
        return str(self.id)

    @property
    def is_known_status(self) -> bool:
        return self.status in set(OrderStatus)


class NotificationEnvelope(BaseModel):
    order: Notification
