"""Response payloads returned by the remote order endpoints."""

from pydantic import BaseModel

RemoteOrderId = str


class OrderStatusPayload(BaseModel):
    id: str | int
    status: str | None = None
    description: str | None = None


class OrderSubmissionResponse(BaseModel):
    order: OrderStatusPayload


class ErrorDetail(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
