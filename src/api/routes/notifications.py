"""Inbound verdict notification endpoint."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pydantic
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from src.notifications.models import Notification, NotificationEnvelope
from src.shared.errors import NotificationRetryRequested, SignatureError
from src.shared.signature import SIGNATURE_HEADER, require_valid_signature

NotificationHandler = Callable[[Notification], Any]


@dataclass(frozen=True)
class NotificationEndpoint:
    """Per-app settings read by the route; stored on ``app.state``."""

    auth_token: str
    handler: NotificationHandler
    logger: Any


async def receive_notification(request: Request) -> JSONResponse:
    """Authenticate, parse and dispatch one notification.

    Handler failures are logged and still acknowledged with 200. A handler
    asks for redelivery by raising ``NotificationRetryRequested``, which is
    answered with 503.
    """
    endpoint: NotificationEndpoint = request.app.state.notification_endpoint
    request_id = getattr(request.state, "request_id", "unknown")
    log = endpoint.logger.bind(request_id=request_id)

    body = await request.body()
    try:
        require_valid_signature(body, request.headers.get(SIGNATURE_HEADER), endpoint.auth_token)
    except SignatureError as exc:
        log.warning("notification_signature_rejected", reason=str(exc))
        return JSONResponse(
            status_code=401,
            content={"error": "unauthorized", "message": str(exc), "request_id": request_id},
        )

    try:
        notification = NotificationEnvelope.model_validate_json(body).order
    except pydantic.ValidationError as exc:
        log.warning("notification_payload_invalid", error_count=exc.error_count())
        return JSONResponse(
            status_code=400,
            content={
                "error": "bad_request",
                "message": "Notification body is not a valid order notification",
                "request_id": request_id,
            },
        )

    log = log.bind(order_id=notification.order_id, status=notification.status)
    try:
        # Handlers are synchronous; run them off the event loop so a slow one
        # does not hold up other notifications.
        await run_in_threadpool(endpoint.handler, notification)
    except NotificationRetryRequested as exc:
        log.info("notification_retry_requested", reason=str(exc))
        return JSONResponse(
            status_code=503,
            content={"status": "retry", "order_id": notification.order_id},
        )
    except Exception:
        log.exception("notification_handler_failed")
    else:
        log.info("notification_dispatched")

    return JSONResponse(
        status_code=200,
        content={"status": "accepted", "order_id": notification.order_id},
    )
