"""ASGI application that receives verdict notifications."""

from typing import Any

import structlog
from fastapi import FastAPI

from src.api.middleware.logging import RequestLoggingMiddleware
from src.api.routes.health import router as health_router
from src.api.routes.notifications import (
    NotificationEndpoint,
    NotificationHandler,
    receive_notification,
)


def create_notification_app(
    auth_token: str,
    handler: NotificationHandler,
    path: str = "/notifications",
    logger: Any = None,
    app_name: str = "order-risk-sdk",
    version: str = "0.1.0",
) -> FastAPI:
    """Build the notification app for one shared secret and handler."""
    logger = logger or structlog.get_logger()
    app = FastAPI(
        title="Order risk notifications",
        version=version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.service_info = {"app_name": app_name, "version": version}
    app.state.notification_endpoint = NotificationEndpoint(
        auth_token=auth_token,
        handler=handler,
        logger=logger,
    )
    app.add_middleware(RequestLoggingMiddleware, logger=logger)
    app.include_router(health_router)
    app.add_api_route(path, receive_notification, methods=["POST"], tags=["notifications"])
    return app
