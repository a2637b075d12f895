"""Sample process wiring: run the notification listener until interrupted."""

import threading

import structlog

from src.config import settings
from src.notifications.listener import NotificationListener
from src.notifications.models import Notification
from src.shared.logging import setup_logging

logger = structlog.get_logger()


def log_notification(notification: Notification) -> None:
    logger.info(
        "order_verdict_received",
        order_id=notification.order_id,
        status=notification.status,
        old_status=notification.old_status,
        description=notification.description,
    )


def main() -> None:
    setup_logging(settings.log_level, settings.environment)
    logger.info(
        "order_risk_sdk_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    listener = NotificationListener.from_settings(settings)
    listener.start(settings.listener_host, settings.listener_port, log_notification)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        # make sure the listener releases its socket when the process exits
        listener.stop()
        logger.info("order_risk_sdk_shutting_down")


if __name__ == "__main__":
    main()
