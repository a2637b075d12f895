"""Tests for the notification endpoint running in-process over ASGI."""

import threading
import time

import pytest
import structlog
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from src.notifications.app import create_notification_app
from src.notifications.models import Notification, OrderStatus
from src.shared.errors import NotificationRetryRequested
from src.shared.signature import SIGNATURE_HEADER, sign
from tests.conftest import SECRET

PATH = "/notifications"


class RecordingHandler:
    def __init__(self, raises: Exception | None = None, delay: float = 0.0):
        self.received: list[Notification] = []
        self.raises = raises
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, notification: Notification) -> None:
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.received.append(notification)
        if self.raises is not None:
            raise self.raises


def _client(handler) -> AsyncClient:
    app = create_notification_app(auth_token=SECRET, handler=handler, path=PATH)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def _signed(body: bytes, secret: str = SECRET) -> dict:
    return {SIGNATURE_HEADER: sign(body, secret), "Content-Type": "application/json"}


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_valid_signature_dispatches_once(self, sample_notification_body):
        handler = RecordingHandler()
        async with _client(handler) as client:
            resp = await client.post(
                PATH, content=sample_notification_body, headers=_signed(sample_notification_body)
            )
        assert resp.status_code == 200
        assert resp.json() == {"status": "accepted", "order_id": "1001"}
        assert len(handler.received) == 1
        notification = handler.received[0]
        assert notification.order_id == "1001"
        assert notification.status == OrderStatus.APPROVED
        assert notification.old_status == "submitted"
        assert notification.description == "Reviewed and approved"

    @pytest.mark.asyncio
    async def test_invalid_signature_rejected(self, sample_notification_body):
        handler = RecordingHandler()
        async with _client(handler) as client:
            resp = await client.post(
                PATH,
                content=sample_notification_body,
                headers=_signed(sample_notification_body, "wrong-secret"),
            )
        assert resp.status_code == 401
        assert resp.json()["error"] == "unauthorized"
        assert handler.received == []

    @pytest.mark.asyncio
    async def test_missing_signature_rejected(self, sample_notification_body):
        handler = RecordingHandler()
        async with _client(handler) as client:
            resp = await client.post(PATH, content=sample_notification_body)
        assert resp.status_code == 401
        assert handler.received == []

    @pytest.mark.asyncio
    async def test_tampered_body_rejected(self, sample_notification_body):
        handler = RecordingHandler()
        tampered = sample_notification_body.replace(b"approved", b"declined")
        async with _client(handler) as client:
            resp = await client.post(
                PATH, content=tampered, headers=_signed(sample_notification_body)
            )
        assert resp.status_code == 401
        assert handler.received == []

    @pytest.mark.asyncio
    async def test_rejection_is_logged(self, sample_notification_body):
        handler = RecordingHandler()
        with capture_logs() as logs:
            async with _client(handler) as client:
                await client.post(PATH, content=sample_notification_body)
        assert any(entry["event"] == "notification_signature_rejected" for entry in logs)


class TestPayload:
    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self):
        handler = RecordingHandler()
        body = b'{"order": '
        async with _client(handler) as client:
            resp = await client.post(PATH, content=body, headers=_signed(body))
        assert resp.status_code == 400
        assert handler.received == []

    @pytest.mark.asyncio
    async def test_missing_order_rejected(self):
        handler = RecordingHandler()
        body = b'{"status": "approved"}'
        async with _client(handler) as client:
            resp = await client.post(PATH, content=body, headers=_signed(body))
        assert resp.status_code == 400
        assert handler.received == []

    @pytest.mark.asyncio
    async def test_unknown_status_still_dispatched(self):
        handler = RecordingHandler()
        body = b'{"order": {"id": 77, "status": "escalated"}}'
        async with _client(handler) as client:
            resp = await client.post(PATH, content=body, headers=_signed(body))
        assert resp.status_code == 200
        assert handler.received[0].order_id == "77"
        assert not handler.received[0].is_known_status

    @pytest.mark.asyncio
    async def test_get_not_allowed(self):
        async with _client(RecordingHandler()) as client:
            resp = await client.get(PATH)
        assert resp.status_code == 405


class TestHandlerFailures:
    @pytest.mark.asyncio
    async def test_handler_exception_acknowledged(self, sample_notification_body):
        handler = RecordingHandler(raises=RuntimeError("database down"))
        with capture_logs() as logs:
            async with _client(handler) as client:
                resp = await client.post(
                    PATH,
                    content=sample_notification_body,
                    headers=_signed(sample_notification_body),
                )
        assert resp.status_code == 200
        assert len(handler.received) == 1
        assert any(entry["event"] == "notification_handler_failed" for entry in logs)

    @pytest.mark.asyncio
    async def test_handler_can_request_retry(self, sample_notification_body):
        handler = RecordingHandler(raises=NotificationRetryRequested("not ready"))
        async with _client(handler) as client:
            resp = await client.post(
                PATH, content=sample_notification_body, headers=_signed(sample_notification_body)
            )
        assert resp.status_code == 503
        assert resp.json() == {"status": "retry", "order_id": "1001"}

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_next_request(self, sample_notification_body):
        failing = RecordingHandler(raises=RuntimeError("boom"))
        async with _client(failing) as client:
            first = await client.post(
                PATH, content=sample_notification_body, headers=_signed(sample_notification_body)
            )
            second = await client.post(
                PATH, content=sample_notification_body, headers=_signed(sample_notification_body)
            )
        assert first.status_code == second.status_code == 200
        assert len(failing.received) == 2


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self):
        async with _client(RecordingHandler()) as client:
            resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "healthy",
            "app_name": "order-risk-sdk",
            "version": "0.1.0",
        }

    @pytest.mark.asyncio
    async def test_health_reports_configured_identity(self):
        app = create_notification_app(
            auth_token=SECRET,
            handler=RecordingHandler(),
            path=PATH,
            app_name="merchant-risk",
            version="2.3.0",
        )
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            resp = await client.get("/health")
        assert resp.json()["app_name"] == "merchant-risk"
        assert resp.json()["version"] == "2.3.0"

    @pytest.mark.asyncio
    async def test_request_logged_through_given_logger(self, sample_notification_body):
        app = create_notification_app(
            auth_token=SECRET,
            handler=RecordingHandler(),
            path=PATH,
            logger=structlog.get_logger(),
        )
        transport = ASGITransport(app=app)
        with capture_logs() as logs:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                await client.post(
                    PATH,
                    content=sample_notification_body,
                    headers={**_signed(sample_notification_body), "X-Request-ID": "req-456"},
                )
        [entry] = [e for e in logs if e["event"] == "notification_http_request"]
        assert entry["request_id"] == "req-456"
        assert entry["status_code"] == 200
        assert entry["path"] == PATH

    @pytest.mark.asyncio
    async def test_request_id_header(self, sample_notification_body):
        async with _client(RecordingHandler()) as client:
            resp = await client.post(
                PATH,
                content=sample_notification_body,
                headers={**_signed(sample_notification_body), "X-Request-ID": "req-123"},
            )
        assert resp.headers["X-Request-ID"] == "req-123"
