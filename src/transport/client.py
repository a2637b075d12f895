"""Signed HTTPS transmission of orders to the remote fraud-analysis service."""

from typing import Any

import httpx
import pydantic
import structlog

from src.config import Settings
from src.domains.orders.base import BaseOrder
from src.domains.orders.models import Order, OrderCancellation
from src.shared.errors import TransmissionError, TransmissionErrorKind
from src.shared.signature import SHOP_DOMAIN_HEADER, SIGNATURE_HEADER, sign

from .models import ErrorResponse, OrderSubmissionResponse, RemoteOrderId

# Longest slice of a response body kept in logs
_LOG_BODY_LIMIT = 500


class OrderTransmitter:
    """Validates, signs and posts orders to the remote service.

    Each call is independent; the only state is read-only configuration and
    the pooled ``httpx.Client``, which is safe to share between threads.
    Nothing is retried here. ``TransmissionError.retryable`` tells the
    caller whether a retry with backoff makes sense.
    """

    def __init__(
        self,
        base_url: str,
        shop_domain: str,
        auth_token: str,
        timeout: float = 10.0,
        create_path: str = "/api/create",
        submit_path: str = "/api/submit",
        update_path: str = "/api/update",
        cancel_path: str = "/api/cancel",
        logger: Any = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.shop_domain = shop_domain
        self._auth_token = auth_token
        self.create_path = create_path
        self.submit_path = submit_path
        self.update_path = update_path
        self.cancel_path = cancel_path
        self._logger = logger or structlog.get_logger()
        if httpx.URL(base_url).scheme != "https":
            self._logger.warning("order_transmitter_insecure_base_url", base_url=base_url)
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "OrderTransmitter":
        return cls(
            base_url=settings.api_base_url,
            shop_domain=settings.shop_domain,
            auth_token=settings.auth_token,
            timeout=settings.request_timeout_seconds,
            create_path=settings.create_order_path,
            submit_path=settings.submit_order_path,
            update_path=settings.update_order_path,
            cancel_path=settings.cancel_order_path,
            **kwargs,
        )

    def __enter__(self) -> "OrderTransmitter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ---- public operations --------------------------------------------------

    def send(self, order: Order) -> RemoteOrderId:
        """Create the order on the remote service for asynchronous analysis."""
        order.validate()
        return self._post(self.create_path, order)

    def submit(self, order: Order) -> RemoteOrderId:
        """Create the order and ask for immediate analysis."""
        order.validate()
        return self._post(self.submit_path, order)

    def update(self, order: Order) -> RemoteOrderId:
        """Send changed fields of an existing order. Uses weak validation."""
        order.validate(is_weak=True)
        return self._post(self.update_path, order)

    def cancel(self, cancellation: OrderCancellation) -> RemoteOrderId:
        cancellation.validate()
        return self._post(self.cancel_path, cancellation)

    # ---- internals ----------------------------------------------------------

    def _post(self, path: str, payload: BaseOrder) -> RemoteOrderId:
        body = payload.to_json()
        headers = {
            "Content-Type": "application/json",
            SHOP_DOMAIN_HEADER: self.shop_domain,
            SIGNATURE_HEADER: sign(body, self._auth_token),
        }
        log = self._logger.bind(path=path, merchant_order_id=payload.merchant_order_id)

        try:
            response = self._client.post(path, content=body, headers=headers)
        except httpx.TimeoutException as exc:
            log.warning("order_transmission_timeout", error=str(exc))
            raise TransmissionError(
                TransmissionErrorKind.TRANSIENT, f"Request to {path} timed out"
            ) from exc
        except httpx.TransportError as exc:
            log.warning("order_transmission_network_error", error=str(exc))
            raise TransmissionError(
                TransmissionErrorKind.TRANSIENT, f"Network error calling {path}: {exc}"
            ) from exc

        return self._interpret(response, log)

    def _interpret(self, response: httpx.Response, log: Any) -> RemoteOrderId:
        status = response.status_code
        text = response.text

        if response.is_success:
            try:
                parsed = OrderSubmissionResponse.model_validate_json(response.content)
            except pydantic.ValidationError as exc:
                log.warning("order_response_unparseable", status_code=status)
                raise TransmissionError(
                    TransmissionErrorKind.TRANSIENT,
                    "Remote service returned an unreadable success response",
                    status_code=status,
                    body=text,
                ) from exc
            remote_id = str(parsed.order.id)
            log.info(
                "order_transmitted",
                status_code=status,
                remote_order_id=remote_id,
                remote_status=parsed.order.status,
            )
            return remote_id

        if response.is_client_error:
            message = _error_message(response) or f"Remote service rejected the request ({status})"
            log.warning("order_rejected", status_code=status, body=text[:_LOG_BODY_LIMIT])
            raise TransmissionError(
                TransmissionErrorKind.BAD_REQUEST, message, status_code=status, body=text
            )

        log.warning("order_transmission_failed", status_code=status, body=text[:_LOG_BODY_LIMIT])
        raise TransmissionError(
            TransmissionErrorKind.TRANSIENT,
            f"Remote service unavailable ({status})",
            status_code=status,
            body=text,
        )


def _error_message(response: httpx.Response) -> str | None:
    try:
        return ErrorResponse.model_validate_json(response.content).error.message
    except pydantic.ValidationError:
        return None
