"""Exception hierarchy shared by validation, transmission, and notifications."""

from enum import StrEnum


class SDKError(Exception):
    """Base class for every error raised by the SDK."""


class ValidationRule(StrEnum):
    REQUIRED = "required"
    BAD_FORMAT = "bad_format"
    OUT_OF_RANGE = "out_of_range"


class ValidationError(SDKError, ValueError):
    """A field failed a local check. Raised before any network call."""

    rule: ValidationRule = ValidationRule.BAD_FORMAT

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class FieldMissingError(ValidationError):
    rule = ValidationRule.REQUIRED


class FieldBadFormatError(ValidationError):
    rule = ValidationRule.BAD_FORMAT


class FieldOutOfRangeError(ValidationError):
    rule = ValidationRule.OUT_OF_RANGE


class TransmissionErrorKind(StrEnum):
    BAD_REQUEST = "bad_request"
    TRANSIENT = "transient"


class TransmissionError(SDKError):
    """The remote service did not accept a request.

    ``BAD_REQUEST`` means the service rejected the data itself and resending
    it unchanged will fail again. ``TRANSIENT`` covers timeouts, network
    failures and 5xx responses; the caller may retry with backoff.
    """

    def __init__(
        self,
        kind: TransmissionErrorKind,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.body = body

    @property
    def retryable(self) -> bool:
        return self.kind == TransmissionErrorKind.TRANSIENT

    def __repr__(self) -> str:
        return (
            f"TransmissionError(kind={self.kind.value!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )


class SignatureError(SDKError):
    """An inbound message failed its authenticity check."""


class ListenerStartupError(SDKError):
    """The notification listener could not bind or start serving."""


class NotificationRetryRequested(Exception):
    """Raised by a notification handler to ask the sender to redeliver."""
