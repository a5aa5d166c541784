"""Error taxonomy for the discovery service.

Every failure is described by an :class:`ErrorKind` plus an optional upstream
status code. The kind is decided where the failure happens (the limiter, the
extractor, or the Gemini transport) and routes only map it to an HTTP reply.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


QUOTA_MARKERS = ("429", "quota", "resource_exhausted", "too many requests")

QUOTA_GUIDANCE = (
    "The AI provider's usage quota has been exhausted. "
    "Wait a minute and try again, or check the billing plan of the configured Gemini API key."
)


class ErrorKind(str, Enum):
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_RESPONSE_SHAPE = "invalid_response_shape"
    TRANSPORT_ERROR = "transport_error"
    INVALID_REQUEST = "invalid_request"


class DiscoveryError(Exception):
    kind: ErrorKind = ErrorKind.TRANSPORT_ERROR
    http_status: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        # Status reported by the upstream service, when there is one.
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class RateLimitExceeded(DiscoveryError):
    """Raised when the local sliding window is full."""

    kind = ErrorKind.RATE_LIMIT_EXCEEDED
    http_status = 429


class QuotaExceeded(DiscoveryError):
    """Raised when the upstream provider reports exhausted quota."""

    kind = ErrorKind.QUOTA_EXCEEDED
    http_status = 503

    @property
    def suggestion(self) -> str:
        return QUOTA_GUIDANCE


class MalformedResponse(DiscoveryError):
    """Raised when no parseable JSON object is found in the model output."""

    kind = ErrorKind.MALFORMED_RESPONSE


class InvalidResponseShape(DiscoveryError):
    kind = ErrorKind.INVALID_RESPONSE_SHAPE


class TransportError(DiscoveryError):
    kind = ErrorKind.TRANSPORT_ERROR


class InvalidRequest(DiscoveryError):
    kind = ErrorKind.INVALID_REQUEST
    http_status = 400


def _upstream_status(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if callable(value):
            # grpc style errors expose code() rather than an attribute
            continue
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def from_upstream(exc: BaseException) -> DiscoveryError:
    """Translate an exception raised by the generation call."""
    if isinstance(exc, DiscoveryError):
        return exc

    status = _upstream_status(exc)
    message = str(exc) or exc.__class__.__name__
    lowered = message.lower()
    if status == 429 or any(marker in lowered for marker in QUOTA_MARKERS):
        return QuotaExceeded(message, status_code=status if status is not None else 429)
    return TransportError(message, status_code=status)
