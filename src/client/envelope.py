"""Response envelope classification.

Every backend call ends up in exactly one of three outcomes:

- Success: HTTP succeeded and the envelope code is SUCCESS_CODE.
- BusinessError: HTTP succeeded but the envelope code is anything else.
- TransportError: HTTP failed, timed out, or never connected.

Failures are reported to the user through the notify callback once, here,
at classification time. Callers only see the raised error and must not
notify again.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from src.client.errors import BusinessError, GatewayError, TransportError
from src.models.schemas import ApiEnvelope

logger = logging.getLogger(__name__)

SUCCESS_CODE = 200

DEFAULT_BUSINESS_MESSAGE = "Request failed"
TIMEOUT_MESSAGE = "Request timed out, please try again later"
NETWORK_MESSAGE = "Network error, please try again later"

HTTP_ERROR_MESSAGES: dict[int, str] = {
    400: "Invalid request parameters",
    404: "Requested resource not found",
    413: "File too large",
    500: "Internal server error",
    502: "External service call failed",
    503: "Service temporarily unavailable",
}

Notify = Callable[[str], None]


@dataclass(frozen=True)
class Success:
    """Unwrapped payload of a successful envelope."""

    payload: Any


def classify_envelope(envelope: ApiEnvelope) -> Success | BusinessError:
    """Classify an envelope received over a successful HTTP exchange."""
    if envelope.code == SUCCESS_CODE:
        return Success(envelope.data)
    return BusinessError(envelope.message or DEFAULT_BUSINESS_MESSAGE, envelope.code)


def classify_failure(error: GatewayError) -> TransportError:
    """Classify a failed HTTP exchange.

    The message is picked by priority: the envelope message carried by the
    failed response, the status code table, the timeout message, and
    finally the generic network message.
    """
    if error.envelope is not None and error.envelope.message:
        message = error.envelope.message
    elif error.status_code in HTTP_ERROR_MESSAGES:
        message = HTTP_ERROR_MESSAGES[error.status_code]
    elif error.timed_out:
        message = TIMEOUT_MESSAGE
    else:
        message = NETWORK_MESSAGE
    return TransportError(message, status_code=error.status_code, timed_out=error.timed_out)


class ResponseClassifier:
    """Turns gateway calls into payloads or notified, raised errors."""

    def __init__(self, notify: Notify) -> None:
        self._notify = notify

    async def resolve(self, request: Awaitable[ApiEnvelope]) -> Any:
        """Await a gateway call and unwrap its payload.

        Args:
            request: Pending gateway call.

        Returns:
            The envelope's data field.

        Raises:
            BusinessError: Envelope code is not SUCCESS_CODE.
            TransportError: The HTTP exchange failed.
        """
        try:
            envelope = await request
        except GatewayError as e:
            error = classify_failure(e)
            self._report(error)
            raise error from e

        outcome = classify_envelope(envelope)
        if isinstance(outcome, BusinessError):
            self._report(outcome)
            raise outcome
        return outcome.payload

    def _report(self, error: BusinessError | TransportError) -> None:
        logger.warning(f"{type(error).__name__}: {error.message}")
        self._notify(error.message)
