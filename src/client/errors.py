"""Error taxonomy for backend calls."""

from src.models.schemas import ApiEnvelope


class GatewayError(Exception):
    """Raised by the gateway when the HTTP exchange itself failed.

    Attributes:
        status_code: HTTP status, None when no response arrived.
        envelope: Envelope carried by the failed response, if any.
        timed_out: Whether the client-side timeout fired.
    """

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        envelope: ApiEnvelope | None = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.envelope = envelope
        self.timed_out = timed_out


class ApiError(Exception):
    """Base for classified failures surfaced to stores and callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BusinessError(ApiError):
    """HTTP succeeded but the envelope code is not the success sentinel."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


class TransportError(ApiError):
    """The HTTP exchange failed, including timeouts."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.timed_out = timed_out
