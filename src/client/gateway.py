"""HTTP gateway to the retrieval backend.

Thin wrapper over httpx.AsyncClient. Every successful exchange yields the
parsed response envelope; every failed exchange raises GatewayError carrying
whatever the classifier needs (HTTP status, envelope, timeout flag).
Business-level codes inside the envelope are not inspected here.
"""

import io
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from src.client.config import ClientConfig, get_client_config
from src.client.errors import GatewayError
from src.models.schemas import ApiEnvelope

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class _ProgressReader(io.BytesIO):
    """In-memory file that reports how much of it has been read."""

    def __init__(self, content: bytes, on_progress: ProgressCallback) -> None:
        super().__init__(content)
        self._total = len(content)
        self._on_progress = on_progress

    def read(self, size: int | None = -1) -> bytes:
        chunk = super().read(size)
        if chunk:
            self._on_progress(self.tell(), self._total)
        return chunk


def _parse_envelope(response: httpx.Response) -> ApiEnvelope | None:
    try:
        return ApiEnvelope.model_validate(response.json())
    except (ValueError, ValidationError):
        return None


class RequestGateway:
    """Async HTTP client bound to the backend API prefix.

    Attaches the locally stored bearer token to every request and
    translates httpx failures into GatewayError.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config or get_client_config()
        self._client = httpx.AsyncClient(
            base_url=self._config.api_url,
            timeout=self._config.timeout,
            transport=transport,
            event_hooks={"request": [self._attach_token]},
        )

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self._config.read_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def __aenter__(self) -> "RequestGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs: Any) -> ApiEnvelope:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out: {e}")
            raise GatewayError(f"Timed out: {e}", timed_out=True) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"{method} {path} failed with HTTP {status_code}")
            raise GatewayError(
                f"HTTP {status_code}",
                status_code=status_code,
                envelope=_parse_envelope(e.response),
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} connection failed: {e}")
            raise GatewayError(f"Connection failed: {e}") from e

        envelope = _parse_envelope(response)
        if envelope is None:
            logger.warning(f"{method} {path} returned a body that is not an envelope")
            raise GatewayError(
                "Malformed response envelope", status_code=response.status_code
            )
        return envelope

    async def upload(
        self,
        path: str,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ApiEnvelope:
        """POST a file as multipart/form-data under the ``file`` field.

        Args:
            path: Endpoint path relative to the API prefix.
            file_name: File name sent with the part.
            content: Raw file bytes.
            content_type: MIME type of the part.
            on_progress: Called with (sent_bytes, total_bytes) while streaming.
        """
        body: bytes | io.BytesIO = content
        if on_progress is not None:
            body = _ProgressReader(content, on_progress)
        part = (file_name, body, content_type or "application/octet-stream")
        return await self._send("POST", path, files={"file": part})

    async def get(self, path: str, params: dict[str, Any] | None = None) -> ApiEnvelope:
        return await self._send("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> ApiEnvelope:
        return await self._send("POST", path, json=json)

    async def delete(self, path: str) -> ApiEnvelope:
        return await self._send("DELETE", path)
