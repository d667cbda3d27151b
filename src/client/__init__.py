"""Backend access layer for the retrieval client.

Handles configuration, HTTP transport and response classification.

Responsibilities:
    - Client configuration from environment variables
    - httpx gateway with bearer token injection and timeouts
    - Envelope classification into success, business and transport errors
    - One-time user notification for every failed call
    - Typed document and query endpoint wrappers

Keeps all HTTP details out of the stores.
"""

from src.client.api import DocumentApi, QueryApi
from src.client.config import ClientConfig, get_client_config
from src.client.envelope import ResponseClassifier
from src.client.errors import ApiError, BusinessError, GatewayError, TransportError
from src.client.gateway import RequestGateway

__all__ = [
    "ApiError",
    "BusinessError",
    "ClientConfig",
    "DocumentApi",
    "GatewayError",
    "QueryApi",
    "RequestGateway",
    "ResponseClassifier",
    "TransportError",
    "get_client_config",
]
