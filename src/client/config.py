"""Client configuration with environment variable loading.

Pydantic-based configuration for the backend gateway and the stores.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for talking to the retrieval backend.

    Attributes:
        base_url: Backend origin, without the API prefix.
        api_prefix: Path prefix every endpoint lives under.
        timeout: Request timeout in seconds.
        api_token: Bearer token, takes precedence over token_file.
        token_file: Local credential file holding a bearer token.
        top_k: Default number of chunks retrieved per query.
        history_size: Number of history records replayed into a session.
        page_size: Default document page size.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8080"),
        description="Backend origin",
    )
    api_prefix: str = Field(
        default_factory=lambda: os.getenv("API_PREFIX", "/api"),
        description="Path prefix for all endpoints",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("API_TIMEOUT", "30")),
        gt=0.0,
        description="Request timeout in seconds",
    )
    api_token: str | None = Field(
        default_factory=lambda: os.getenv("RAG_API_TOKEN") or None,
        description="Bearer token for the backend",
    )
    token_file: Path = Field(
        default_factory=lambda: Path(
            os.getenv("RAG_TOKEN_FILE", "~/.rag-client/token")
        ).expanduser(),
        description="File holding a locally stored bearer token",
    )
    top_k: int = Field(
        default_factory=lambda: int(os.getenv("RAG_TOP_K", "5")),
        ge=1,
        le=100,
        description="Chunks retrieved per query",
    )
    history_size: int = Field(
        default_factory=lambda: int(os.getenv("RAG_HISTORY_SIZE", "50")),
        ge=1,
        le=100,
        description="History records replayed into a session",
    )
    page_size: int = Field(
        default_factory=lambda: int(os.getenv("RAG_PAGE_SIZE", "10")),
        ge=1,
        le=100,
        description="Default document page size",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) origin and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix has a single leading slash and no trailing one."""
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @property
    def api_url(self) -> str:
        return f"{self.base_url}{self.api_prefix}"

    def read_token(self) -> str | None:
        """Return the bearer token, if one is stored locally.

        Returns:
            The explicit token, else the stripped token file content, else None.
        """
        if self.api_token:
            return self.api_token
        try:
            token = self.token_file.read_text(encoding="utf-8").strip()
        except (FileNotFoundError, IsADirectoryError, PermissionError):
            return None
        return token or None


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is out of range.
    """
    return ClientConfig()
