"""Unit tests for ClientConfig.

Tests environment defaults, validation and token lookup.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.client.config import ClientConfig, get_client_config


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_defaults(self) -> None:
        """Config uses sensible defaults when nothing is overridden."""
        with patch.dict("os.environ", {}, clear=True):
            config = ClientConfig()

        assert config.base_url == "http://localhost:8080"
        assert config.api_prefix == "/api"
        assert config.timeout == 30.0
        assert config.top_k == 5
        assert config.history_size == 50
        assert config.page_size == 10
        assert config.api_token is None

    def test_api_url_joins_base_and_prefix(self) -> None:
        config = ClientConfig(base_url="https://rag.example.com/", api_prefix="api/")

        assert config.api_url == "https://rag.example.com/api"

    def test_empty_prefix(self) -> None:
        """An empty prefix targets the backend root."""
        config = ClientConfig(base_url="http://localhost:9000", api_prefix="/")

        assert config.api_url == "http://localhost:9000"

    def test_rejects_base_url_without_scheme(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(base_url="localhost:8080")

        assert "http://" in str(exc_info.value)

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(timeout=0)

        assert "timeout" in str(exc_info.value).lower()

    def test_rejects_top_k_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(top_k=0)
        with pytest.raises(ValidationError):
            ClientConfig(top_k=101)

    def test_rejects_history_size_above_backend_limit(self) -> None:
        """Backend pages are capped at 100 records."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(history_size=500)

        assert "history_size" in str(exc_info.value)


class TestReadToken:
    """Tests for bearer token lookup."""

    def test_explicit_token_wins(self, tmp_path: Path) -> None:
        token_file = tmp_path / "token"
        token_file.write_text("from-file", encoding="utf-8")
        config = ClientConfig(api_token="explicit", token_file=token_file)

        assert config.read_token() == "explicit"

    def test_token_file_is_stripped(self, tmp_path: Path) -> None:
        token_file = tmp_path / "token"
        token_file.write_text("  abc123\n", encoding="utf-8")
        config = ClientConfig(api_token=None, token_file=token_file)

        assert config.read_token() == "abc123"

    def test_missing_token_file(self, tmp_path: Path) -> None:
        config = ClientConfig(api_token=None, token_file=tmp_path / "missing")

        assert config.read_token() is None

    def test_blank_token_file(self, tmp_path: Path) -> None:
        token_file = tmp_path / "token"
        token_file.write_text("\n", encoding="utf-8")
        config = ClientConfig(api_token=None, token_file=token_file)

        assert config.read_token() is None


class TestGetClientConfig:
    """Tests for get_client_config factory function."""

    def test_reads_environment(self) -> None:
        env = {
            "API_BASE_URL": "http://rag.internal:9090",
            "API_TIMEOUT": "12.5",
            "RAG_API_TOKEN": "env-token",
            "RAG_TOP_K": "8",
            "RAG_PAGE_SIZE": "25",
        }
        with patch.dict("os.environ", env, clear=True):
            config = get_client_config()

        assert config.api_url == "http://rag.internal:9090/api"
        assert config.timeout == 12.5
        assert config.read_token() == "env-token"
        assert config.top_k == 8
        assert config.page_size == 25

    def test_empty_token_env_means_no_token(self, tmp_path: Path) -> None:
        env = {"RAG_API_TOKEN": "", "RAG_TOKEN_FILE": str(tmp_path / "none")}
        with patch.dict("os.environ", env, clear=True):
            config = get_client_config()

        assert config.read_token() is None
