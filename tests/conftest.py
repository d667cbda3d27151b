"""Pytest fixtures and shared test configuration.

Provides an in-memory backend and a fully wired client session.

Fixtures:
    - backend: Mutable state of the fake retrieval backend
    - config: Client configuration pointing at the fake backend
    - gateway: RequestGateway talking to the backend through ASGITransport
    - notifications: Every message passed to the notify callback
    - session: SessionContext built on top of the gateway
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from fastapi import APIRouter, FastAPI, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from src.client.config import ClientConfig
from src.client.gateway import RequestGateway
from src.stores.context import SessionContext, create_session_context

SERVER_TIMESTAMP = 1714557600000


def envelope(data: Any = None, code: int = 200, message: str = "success") -> dict[str, Any]:
    """Build a backend response envelope."""
    return {"code": code, "message": message, "data": data, "timestamp": SERVER_TIMESTAMP}


@dataclass
class FakeBackend:
    """State of the in-memory backend.

    Attributes:
        documents: Stored documents, newest first.
        history: Query history records, newest first.
        fail_next: (HTTP status, JSON body or None) returned for the next request.
        requests: (method, path) of every request received.
        headers: Headers of the most recent request.
        query_bodies: JSON bodies received by POST /api/query.
    """

    documents: list[dict[str, Any]] = field(default_factory=list)
    history: list[dict[str, Any]] = field(default_factory=list)
    fail_next: tuple[int, dict[str, Any] | None] | None = None
    requests: list[tuple[str, str]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    query_bodies: list[dict[str, Any]] = field(default_factory=list)
    next_id: int = 1

    def add_document(self, file_name: str, file_size: int = 1024) -> dict[str, Any]:
        doc = {
            "id": self.next_id,
            "fileName": file_name,
            "fileSize": file_size,
            "fileType": "application/pdf",
            "status": "PROCESSING",
            "uploadTime": "2024-05-01T10:00:00",
            "chunkCount": 0,
        }
        self.next_id += 1
        self.documents.insert(0, doc)
        return doc

    def add_history(self, query: str, answer: str, query_time: str, response_time_ms: int) -> None:
        self.history.insert(
            0,
            {
                "id": len(self.history) + 1,
                "queryText": query,
                "answer": answer,
                "queryTime": query_time,
                "responseTimeMs": response_time_ms,
            },
        )


def _page(items: list[dict[str, Any]], page: int, size: int) -> dict[str, Any]:
    start = (page - 1) * size
    return {"total": len(items), "page": page, "size": size, "records": items[start : start + size]}


def create_fake_backend(state: FakeBackend) -> FastAPI:
    """Create a FastAPI app speaking the backend's envelope protocol."""
    app = FastAPI()
    router = APIRouter(prefix="/api")

    @app.middleware("http")
    async def record_and_fail(request: Request, call_next):
        state.requests.append((request.method, request.url.path))
        state.headers = dict(request.headers)
        if state.fail_next is not None:
            status_code, body = state.fail_next
            state.fail_next = None
            if body is None:
                return Response(status_code=status_code)
            return JSONResponse(body, status_code=status_code)
        return await call_next(request)

    @router.post("/documents")
    async def upload(file: UploadFile) -> dict[str, Any]:
        content = await file.read()
        return envelope(state.add_document(file.filename or "unnamed", len(content)))

    @router.get("/documents")
    async def list_documents(page: int = 1, size: int = 10) -> dict[str, Any]:
        return envelope(_page(state.documents, page, size))

    @router.delete("/documents/{document_id}")
    async def delete_document(document_id: int):
        remaining = [d for d in state.documents if d["id"] != document_id]
        if len(remaining) == len(state.documents):
            return JSONResponse(envelope(code=404, message="Document not found"), status_code=404)
        state.documents = remaining
        return envelope()

    @router.get("/documents/{document_id}")
    async def document_detail(document_id: int):
        for doc in state.documents:
            if doc["id"] == document_id:
                chunks = [{"id": 1, "chunkIndex": 0, "content": "First chunk", "charCount": 11}]
                detail = {**doc, "processTime": None, "errorMessage": None, "chunks": chunks}
                return envelope(detail)
        return JSONResponse(envelope(code=404, message="Document not found"), status_code=404)

    @router.post("/query")
    async def query(request: Request) -> dict[str, Any]:
        body = await request.json()
        state.query_bodies.append(body)
        answer = f"Answer to {body['query']}"
        state.add_history(body["query"], answer, "2024-05-01T10:00:00Z", 842)
        return envelope(
            {
                "query": body["query"],
                "answer": answer,
                "references": [
                    {"documentId": 1, "documentName": "doc.pdf", "content": "...", "score": 0.9}
                ],
                "responseTimeMs": 842,
            }
        )

    @router.get("/query/history")
    async def history(page: int = 1, size: int = 20) -> dict[str, Any]:
        return envelope(_page(state.history, page, size))

    app.include_router(router)
    return app


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def config() -> ClientConfig:
    """Client configuration pointing at the fake backend."""
    return ClientConfig(base_url="http://test", api_token="test-token")


@pytest.fixture
async def gateway(backend: FakeBackend, config: ClientConfig) -> AsyncGenerator[RequestGateway]:
    """Create a gateway wired to the fake backend.

    Yields:
        RequestGateway using httpx.ASGITransport.
    """
    transport = httpx.ASGITransport(app=create_fake_backend(backend))
    async with RequestGateway(config, transport=transport) as gw:
        yield gw


@pytest.fixture
def notifications() -> list[str]:
    return []


@pytest.fixture
def session(
    gateway: RequestGateway, notifications: list[str], config: ClientConfig
) -> SessionContext:
    return create_session_context(gateway, notifications.append, config)
