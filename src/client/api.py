"""Typed wrappers for the document and query endpoints.

Each method sends one request through the gateway, lets the classifier
unwrap the envelope, and validates the payload into a model.
"""

from src.client.envelope import ResponseClassifier
from src.client.gateway import ProgressCallback, RequestGateway
from src.models.schemas import (
    Document,
    DocumentDetail,
    PageResult,
    QueryHistoryRecord,
    QueryRequest,
    QueryResponse,
)


class DocumentApi:
    """Endpoints under /documents."""

    def __init__(self, gateway: RequestGateway, classifier: ResponseClassifier) -> None:
        self._gateway = gateway
        self._classifier = classifier

    async def upload(
        self,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Document:
        """POST /documents (multipart)."""
        payload = await self._classifier.resolve(
            self._gateway.upload(
                "/documents", file_name, content, content_type, on_progress
            )
        )
        return Document.model_validate(payload)

    async def list(self, page: int = 1, size: int = 10) -> PageResult[Document]:
        """GET /documents?page&size."""
        payload = await self._classifier.resolve(
            self._gateway.get("/documents", params={"page": page, "size": size})
        )
        return PageResult[Document].model_validate(payload)

    async def delete(self, document_id: int) -> None:
        """DELETE /documents/{id}."""
        await self._classifier.resolve(self._gateway.delete(f"/documents/{document_id}"))

    async def get_detail(self, document_id: int) -> DocumentDetail:
        """GET /documents/{id}, including the chunk list."""
        payload = await self._classifier.resolve(
            self._gateway.get(f"/documents/{document_id}")
        )
        return DocumentDetail.model_validate(payload)


class QueryApi:
    """Endpoints under /query."""

    def __init__(self, gateway: RequestGateway, classifier: ResponseClassifier) -> None:
        self._gateway = gateway
        self._classifier = classifier

    async def submit(self, request: QueryRequest) -> QueryResponse:
        """POST /query with {query, topK}."""
        payload = await self._classifier.resolve(
            self._gateway.post("/query", json=request.model_dump(by_alias=True))
        )
        return QueryResponse.model_validate(payload)

    async def history(self, page: int = 1, size: int = 20) -> PageResult[QueryHistoryRecord]:
        """GET /query/history?page&size, newest first."""
        payload = await self._classifier.resolve(
            self._gateway.get("/query/history", params={"page": page, "size": size})
        )
        return PageResult[QueryHistoryRecord].model_validate(payload)
