"""Document inventory store.

Holds one page of the document listing plus the server-reported total.
Mutations happen only after the backend confirms them: uploads are
inserted at the front once the server returns the stored document, and
deletions drop the local entry once the server acknowledges them.
"""

import logging

from src.client.api import DocumentApi
from src.client.gateway import ProgressCallback
from src.models.schemas import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """Paginated, mutable view of uploaded documents."""

    def __init__(self, api: DocumentApi, page_size: int = 10) -> None:
        self._api = api
        self._documents: list[Document] = []
        self._current_page = 1
        self._page_size = page_size
        self._total = 0
        self._in_flight = 0

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total(self) -> int:
        return self._total

    @property
    def loading(self) -> bool:
        """True while any inventory operation is outstanding."""
        return self._in_flight > 0

    async def upload(
        self,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Document:
        """Upload a file and put the confirmed document first.

        Args:
            file_name: Name of the uploaded file.
            content: Raw file bytes.
            content_type: MIME type of the file.
            on_progress: Called with (sent_bytes, total_bytes) while uploading.

        Returns:
            The document as stored by the server.

        Raises:
            ApiError: The upload failed; the inventory is unchanged.
        """
        self._in_flight += 1
        try:
            document = await self._api.upload(file_name, content, content_type, on_progress)
        finally:
            self._in_flight -= 1

        self._documents.insert(0, document)
        self._total += 1
        logger.info(f"Uploaded document {document.id}: {document.file_name}")
        return document

    async def fetch_page(self, page: int = 1, size: int | None = None) -> None:
        """Replace the inventory with one page from the server.

        On failure the previous page stays in place.
        """
        size = size or self._page_size
        self._in_flight += 1
        try:
            result = await self._api.list(page, size)
        finally:
            self._in_flight -= 1

        self._documents = list(result.records)
        self._total = result.total
        self._current_page = page
        self._page_size = size
        logger.debug(f"Loaded document page {page} ({len(result.records)}/{result.total})")

    async def delete(self, document_id: int) -> None:
        """Delete a document, dropping it locally once the server confirms.

        The total is decremented even when the document is not on the
        current page, since it counts documents server-side.
        """
        self._in_flight += 1
        try:
            await self._api.delete(document_id)
        finally:
            self._in_flight -= 1

        remaining = [d for d in self._documents if d.id != document_id]
        if len(remaining) == len(self._documents):
            logger.debug(f"Deleted document {document_id} was not on the current page")
        self._documents = remaining
        self._total = max(self._total - 1, 0)
        logger.info(f"Deleted document {document_id}")
