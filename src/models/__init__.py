"""Pydantic models for backend payloads and chat state.

Provides type safety and validation for everything that crosses the wire.

Models:
    - ApiEnvelope: Uniform {code, message, data, timestamp} wrapper
    - PageResult: Paginated listing
    - Document, DocumentDetail, DocumentChunk: Document inventory
    - QueryRequest, QueryResponse, ChunkReference: Question answering
    - QueryHistoryRecord: Persisted question/answer pair
    - UserMessage, AssistantMessage: Chat log entries, tagged by role
"""

from src.models.schemas import (
    ApiEnvelope,
    AssistantMessage,
    ChatMessage,
    ChunkReference,
    Document,
    DocumentChunk,
    DocumentDetail,
    MessageRole,
    PageResult,
    QueryHistoryRecord,
    QueryRequest,
    QueryResponse,
    UserMessage,
)

__all__ = [
    "ApiEnvelope",
    "AssistantMessage",
    "ChatMessage",
    "ChunkReference",
    "Document",
    "DocumentChunk",
    "DocumentDetail",
    "MessageRole",
    "PageResult",
    "QueryHistoryRecord",
    "QueryRequest",
    "QueryResponse",
    "UserMessage",
]
