from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Generic, Literal, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that reads and writes the backend's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiEnvelope(CamelModel):
    """Uniform wrapper around every backend response.

    Attributes:
        code: Business status code, 200 means success.
        message: Human readable status message.
        data: Endpoint specific payload.
        timestamp: Server time in epoch milliseconds.
    """

    code: int
    message: str | None = None
    data: Any = None
    timestamp: int | None = None


class PageResult(CamelModel, Generic[T]):
    """One page of a paginated listing."""

    total: int = Field(ge=0)
    page: int
    size: int
    records: list[T] = Field(default_factory=list)


class Document(CamelModel):
    """An ingested source file.

    Attributes:
        id: Server-assigned identifier.
        file_name: Original file name.
        file_size: Size in bytes.
        file_type: MIME type reported by the server.
        status: Processing lifecycle tag, treated as opaque.
        upload_time: When the server accepted the upload.
        chunk_count: Number of retrievable chunks, 0 until processed.
    """

    id: int
    file_name: str
    file_size: int
    file_type: str
    status: str
    upload_time: datetime | None = None
    chunk_count: int = 0


class DocumentChunk(CamelModel):
    id: int
    chunk_index: int
    content: str
    char_count: int


class DocumentDetail(Document):
    """Document with processing details and its chunk list."""

    process_time: datetime | None = None
    error_message: str | None = None
    chunks: list[DocumentChunk] = Field(default_factory=list)


class ChunkReference(CamelModel):
    """Evidence cited by an answer.

    Attributes:
        document_id: Source document identifier.
        document_name: Source document display name.
        content: Excerpted chunk text.
        score: Relevance score, higher is more relevant.
    """

    document_id: int
    document_name: str
    content: str
    score: float


class QueryRequest(CamelModel):
    """Request payload for POST /query."""

    query: str = Field(..., min_length=1)
    top_k: int = Field(default=5, ge=1)

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: str) -> str:
        """Strip whitespace from query before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class QueryResponse(CamelModel):
    query: str
    answer: str
    references: list[ChunkReference] = Field(default_factory=list)
    response_time_ms: int


class QueryHistoryRecord(CamelModel):
    """A persisted question/answer pair from GET /query/history."""

    id: int
    query_text: str
    answer: str
    query_time: datetime
    response_time_ms: int | None = None


class MessageRole(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


def _new_message_id() -> str:
    return uuid4().hex


class UserMessage(BaseModel):
    """A question typed by the user.

    Attributes:
        id: Correlation identifier, unique within the process.
        content: The question text.
        timestamp: Epoch milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["user"] = "user"
    id: str = Field(default_factory=_new_message_id)
    content: str
    timestamp: int


class AssistantMessage(BaseModel):
    """An answer produced by the query backend.

    Attributes:
        id: Correlation identifier, unique within the process.
        content: The answer text.
        timestamp: Epoch milliseconds.
        references: Cited chunks in backend order, empty for replayed history.
        response_time_ms: Backend-reported latency.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["assistant"] = "assistant"
    id: str = Field(default_factory=_new_message_id)
    content: str
    timestamp: int
    references: list[ChunkReference] = Field(default_factory=list)
    response_time_ms: int | None = None


ChatMessage = Annotated[UserMessage | AssistantMessage, Field(discriminator="role")]
