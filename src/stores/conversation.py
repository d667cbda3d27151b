"""Conversation session store.

Keeps the ordered message log for one chat session. A submitted question
appears in the log immediately, before the backend answers; if the call
fails, exactly that message is retracted again, located by its id rather
than its position so overlapping submissions cannot remove each other's
messages.
"""

import logging
import time

from src.client.api import QueryApi
from src.models.schemas import (
    AssistantMessage,
    ChatMessage,
    QueryHistoryRecord,
    QueryRequest,
    QueryResponse,
    UserMessage,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def history_to_messages(records: list[QueryHistoryRecord]) -> list[ChatMessage]:
    """Expand newest-first history records into an oldest-first message log.

    Each record becomes a user message and an assistant message that share
    the record's query time as timestamp.
    """
    messages: list[ChatMessage] = []
    for record in reversed(records):
        timestamp = round(record.query_time.timestamp() * 1000)
        messages.append(UserMessage(content=record.query_text, timestamp=timestamp))
        messages.append(
            AssistantMessage(
                content=record.answer,
                timestamp=timestamp,
                response_time_ms=record.response_time_ms,
            )
        )
    return messages


class ConversationStore:
    """Manages the message log of a chat session."""

    def __init__(self, api: QueryApi, top_k: int = 5, history_size: int = 50) -> None:
        self._api = api
        self._top_k = top_k
        self._history_size = history_size
        self._messages: list[ChatMessage] = []
        self._current_query = ""
        self._in_flight = 0

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def current_query(self) -> str:
        return self._current_query

    @property
    def loading(self) -> bool:
        """True while a submission or history fetch is outstanding."""
        return self._in_flight > 0

    async def submit_query(self, query: str, top_k: int | None = None) -> QueryResponse:
        """Ask a question, showing it in the log before the answer arrives.

        Args:
            query: The question text.
            top_k: Chunks to retrieve, defaults to the store's setting.

        Returns:
            The backend response.

        Raises:
            pydantic.ValidationError: Blank query; nothing is appended.
            ApiError: The call failed; the question is retracted again.
        """
        request = QueryRequest(query=query, top_k=top_k or self._top_k)

        question = UserMessage(content=query, timestamp=_now_ms())
        self._messages.append(question)
        self._current_query = query
        self._in_flight += 1

        answered = False
        try:
            response = await self._api.submit(request)
            answered = True
        finally:
            self._in_flight -= 1
            self._current_query = ""
            if not answered:
                self._retract(question.id)

        position = self._position(question.id)
        if position is None:
            logger.info("Question was cleared before its answer arrived, dropping answer")
            return response

        self._messages.insert(
            position + 1,
            AssistantMessage(
                content=response.answer,
                references=response.references,
                timestamp=_now_ms(),
                response_time_ms=response.response_time_ms,
            ),
        )
        return response

    def _position(self, message_id: str) -> int | None:
        for index, message in enumerate(self._messages):
            if message.id == message_id:
                return index
        return None

    def _retract(self, message_id: str) -> None:
        position = self._position(message_id)
        if position is None:
            # Cleared while the call was outstanding
            logger.debug(f"Message {message_id} already gone, nothing to retract")
            return
        del self._messages[position]
        logger.info("Retracted unanswered question after failed submission")

    async def fetch_history(self) -> None:
        """Replace the log with the most recent backend history."""
        self._in_flight += 1
        try:
            result = await self._api.history(page=1, size=self._history_size)
        finally:
            self._in_flight -= 1

        self._messages = history_to_messages(result.records)
        logger.info(f"Restored {len(result.records)} history records")

    def clear_history(self) -> None:
        """Empty the local log. The backend history is untouched."""
        self._messages = []
        self._current_query = ""
