"""Session state for the retrieval client.

Translates asynchronous backend calls into consistent, observable state.

Responsibilities:
    - Document inventory: upload, paginated listing, deletion
    - Conversation log: optimistic questions, rollback on failure
    - History replay from the backend query log
    - Per-session wiring without global singletons

Stores own their state; the UI only reads it and calls store operations.
"""

from src.stores.context import SessionContext, create_session_context
from src.stores.conversation import ConversationStore, history_to_messages
from src.stores.documents import DocumentStore

__all__ = [
    "ConversationStore",
    "DocumentStore",
    "SessionContext",
    "create_session_context",
    "history_to_messages",
]
