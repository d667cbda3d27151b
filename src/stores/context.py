"""Per-session wiring of APIs and stores.

One SessionContext is built for each chat session and handed to whatever
drives it. Nothing in here is a module-level singleton, so tests can build
as many independent sessions as they need.
"""

from dataclasses import dataclass

from src.client.api import DocumentApi, QueryApi
from src.client.config import ClientConfig, get_client_config
from src.client.envelope import Notify, ResponseClassifier
from src.client.gateway import RequestGateway
from src.stores.conversation import ConversationStore
from src.stores.documents import DocumentStore


@dataclass
class SessionContext:
    """Stores of one session and the APIs backing them."""

    documents: DocumentStore
    conversation: ConversationStore
    document_api: DocumentApi
    query_api: QueryApi


def create_session_context(
    gateway: RequestGateway,
    notify: Notify,
    config: ClientConfig | None = None,
) -> SessionContext:
    """Build the stores for a new session.

    Args:
        gateway: Shared HTTP gateway.
        notify: Receives one message per failed backend call.
        config: Optional client configuration.
                Loads from environment if not provided.

    Returns:
        A fresh SessionContext with empty stores.
    """
    config = config or get_client_config()
    classifier = ResponseClassifier(notify)
    document_api = DocumentApi(gateway, classifier)
    query_api = QueryApi(gateway, classifier)
    return SessionContext(
        documents=DocumentStore(document_api, page_size=config.page_size),
        conversation=ConversationStore(
            query_api, top_k=config.top_k, history_size=config.history_size
        ),
        document_api=document_api,
        query_api=query_api,
    )
