"""RAG Client - session state and request orchestration for document Q&A.

Talks to a retrieval-augmented question answering backend over HTTP and
keeps conversation and document state consistent around every call.

Components:
    - client: Configuration, httpx gateway, envelope classification
    - stores: Document inventory and conversation session state
    - ui: NiceGUI pages and error notifications
    - models: Wire and chat message schemas
"""

__version__ = "0.1.0"
