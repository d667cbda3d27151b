"""NiceGUI interface - thin visualization layer over the session stores.

Responsibilities:
    - Chat message display with references and response times
    - Document upload, paging and deletion
    - Error toasts for failed backend calls

Contains no business logic. Reads store state and calls store operations.
"""

from src.ui.chat_page import register_pages
from src.ui.notifier import notify_error

__all__ = ["notify_error", "register_pages"]
