"""NiceGUI pages for chatting with the knowledge base and managing documents."""

import asyncio
from datetime import datetime

from nicegui import events, ui

from src.client.config import ClientConfig
from src.client.errors import ApiError
from src.client.gateway import RequestGateway
from src.models.schemas import AssistantMessage, ChatMessage, MessageRole
from src.stores.context import create_session_context
from src.ui.notifier import notify_error


def _format_time(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%I:%M %p")


def _render_message(msg: ChatMessage) -> None:
    is_user = msg.role == MessageRole.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "bg-indigo-500 text-white" if is_user else "bg-gray-100 text-gray-800"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[70%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 rounded-2xl {bubble}"):
                if is_user:
                    ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(msg.content).classes("text-sm")
            meta = _format_time(msg.timestamp)
            if isinstance(msg, AssistantMessage) and msg.response_time_ms is not None:
                meta += f" · {msg.response_time_ms} ms"
            ui.label(meta).classes("text-[10px] text-gray-400")
            if isinstance(msg, AssistantMessage) and msg.references:
                with ui.expansion(f"{len(msg.references)} references").classes("text-xs"):
                    for ref in msg.references:
                        ui.label(f"{ref.document_name} ({ref.score:.2f})").classes(
                            "font-semibold"
                        )
                        ui.label(ref.content).classes("text-gray-600")


def register_pages(gateway: RequestGateway, config: ClientConfig) -> None:
    """Register the chat and document pages.

    Every page visit gets its own session context; the gateway is shared.
    """

    @ui.page("/")
    async def chat_page() -> None:
        """Main chat page."""
        context = create_session_context(gateway, notify_error, config)
        conversation = context.conversation

        @ui.refreshable
        def message_list() -> None:
            if not conversation.messages:
                with ui.column().classes("w-full h-64 items-center justify-center"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Ask a question about your documents").classes(
                        "text-lg text-gray-400"
                    )
                return
            for msg in conversation.messages:
                _render_message(msg)
            if conversation.loading:
                ui.spinner("dots").classes("text-indigo-500")

        async def send_message() -> None:
            text = input_field.value.strip()
            if not text or conversation.loading:
                return
            input_field.value = ""
            send_btn.disable()

            submission = asyncio.ensure_future(conversation.submit_query(text))
            # Let the question land in the log before the backend answers
            await asyncio.sleep(0)
            message_list.refresh()
            try:
                await submission
            except ApiError:
                pass  # already shown as a toast
            finally:
                send_btn.enable()
                message_list.refresh()

        async def load_history() -> None:
            try:
                await conversation.fetch_history()
            except ApiError:
                return
            message_list.refresh()

        def clear_chat() -> None:
            conversation.clear_history()
            message_list.refresh()

        with ui.column().classes("w-full max-w-3xl mx-auto p-4 gap-4"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("RAG Assistant").classes("text-lg font-semibold")
                with ui.row().classes("gap-2"):
                    ui.button(icon="history", on_click=load_history).props("flat round")
                    ui.button(icon="delete_sweep", on_click=clear_chat).props("flat round")
                    ui.button(icon="folder", on_click=lambda: ui.navigate.to("/documents")).props(
                        "flat round"
                    )

            with ui.scroll_area().classes("w-full h-[65vh] bg-gray-50 rounded-lg"):
                with ui.column().classes("w-full p-4 gap-4"):
                    message_list()

            with ui.row().classes("w-full gap-3 items-end"):
                input_field = (
                    ui.textarea(placeholder="Ask a question...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("round")

        ui.timer(0.1, load_history, once=True)

    @ui.page("/documents")
    async def documents_page() -> None:
        """Document inventory page."""
        context = create_session_context(gateway, notify_error, config)
        inventory = context.documents

        @ui.refreshable
        def document_list() -> None:
            if not inventory.documents:
                ui.label("No documents uploaded yet").classes("text-gray-400")
            for doc in inventory.documents:
                with ui.row().classes("w-full items-center justify-between border-b py-2"):
                    with ui.column().classes("gap-0"):
                        ui.label(doc.file_name).classes("font-medium")
                        ui.label(
                            f"{doc.status} · {doc.chunk_count} chunks · {doc.file_type}"
                        ).classes("text-xs text-gray-500")
                    ui.button(
                        icon="delete",
                        on_click=lambda _, doc_id=doc.id: delete_document(doc_id),
                    ).props("flat round color=negative")
            pages = max((inventory.total + inventory.page_size - 1) // inventory.page_size, 1)
            with ui.row().classes("items-center gap-2"):
                ui.button(
                    icon="chevron_left",
                    on_click=lambda: load_page(inventory.current_page - 1),
                ).props("flat round").set_enabled(inventory.current_page > 1)
                ui.label(f"Page {inventory.current_page} of {pages} ({inventory.total} total)")
                ui.button(
                    icon="chevron_right",
                    on_click=lambda: load_page(inventory.current_page + 1),
                ).props("flat round").set_enabled(inventory.current_page < pages)

        async def load_page(page: int) -> None:
            try:
                await inventory.fetch_page(page)
            except ApiError:
                return
            document_list.refresh()

        async def delete_document(document_id: int) -> None:
            try:
                await inventory.delete(document_id)
            except ApiError:
                return
            document_list.refresh()

        async def handle_upload(e: events.UploadEventArguments) -> None:
            content = await e.file.read()
            try:
                document = await inventory.upload(e.file.name, content, e.file.content_type)
            except ApiError:
                return
            ui.notify(f"Uploaded {document.file_name}", type="positive")
            document_list.refresh()

        with ui.column().classes("w-full max-w-3xl mx-auto p-4 gap-4"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Documents").classes("text-lg font-semibold")
                ui.button(icon="chat", on_click=lambda: ui.navigate.to("/")).props("flat round")
            ui.upload(on_upload=handle_upload, auto_upload=True).props(
                "accept=.pdf,.txt,.md,.docx"
            ).classes("w-full")
            document_list()

        ui.timer(0.1, lambda: load_page(1), once=True)
