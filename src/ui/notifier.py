"""User notification sink backed by NiceGUI toasts."""

from nicegui import ui


def notify_error(message: str) -> None:
    """Show a transient error toast in the current client."""
    ui.notify(message, type="negative")
