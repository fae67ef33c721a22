import logging

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Writing to the system clipboard failed (no display, permission denied...)."""


class TkClipboard:
    """System clipboard through a hidden Tk root."""

    def write(self, text: str):
        try:
            import tkinter as tk
        except ImportError as e:
            raise ClipboardError("Clipboard unavailable: tkinter is not installed") from e

        try:
            root = tk.Tk()
        except tk.TclError as e:
            raise ClipboardError(f"Clipboard unavailable: {e}") from e
        try:
            root.withdraw()
            root.clipboard_clear()
            root.clipboard_append(text)
            # keep the content after the root goes away
            root.update()
        except tk.TclError as e:
            raise ClipboardError(f"Could not copy to clipboard: {e}") from e
        finally:
            root.destroy()
        logger.debug("Copied %d characters to clipboard", len(text))
