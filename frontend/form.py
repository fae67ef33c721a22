"""
Editable listing metadata form.

Holds the user's copy of a generation result, re-validates it with the same rules
the server applies, and exports it to the clipboard. The form lives as long as its
source image: clearing the image clears every field.
"""

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional, Union

from backend_ai.errors import ValidationError
from backend_ai.schemas.metadata_schema import filter_categories, metadata_errors
from backend_ai.tools.data_uri import encode_data_uri, sniff_mime_type
from frontend.api_client import GenerationFailed, MetadataApiClient
from frontend.categories import CategorySelection
from frontend.clipboard import ClipboardError, TkClipboard
from frontend.notifications import NotificationCenter

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "Please upload an artwork image first."


class MetadataForm:
    def __init__(
        self,
        api_client: Optional[MetadataApiClient] = None,
        clipboard=None,
        notifications: Optional[NotificationCenter] = None,
    ):
        self.api_client = api_client or MetadataApiClient()
        self.clipboard = clipboard or TkClipboard()
        self.notifications = notifications or NotificationCenter()

        self.image_data_uri: Optional[str] = None
        self.image_name: Optional[str] = None
        self.error: Optional[str] = None
        self.is_loading = False
        self._flight = threading.Lock()

        self.title = ""
        self.tags = ""
        self.description = ""
        self.categories = CategorySelection()
        self._baseline = self._snapshot()

    # ------------------------------
    # State helpers
    # ------------------------------
    def _snapshot(self):
        return (self.title, self.tags, self.description, tuple(self.categories))

    def reset(self, title="", tags="", description="", categories: Iterable[str] = ()):
        """Overwrite all four fields; the new values become the pristine state."""
        self.title = title
        self.tags = tags
        self.description = description
        self.categories = CategorySelection(categories)
        self._baseline = self._snapshot()

    @property
    def is_dirty(self) -> bool:
        return self._snapshot() != self._baseline

    @property
    def errors(self) -> dict:
        return metadata_errors(self.title, self.tags, self.description, self.categories)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def can_generate(self) -> bool:
        return bool(self.image_data_uri) and not self.is_loading

    @property
    def can_export(self) -> bool:
        return self.is_valid or self.is_dirty

    # ------------------------------
    # Image
    # ------------------------------
    def set_image(self, source: Union[str, Path, bytes], name: Optional[str] = None) -> bool:
        self.error = None
        try:
            if isinstance(source, (bytes, bytearray)):
                data = bytes(source)
            else:
                data = Path(source).read_bytes()
                name = name or Path(source).name
            mime_type = sniff_mime_type(data)
        except (OSError, ValidationError) as e:
            logger.error(f"Could not load artwork: {e}")
            self.error = "Failed to load image preview."
            self.notifications.notify("Error", f"{self.error} {e}", variant="destructive")
            self.clear_image()
            return False

        self.image_data_uri = encode_data_uri(data, mime_type)
        self.image_name = name
        return True

    def clear_image(self):
        self.image_data_uri = None
        self.image_name = None
        self.reset()

    # ------------------------------
    # Generation
    # ------------------------------
    def _apply_result(self, data: dict):
        title = data.get("title")
        tags = data.get("tags")
        description = data.get("description")
        received = data.get("categories") or []
        if not all(isinstance(v, str) for v in (title, tags, description)) or not isinstance(received, list):
            raise GenerationFailed("Server returned metadata of the wrong shape")

        categories = filter_categories(received)
        if len(categories) != len(received):
            logger.warning(f"Discarded unknown categories: {[c for c in received if c not in categories]}")

        errors = metadata_errors(title, tags, description, categories)
        if errors:
            raise GenerationFailed(
                "Generated metadata breaks listing rules: "
                + " ".join(msg for msgs in errors.values() for msg in msgs)
            )
        self.reset(title, tags, description, categories)

    def generate(self) -> bool:
        """Request metadata for the current image. Only one request runs at a time."""
        if not self.image_data_uri:
            self.error = NO_IMAGE_MESSAGE
            self.notifications.notify("Error", NO_IMAGE_MESSAGE, variant="destructive")
            return False

        if not self._flight.acquire(blocking=False):
            logger.info("Generation already in progress, ignoring request")
            return False

        self.is_loading = True
        self.error = None
        try:
            data = self.api_client.generate_metadata(self.image_data_uri)
            self._apply_result(data)
        except GenerationFailed as e:
            logger.error(f"Error generating metadata: {e}")
            self.error = f"Failed to generate metadata: {str(e) or 'Unknown error'}"
            self.notifications.notify(
                "Error",
                "Could not generate metadata. Please try again.",
                variant="destructive",
            )
            return False
        finally:
            self.is_loading = False
            self._flight.release()

        self.notifications.notify("Metadata Generated", "Review and refine the generated metadata.")
        return True

    # ------------------------------
    # Export
    # ------------------------------
    def export_text(self) -> str:
        return (
            f"Title: {self.title}\n\n"
            f"Tags: {self.tags}\n\n"
            f"Description: {self.description}\n\n"
            f"Categories: {self.categories.joined()}"
        )

    def copy_to_clipboard(self) -> bool:
        try:
            self.clipboard.write(self.export_text())
        except ClipboardError as e:
            logger.error(f"Failed to copy: {e}")
            self.notifications.notify(
                "Copy Failed",
                "Could not copy metadata to clipboard.",
                variant="destructive",
            )
            return False

        self.notifications.notify("Copied to Clipboard!", "Metadata is ready to be pasted into Redbubble.")
        return True
