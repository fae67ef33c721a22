import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class GenerationFailed(Exception):
    """The server could not produce metadata (or could not be reached)."""


class MetadataApiClient:
    """Thin client for POST /api/generate-metadata."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: Optional[float] = 120,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate_metadata(self, artwork_data_uri: str) -> dict:
        """Return the `data` object of a successful response, or raise GenerationFailed."""
        url = f"{self.base_url}/api/generate-metadata"
        try:
            resp = self.session.post(
                url,
                json={"artworkDataUri": artwork_data_uri},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Metadata request failed: {e}")
            raise GenerationFailed(f"Could not reach the metadata service: {type(e).__name__}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code == 200 and body.get("status") == "success" and isinstance(body.get("data"), dict):
            return body["data"]

        message = body.get("message") or body.get("error") or f"HTTP {resp.status_code}"
        logger.error(f"Metadata generation failed ({resp.status_code}): {message}")
        raise GenerationFailed(message)
