"""Shared pytest fixtures for the metadata generator tests."""

from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from backend_ai.errors import GenerationUnavailable
from backend_ai.tools.generative_capability import GenerativeCapability

# ============================================================================
# Image Fixtures
# ============================================================================


def make_image_bytes(fmt: str = "PNG", size=(8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def png_data_uri(png_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode()


# ============================================================================
# Generation Fixtures
# ============================================================================


@pytest.fixture
def valid_payload() -> dict:
    """A model answer that satisfies every listing rule."""
    return {
        "title": "Crimson Sunset Over Quiet Harbor",
        "tags": "sunset, harbor, boats, red sky, seascape",
        "description": "Warm evening light spills over a sleepy harbor.",
        "categories": ["Painting & Mixed Media", "Digital Art"],
    }


class FakeCapability(GenerativeCapability):
    """Records calls; returns a canned payload or raises a canned error."""

    name = "fake"

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls = []

    def generate(self, image, instructions, output_schema):
        self.calls.append((image, instructions, output_schema))
        if self.error:
            raise self.error
        return self.payload


@pytest.fixture
def fake_capability(valid_payload: dict) -> FakeCapability:
    return FakeCapability(payload=valid_payload)


@pytest.fixture
def outage_capability() -> FakeCapability:
    return FakeCapability(error=GenerationUnavailable("Gemini request failed: 503 UNAVAILABLE"))
