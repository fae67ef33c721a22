"""HTTP tests for POST /api/generate-metadata and the health probe."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from backend_ai.agents.metadata_agent import MetadataAgent
from backend_ai.errors import SchemaViolation
from backend_api.core.config import settings
from backend_api.main import app
from backend_api.services.metadata_service import get_metadata_agent, metadata_agent_provider
from tests.conftest import FakeCapability


@pytest.fixture
def client_for():
    """Build a TestClient whose endpoint uses the given capability."""

    def _build(capability):
        agent = MetadataAgent(capability)
        app.dependency_overrides[metadata_agent_provider] = lambda: (lambda: agent)
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


class TestMissingDataUri:
    @pytest.mark.parametrize("body", [{}, {"artworkDataUri": ""}, {"artworkDataUri": None}, {"other": "x"}])
    def test_returns_400_without_calling_provider(self, client_for, fake_capability, body):
        client = client_for(fake_capability)
        resp = client.post("/api/generate-metadata", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Artwork data URI is required"}
        assert fake_capability.calls == []

    def test_non_json_body(self, client_for, fake_capability):
        client = client_for(fake_capability)
        resp = client.post(
            "/api/generate-metadata",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Artwork data URI is required"}

    def test_malformed_image_is_client_error(self, client_for, fake_capability):
        client = client_for(fake_capability)
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": "hello"})
        assert resp.status_code == 400
        assert "error" in resp.json()
        assert fake_capability.calls == []

    def test_decompression_bomb_is_client_error(self, client_for, fake_capability, png_data_uri, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 16)
        client = client_for(fake_capability)
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Artwork is too large to decode"}
        assert fake_capability.calls == []


class TestMisconfiguredProvider:
    """An unknown AI_PROVIDER only surfaces once a request gets past validation."""

    @pytest.fixture(autouse=True)
    def bad_provider(self, monkeypatch):
        monkeypatch.setattr(settings, "AI_PROVIDER", "nonexistent")
        get_metadata_agent.cache_clear()
        yield
        get_metadata_agent.cache_clear()

    def test_missing_data_uri_still_400(self):
        resp = TestClient(app).post("/api/generate-metadata", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Artwork data URI is required"}

    def test_valid_request_gets_generic_failure(self, png_data_uri):
        resp = TestClient(app).post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 500
        assert resp.json() == {"status": "error", "message": "Failed to generate metadata"}


class TestGenerate:
    def test_success_envelope(self, client_for, fake_capability, png_data_uri, valid_payload):
        client = client_for(fake_capability)
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 200
        assert resp.json() == {"status": "success", "data": valid_payload}

    def test_unknown_category_discarded(self, client_for, png_data_uri, valid_payload):
        valid_payload["categories"] = ["Drawing", "Sculpture"]
        client = client_for(FakeCapability(valid_payload))
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 200
        assert resp.json()["data"]["categories"] == ["Drawing"]

    def test_provider_outage(self, client_for, outage_capability, png_data_uri):
        client = client_for(outage_capability)
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 500
        body = resp.json()
        assert body["status"] == "error"
        assert body["message"]
        assert "Traceback" not in body["message"]

    def test_schema_violation(self, client_for, png_data_uri, valid_payload):
        valid_payload["title"] = "t" * 101
        client = client_for(FakeCapability(valid_payload))
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 500
        assert resp.json()["status"] == "error"
        assert "title" in resp.json()["message"]

    def test_unexpected_error_is_generic(self, client_for, png_data_uri):
        client = client_for(FakeCapability(error=RuntimeError("secret internals")))
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 500
        assert resp.json() == {"status": "error", "message": "Failed to generate metadata"}

    def test_production_hides_failure_cause(self, client_for, png_data_uri, monkeypatch):
        monkeypatch.setattr(settings, "ENV", "production")
        client = client_for(FakeCapability(error=SchemaViolation("title too long")))
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 500
        assert resp.json() == {"status": "error", "message": "Failed to generate metadata"}

    def test_timeout_is_server_error(self, client_for, png_data_uri, monkeypatch):
        import time

        class SlowCapability(FakeCapability):
            def generate(self, image, instructions, output_schema):
                time.sleep(0.5)
                return super().generate(image, instructions, output_schema)

        monkeypatch.setattr(settings, "GENERATION_TIMEOUT", 0.05)
        client = client_for(SlowCapability(payload={}))
        resp = client.post("/api/generate-metadata", json={"artworkDataUri": png_data_uri})
        assert resp.status_code == 500
        assert "timed out" in resp.json()["message"]


class TestHealth:
    def test_liveness(self):
        resp = TestClient(app).get("/")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["message"]
        assert body["timestamp"]
