from pydantic import BaseModel
from typing import Literal

from backend_ai.schemas.metadata_schema import MetadataOutput


class GenerateMetadataSuccess(BaseModel):
    status: Literal["success"] = "success"
    data: MetadataOutput


class GenerateMetadataFailure(BaseModel):
    status: Literal["error"] = "error"
    message: str


class RequestError(BaseModel):
    """Requête invalide : l'agent n'est pas appelé."""
    error: str


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str
    timestamp: str
