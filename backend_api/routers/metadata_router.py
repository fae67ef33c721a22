import logging

from typing import Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from backend_ai.agents.metadata_agent import MetadataAgent
from backend_ai.errors import GenerationUnavailable, SchemaViolation, ValidationError
from backend_api.core.config import settings
from backend_api.models.metadata_models import (
    GenerateMetadataFailure,
    GenerateMetadataSuccess,
    RequestError,
)
from backend_api.services.metadata_service import generate_metadata, metadata_agent_provider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Metadata"])

MISSING_DATA_URI = "Artwork data URI is required"
GENERIC_FAILURE = "Failed to generate metadata"


def _failure(message: str) -> JSONResponse:
    if settings.is_production or not message:
        message = GENERIC_FAILURE
    return JSONResponse(
        status_code=500,
        content=GenerateMetadataFailure(message=message).model_dump(),
    )


async def _read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


# --------------------------------------------------
# 📌 POST - Generate listing metadata from an artwork
# --------------------------------------------------
@router.post(
    "/generate-metadata",
    summary="Generate title, tags, description and categories for an artwork image",
    responses={
        200: {"model": GenerateMetadataSuccess},
        400: {"model": RequestError},
        500: {"model": GenerateMetadataFailure},
    },
)
async def generate_metadata_endpoint(
    request: Request,
    get_agent: Callable[[], MetadataAgent] = Depends(metadata_agent_provider),
):
    body = await _read_body(request)
    artwork_data_uri = body.get("artworkDataUri")

    if not artwork_data_uri or not isinstance(artwork_data_uri, str):
        return JSONResponse(status_code=400, content=RequestError(error=MISSING_DATA_URI).model_dump())

    try:
        agent = get_agent()
        result = await generate_metadata(agent, artwork_data_uri, timeout=settings.GENERATION_TIMEOUT)
    except ValidationError as e:
        logger.info("Rejected artwork: %s", e)
        return JSONResponse(status_code=400, content=RequestError(error=str(e)).model_dump())
    except SchemaViolation as e:
        logger.error("Schema violation in generated metadata (prompt drift): %s %s", e, e.errors)
        return _failure(str(e))
    except GenerationUnavailable as e:
        logger.error("Generation unavailable (provider failure): %s", e)
        return _failure(str(e))
    except Exception:
        logger.exception("Error generating metadata")
        return _failure(GENERIC_FAILURE)

    return {"status": "success", "data": result}
