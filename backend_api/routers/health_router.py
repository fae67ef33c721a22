from datetime import datetime, timezone

from fastapi import APIRouter

from backend_api.models.metadata_models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse)
async def health():
    return HealthResponse(
        message="Hello from Redbubble Ready API!",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
