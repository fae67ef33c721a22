import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend_api.core.logging_config import configure_logging
from backend_api.routers.health_router import router as health_router
from backend_api.routers.metadata_router import router as metadata_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Redbubble Ready API")


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.error("[Error]: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Internal Server Error"},
    )

app.include_router(health_router)
app.include_router(metadata_router, prefix="/api")
