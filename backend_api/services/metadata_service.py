"""
Service de génération de métadonnées : appelle l'agent metadata_agent.
"""
import asyncio
import logging
from functools import lru_cache
from typing import Any, Callable

from backend_ai.agents.metadata_agent import MetadataAgent
from backend_ai.errors import GenerationUnavailable
from backend_ai.tools.gemini_client import GeminiCapability
from backend_ai.tools.generative_capability import GenerativeCapability
from backend_ai.tools.openrouter_client import OpenRouterCapability
from backend_api.core.config import settings

logger = logging.getLogger(__name__)


def build_capability(provider: str | None = None) -> GenerativeCapability:
    """Instancie le fournisseur configuré (AI_PROVIDER)."""
    provider = (provider or settings.AI_PROVIDER).lower()
    if provider == "gemini":
        return GeminiCapability(
            gemini_api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            timeout=settings.GENERATION_TIMEOUT,
        )
    if provider == "openrouter":
        return OpenRouterCapability(
            openrouter_api_key=settings.OPENROUTER_API_KEY,
            model=settings.OPENROUTER_MODEL,
            timeout=settings.GENERATION_TIMEOUT,
        )
    raise ValueError(f"AI_PROVIDER inconnu : {provider}")


@lru_cache(maxsize=1)
def get_metadata_agent() -> MetadataAgent:
    """Agent partagé (sans état), construit au premier appel."""
    return MetadataAgent(build_capability(), max_image_bytes=settings.MAX_IMAGE_BYTES)


def metadata_agent_provider() -> Callable[[], MetadataAgent]:
    """Dépendance FastAPI : la fabrique de l'agent, appelée une fois la requête validée."""
    return get_metadata_agent


async def generate_metadata(
    agent: MetadataAgent,
    artwork_data_uri: str,
    timeout: float | None = None,
) -> dict[str, Any]:
    """
    Lance la génération en arrière-plan (ne bloque pas l'event loop).
    Retourne un dict JSON-serialisable.
    """
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(
        None,
        lambda: agent.run({"artworkDataUri": artwork_data_uri}),
    )
    try:
        result = await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error("Metadata generation timed out after %ss", timeout)
        raise GenerationUnavailable(f"Generation timed out after {timeout}s") from e
    return result.model_dump(mode="json")
