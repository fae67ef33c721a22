import logging
import os
from typing import Optional, Type

from google import genai
from google.genai import errors, types
from pydantic import BaseModel

from backend_ai.errors import GenerationUnavailable
from backend_ai.tools.data_uri import ArtworkImage
from backend_ai.tools.generative_capability import GenerativeCapability, parse_json_payload

logger = logging.getLogger(__name__)


class GeminiCapability(GenerativeCapability):
    """Schema-constrained generation with Gemini: the output schema is declared as response_schema."""

    name = "gemini"

    def __init__(
        self,
        gemini_api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        timeout: Optional[float] = None,
        temperature: float = 0.7,
    ):
        self.gemini_api_key = gemini_api_key or os.getenv("GEMINI_API_KEY")
        self.model = model
        self.temperature = temperature

        if self.gemini_api_key:
            http_options = types.HttpOptions(timeout=int(timeout * 1000)) if timeout else None
            self.client = genai.Client(api_key=self.gemini_api_key, http_options=http_options)
        else:
            self.client = None
            logger.warning("GEMINI_API_KEY not set, metadata generation will fail")

    def generate(self, image: ArtworkImage, instructions: str, output_schema: Type[BaseModel]) -> dict:
        if not self.client:
            raise GenerationUnavailable("Gemini client not initialized (GEMINI_API_KEY missing)")

        logger.info(f"Calling Gemini ({self.model}) with {len(image.data)} bytes of {image.mime_type}")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                    instructions,
                ],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=output_schema,
                    temperature=self.temperature,
                ),
            )
        except errors.APIError as e:
            logger.error(f"Gemini request failed: {e.code} {e.message}")
            raise GenerationUnavailable(f"Gemini request failed: {e.message or e.code}") from e
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise GenerationUnavailable(f"Gemini request failed: {type(e).__name__}") from e

        return parse_json_payload(response.text or "")
