import logging
import os
from typing import Optional, Type

import requests
from pydantic import BaseModel

from backend_ai.errors import GenerationUnavailable
from backend_ai.tools.data_uri import ArtworkImage
from backend_ai.tools.generative_capability import GenerativeCapability, parse_json_payload
from backend_ai.tools.image_compressor import compress_image

logger = logging.getLogger(__name__)


class OpenRouterCapability(GenerativeCapability):
    """
    OpenAI-compatible vision chat completion through OpenRouter.

    The image travels as a data URL content part; the output schema is declared
    through response_format so models that support structured output honour it.
    """

    name = "openrouter"

    def __init__(
        self,
        openrouter_api_key: Optional[str] = None,
        model: str = "google/gemini-2.5-flash-lite",
        timeout: Optional[float] = 60,
        max_image_size: tuple = (1024, 1024),
        session: Optional[requests.Session] = None,
    ):
        self.openrouter_api_key = openrouter_api_key or os.getenv("OPENROUTER_API_KEY")
        self.model = model
        self.timeout = timeout
        self.max_image_size = max_image_size
        self.api_url = "https://openrouter.ai/api/v1/chat/completions"
        self.session = session or requests.Session()

    def _build_payload(self, image: ArtworkImage, instructions: str, output_schema: Type[BaseModel]) -> dict:
        prepared = compress_image(image, self.max_image_size)
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": instructions},
                        {"type": "image_url", "image_url": {"url": prepared.to_data_uri()}},
                    ],
                }
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": output_schema.__name__,
                    "schema": output_schema.model_json_schema(),
                },
            },
            "temperature": 0.7,
            "max_tokens": 2000,
        }

    def generate(self, image: ArtworkImage, instructions: str, output_schema: Type[BaseModel]) -> dict:
        if not self.openrouter_api_key:
            logger.error("OPENROUTER_API_KEY not set.")
            raise GenerationUnavailable("OPENROUTER_API_KEY not set")

        headers = {
            "Authorization": f"Bearer {self.openrouter_api_key}",
            "Content-Type": "application/json",
            "X-Title": "Artwork Metadata Generator",
        }
        payload = self._build_payload(image, instructions, output_schema)

        logger.info(f"Calling OpenRouter ({self.model})...")
        try:
            resp = self.session.post(
                self.api_url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            raw = data["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            logger.error(f"OpenRouter request failed: {e}")
            if getattr(e, "response", None) is not None:
                logger.error(f"Response: {e.response.text}")
            raise GenerationUnavailable(f"OpenRouter request failed: {type(e).__name__}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Failed to parse OpenRouter response: {e}")
            raise GenerationUnavailable("OpenRouter returned a malformed response") from e

        return parse_json_payload(raw or "")
