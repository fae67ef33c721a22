import json
import re
from typing import Type

from pydantic import BaseModel

from backend_ai.errors import GenerationUnavailable
from backend_ai.tools.data_uri import ArtworkImage


class GenerativeCapability:
    """
    An external model that turns (image, instructions, output schema) into a structured payload.

    Implementations return the decoded JSON object produced by the model, or raise
    GenerationUnavailable when the provider cannot deliver one.
    """

    name = "capability"

    def generate(self, image: ArtworkImage, instructions: str, output_schema: Type[BaseModel]) -> dict:
        raise NotImplementedError("Capability must implement generate()")


def parse_json_payload(raw: str) -> dict:
    """Parse the model's JSON text, tolerating markdown fences and surrounding chatter."""
    if not raw or not raw.strip():
        raise GenerationUnavailable("Model returned an empty response")

    # Strip markdown fences if present
    clean = re.sub(r"```(?:json)?|```", "", raw).strip()

    try:
        data = json.loads(clean)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", clean, re.DOTALL)
        if not match:
            raise GenerationUnavailable("Model response is not JSON")
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError as e:
            raise GenerationUnavailable(f"Model response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise GenerationUnavailable("Model response is not a JSON object")
    return data
