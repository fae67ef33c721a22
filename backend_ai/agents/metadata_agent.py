"""
Listing metadata agent: one artwork image in, one validated MetadataOutput out.

Flow:
1. Validate the request and decode the data URI (no provider call on failure)
2. Send the fixed instruction template + image + MetadataOutput schema to the capability
3. Discard unknown categories, then validate the payload once against MetadataOutput

A single attempt is made per call; retrying is the caller's business.
"""

from typing import Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from backend_ai.agents.base_agent import BaseAgent
from backend_ai.errors import SchemaViolation, ValidationError
from backend_ai.prompts.metadata_prompt import METADATA_PROMPT
from backend_ai.schemas.metadata_schema import (
    TITLE_MAX_WORDS,
    TITLE_MIN_WORDS,
    MetadataInput,
    MetadataOutput,
    filter_categories,
)
from backend_ai.tools.data_uri import ArtworkImage, decode_data_uri
from backend_ai.tools.generative_capability import GenerativeCapability


class MetadataAgent(BaseAgent):
    def __init__(self, capability: GenerativeCapability, max_image_bytes: Optional[int] = None):
        super().__init__("metadata_agent")
        self.capability = capability
        self.max_image_bytes = max_image_bytes

    # ------------------------------
    # Helper: request -> decoded image
    # ------------------------------
    def _read_request(self, request: Union[MetadataInput, Mapping]) -> ArtworkImage:
        if isinstance(request, Mapping):
            try:
                request = MetadataInput.model_validate(request)
            except PydanticValidationError as e:
                raise ValidationError("Artwork data URI is required") from e

        if not request.artwork_data_uri:
            raise ValidationError("Artwork data URI is required")

        return decode_data_uri(request.artwork_data_uri, max_bytes=self.max_image_bytes)

    # ------------------------------
    # Helper: raw payload -> MetadataOutput
    # ------------------------------
    def conform(self, raw: dict) -> MetadataOutput:
        if not isinstance(raw, Mapping):
            raise SchemaViolation("Generated metadata is not a JSON object")
        data = dict(raw)
        categories = data.get("categories") or []
        if not isinstance(categories, list):
            categories = [categories]
        kept = filter_categories(categories)
        if len(kept) != len(categories):
            dropped = [c for c in categories if c not in kept]
            self.logger.warning(f"Discarding categories outside the enumeration: {dropped}")
        data["categories"] = kept

        try:
            output = MetadataOutput.model_validate(data)
        except PydanticValidationError as e:
            errors = {}
            for err in e.errors():
                field = str(err["loc"][0]) if err["loc"] else "__root__"
                errors.setdefault(field, []).append(err["msg"])
            self.logger.warning(f"Model output violates the metadata schema: {errors}")
            raise SchemaViolation(
                "Generated metadata does not satisfy the output schema: "
                + ", ".join(sorted(errors)),
                errors=errors,
            ) from e

        words = len(output.title.split())
        if not TITLE_MIN_WORDS <= words <= TITLE_MAX_WORDS:
            self.logger.warning(f"Generated title has {words} words: {output.title!r}")
        return output

    # ------------------------------
    # Main function
    # ------------------------------
    def run(self, request: Union[MetadataInput, Mapping]) -> MetadataOutput:
        image = self._read_request(request)

        self.logger.info(f"Generating metadata with {self.capability.name} ({image.mime_type}, {len(image.data)} bytes)")
        raw = self.capability.generate(image, METADATA_PROMPT, MetadataOutput)

        output = self.conform(raw)
        self.logger.info(f"Generated {output.title!r} in {output.category_names()}")
        return output


# ----------------------------------------
# Example usage for testing
if __name__ == "__main__":
    import json
    import logging
    import sys
    from pathlib import Path

    from backend_ai.tools.data_uri import encode_data_uri, sniff_mime_type
    from backend_ai.tools.gemini_client import GeminiCapability

    logging.basicConfig(level=logging.INFO)

    data = Path(sys.argv[1]).read_bytes()
    agent = MetadataAgent(GeminiCapability())
    result = agent.run({"artworkDataUri": encode_data_uri(data, sniff_mime_type(data))})
    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
