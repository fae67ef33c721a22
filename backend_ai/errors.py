"""
Erreurs typées du pipeline de génération de métadonnées.
"""


class MetadataError(Exception):
    """Base class for every failure raised by the generation pipeline."""


class ValidationError(MetadataError, ValueError):
    """The request is missing or carries a malformed artwork image."""


class GenerationUnavailable(MetadataError):
    """The generative capability failed: unreachable, timed out, quota, unusable payload."""


class SchemaViolation(MetadataError):
    """The capability answered but the content does not fit the output schema."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.errors = errors or {}
