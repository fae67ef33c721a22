from enum import Enum
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 5000
TAG_MAX_LENGTH = 50
MAX_TAGS = 15
MAX_CATEGORIES = 2

TITLE_MIN_WORDS = 4
TITLE_MAX_WORDS = 8


class Category(str, Enum):
    PHOTOGRAPHY = "Photography"
    DESIGN_ILLUSTRATION = "Design & Illustration"
    PAINTING_MIXED_MEDIA = "Painting & Mixed Media"
    DRAWING = "Drawing"
    DIGITAL_ART = "Digital Art"


ALL_CATEGORIES = [c.value for c in Category]


# ------------------------------
# Field rules (shared by server and client)
# ------------------------------

def split_tags(tags: str) -> List[str]:
    """Split a comma-separated tag string, trim each piece and drop empty ones."""
    return [t.strip() for t in (tags or "").split(",") if t.strip()]


def filter_categories(values: Iterable) -> List[str]:
    """Keep known categories only, first occurrence wins, order preserved."""
    kept = []
    for value in values or []:
        name = value.value if isinstance(value, Category) else value
        if name in ALL_CATEGORIES and name not in kept:
            kept.append(name)
    return kept


def title_errors(title: str) -> List[str]:
    if not title:
        return ["Title is required."]
    if len(title) > TITLE_MAX_LENGTH:
        return [f"Title should be concise (max {TITLE_MAX_LENGTH} characters)."]
    return []


def tags_errors(tags: str) -> List[str]:
    if not tags:
        return ["Tags are required."]
    errors = []
    if any(len(t.strip()) > TAG_MAX_LENGTH for t in tags.split(",")):
        errors.append(f"Each tag must be {TAG_MAX_LENGTH} characters or less.")
    if len(split_tags(tags)) > MAX_TAGS:
        errors.append(f"Up to {MAX_TAGS} tags allowed.")
    return errors


def description_errors(description: str) -> List[str]:
    if not description:
        return ["Description is required."]
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return [f"Description too long (max {DESCRIPTION_MAX_LENGTH} characters)."]
    return []


def categories_errors(categories: Iterable) -> List[str]:
    values = [c.value if isinstance(c, Category) else c for c in categories or []]
    errors = []
    unknown = [v for v in values if v not in ALL_CATEGORIES]
    if unknown:
        errors.append(f"Unknown categories: {', '.join(map(str, unknown))}.")
    if len(set(values)) != len(values):
        errors.append("Categories must not repeat.")
    if len(values) > MAX_CATEGORIES:
        errors.append(f"Select up to {MAX_CATEGORIES} categories.")
    return errors


def metadata_errors(title: str, tags: str, description: str, categories: Iterable) -> dict:
    """Run every field rule; only fields with problems appear in the result."""
    found = {
        "title": title_errors(title),
        "tags": tags_errors(tags),
        "description": description_errors(description),
        "categories": categories_errors(categories),
    }
    return {field: errs for field, errs in found.items() if errs}


# ------------------------------
# Schemas
# ------------------------------

class MetadataInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    artwork_data_uri: str = Field(
        alias="artworkDataUri",
        description=(
            "A photo of the artwork, as a data URI that must include a MIME type and use "
            "Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )


class MetadataOutput(BaseModel):
    title: str = Field(
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="A descriptive title (4-8 words) that clearly explains the artwork",
    )
    tags: str = Field(
        min_length=1,
        description=(
            f"Up to {MAX_TAGS} relevant tags (maximum {TAG_MAX_LENGTH} characters per tag), "
            "separated by commas"
        ),
    )
    description: str = Field(
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="An engaging description that tells the story or meaning behind the artwork",
    )
    categories: List[Category] = Field(
        default_factory=list,
        max_length=MAX_CATEGORIES,
        description=f"Up to {MAX_CATEGORIES} media categories that best match the artwork",
    )

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: str) -> str:
        errors = tags_errors(v)
        if errors:
            raise ValueError(" ".join(errors))
        return v

    @field_validator("categories")
    @classmethod
    def check_categories(cls, v: List[Category]) -> List[Category]:
        if len(set(v)) != len(v):
            raise ValueError("Categories must not repeat.")
        return v

    def category_names(self) -> List[str]:
        return [c.value for c in self.categories]
