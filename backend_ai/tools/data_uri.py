import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from backend_ai.errors import ValidationError

logger = logging.getLogger(__name__)

# PIL format -> mime type
SUPPORTED_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}

DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w.+-]+=[^;,]*)*;base64,(?P<data>.*)$",
    re.DOTALL,
)


@dataclass
class ArtworkImage:
    """Decoded artwork: raw bytes plus the mime type they were sniffed as."""
    mime_type: str
    data: bytes

    def to_data_uri(self) -> str:
        return encode_data_uri(self.data, self.mime_type)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    b64 = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{b64}"


def sniff_mime_type(data: bytes) -> str:
    """Open the bytes with Pillow and return the mime type of a supported raster format."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except Image.DecompressionBombError as e:
        logger.warning(f"Rejected oversized artwork: {e}")
        raise ValidationError("Artwork is too large to decode") from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning(f"Unreadable artwork: {e}")
        raise ValidationError("Artwork is not a readable image") from e

    if fmt not in SUPPORTED_FORMATS:
        raise ValidationError(f"Unsupported image format: {fmt}")
    return SUPPORTED_FORMATS[fmt]


def decode_data_uri(data_uri: str, max_bytes: int | None = None) -> ArtworkImage:
    """
    Decode 'data:<mimetype>;base64,<encoded_data>' into an ArtworkImage.

    The declared mime type must be a supported raster type and must match what the
    bytes actually contain. Raises ValidationError otherwise.
    """
    if not data_uri or not isinstance(data_uri, str):
        raise ValidationError("Artwork data URI is required")

    match = DATA_URI_RE.match(data_uri.strip())
    if not match:
        raise ValidationError("Artwork data URI must look like 'data:<mimetype>;base64,<data>'")

    declared = match.group("mime").lower()
    if declared == "image/jpg":
        declared = "image/jpeg"
    if declared not in SUPPORTED_FORMATS.values():
        raise ValidationError(f"Unsupported image type: {declared}")

    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Artwork data URI is not valid base64") from e

    if not data:
        raise ValidationError("Artwork image is empty")
    if max_bytes is not None and len(data) > max_bytes:
        raise ValidationError(f"Artwork image exceeds {max_bytes} bytes")

    actual = sniff_mime_type(data)
    if actual != declared:
        raise ValidationError(f"Artwork declared as {declared} but contains {actual}")

    return ArtworkImage(mime_type=actual, data=data)
