from PIL import Image
import io

from backend_ai.tools.data_uri import ArtworkImage

def compress_image(image: ArtworkImage, max_size=(1024, 1024), quality=90) -> ArtworkImage:

    with Image.open(io.BytesIO(image.data)) as img:
        if img.width <= max_size[0] and img.height <= max_size[1]:
            return image

        img = img.convert("RGB")
        img.thumbnail(max_size, Image.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=quality)

    return ArtworkImage(mime_type="image/jpeg", data=buffer.getvalue())
