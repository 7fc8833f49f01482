"""Validation and recompression of uploaded meeting photos."""

from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

from meeting_admin.domain.errors import (
    DecodeError,
    EncodeError,
    FileTooLarge,
    InvalidMediaType,
)
from meeting_admin.domain.photos import ProcessedImage, SourceImage

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_DIMENSION = 1920
JPEG_QUALITY = 70

_WHITE = (255, 255, 255)


def validate_source(source: SourceImage, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Reject non-image media types and files above the size ceiling."""
    if not source.media_type.lower().startswith("image/"):
        raise InvalidMediaType()
    if source.size > max_bytes:
        raise FileTooLarge(
            f"Please select images smaller than {max_bytes // (1024 * 1024)}MB."
        )


def target_dimensions(
    width: int, height: int, max_dimension: int = MAX_DIMENSION
) -> tuple[int, int]:
    """Scale dimensions so the longer side fits max_dimension, never upscaling."""
    if max(width, height) <= max_dimension:
        return width, height
    if width > height:
        return max_dimension, max(1, round(height * max_dimension / width))
    return max(1, round(width * max_dimension / height)), max_dimension


def compress_image(
    data: bytes,
    max_dimension: int = MAX_DIMENSION,
    quality: int = JPEG_QUALITY,
) -> ProcessedImage:
    """Decode, downscale and re-encode image bytes as JPEG."""
    try:
        with Image.open(BytesIO(data)) as opened:
            opened.load()
            image = ImageOps.exif_transpose(opened)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise DecodeError(f"Could not read image data: {exc}") from exc

    size = target_dimensions(image.width, image.height, max_dimension)
    if size != image.size:
        image = image.resize(size, Image.Resampling.LANCZOS)

    buffer = BytesIO()
    try:
        image = _flatten_to_rgb(image)
        image.save(buffer, format="JPEG", quality=quality, optimize=True)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"JPEG encoding failed: {exc}") from exc
    encoded = buffer.getvalue()
    if not encoded:
        raise EncodeError("JPEG encoder produced no output")
    return ProcessedImage(data=encoded, width=image.width, height=image.height)


def _flatten_to_rgb(image: Image.Image) -> Image.Image:
    """JPEG has no alpha channel; composite transparent pixels onto white."""
    has_alpha = image.mode in {"RGBA", "LA", "PA"} or (
        image.mode == "P" and "transparency" in image.info
    )
    if has_alpha:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, _WHITE)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image
