"""Pure OCR transformation helpers for receipt scanning."""

import base64
import io
from typing import Any

MAX_IMAGE_DIMENSION = 3000  # Resize if either dimension exceeds this
OCR_IMAGE_PADDING = 50  # White padding around image to prevent edge truncation


def resize_image_bytes(
    image_bytes: bytes, max_dimension: int = MAX_IMAGE_DIMENSION, padding: int = OCR_IMAGE_PADDING
) -> bytes:
    """
    Resize image bytes if it exceeds max_dimension on either side.

    Also adds white padding around the image to prevent OCR edge truncation.

    Args:
        image_bytes: Image data as bytes
        max_dimension: Maximum allowed dimension (width or height)
        padding: White padding to add around image (pixels)

    Returns:
        Image bytes (JPEG format), resized if necessary, with padding added
    """
    from PIL import Image, ImageOps

    img = Image.open(io.BytesIO(image_bytes))

    # Phone photos carry their rotation in EXIF; OCR needs upright pixels
    img = ImageOps.exif_transpose(img)

    width, height = img.size
    if width > max_dimension or height > max_dimension:
        scale = max_dimension / max(width, height)
        img = img.resize((max(1, int(width * scale)), max(1, int(height * scale))), Image.Resampling.LANCZOS)

    if padding > 0:
        img = ImageOps.expand(img, border=padding, fill="white")

    buffer = io.BytesIO()
    img.convert("RGB").save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


def build_text_detection_request(image_bytes: bytes) -> dict[str, Any]:
    """Build a Cloud Vision ``images:annotate`` body asking for text detection."""
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                "features": [{"type": "TEXT_DETECTION"}],
            }
        ]
    }


def extract_annotation_text(response_json: dict[str, Any]) -> str:
    """
    Return the full-text annotation from a Cloud Vision response.

    The first text annotation holds the whole detected text; the rest are
    individual words. Returns "" when nothing was recognized.
    """
    responses = response_json.get("responses") or []
    if not responses:
        return ""
    annotations = responses[0].get("textAnnotations") or []
    if not annotations:
        return ""
    return annotations[0].get("description") or ""


def annotation_error_message(response_json: dict[str, Any]) -> str | None:
    """Return the provider error message embedded in a response, if any."""
    error = response_json.get("error")
    if error:
        return str(error.get("message") or error)
    for response in response_json.get("responses") or []:
        error = response.get("error")
        if error:
            return str(error.get("message") or error)
    return None
