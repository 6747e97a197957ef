"""Tests for OCR transformation helpers."""

import base64
import io

from PIL import Image

from receiptbox.receipt.ocr_helpers import (
    annotation_error_message,
    build_text_detection_request,
    extract_annotation_text,
    resize_image_bytes,
)


def test_resize_adds_padding_and_returns_jpeg(png_bytes: bytes) -> None:
    resized = resize_image_bytes(png_bytes, padding=10)

    img = Image.open(io.BytesIO(resized))
    assert img.format == "JPEG"
    assert img.size == (60, 40)


def test_resize_caps_largest_dimension() -> None:
    buffer = io.BytesIO()
    Image.new("RGB", (400, 100), "white").save(buffer, format="PNG")

    resized = resize_image_bytes(buffer.getvalue(), max_dimension=200, padding=0)

    assert Image.open(io.BytesIO(resized)).size == (200, 50)


def test_text_detection_request_encodes_image() -> None:
    body = build_text_detection_request(b"\x89PNG")

    (request,) = body["requests"]
    assert base64.b64decode(request["image"]["content"]) == b"\x89PNG"
    assert request["features"] == [{"type": "TEXT_DETECTION"}]


def test_annotation_text_uses_first_annotation() -> None:
    response = {
        "responses": [
            {
                "textAnnotations": [
                    {"description": "COSTCO\nWHOLESALE\n"},
                    {"description": "COSTCO"},
                ]
            }
        ]
    }

    assert extract_annotation_text(response) == "COSTCO\nWHOLESALE\n"


def test_annotation_text_empty_when_nothing_detected() -> None:
    assert extract_annotation_text({}) == ""
    assert extract_annotation_text({"responses": [{}]}) == ""
    assert extract_annotation_text({"responses": [{"textAnnotations": []}]}) == ""


def test_annotation_error_message() -> None:
    assert annotation_error_message({"responses": [{"textAnnotations": []}]}) is None
    assert annotation_error_message({"error": {"code": 403, "message": "API key not valid"}}) == "API key not valid"
    assert annotation_error_message({"responses": [{"error": {"message": "Bad image data"}}]}) == "Bad image data"
