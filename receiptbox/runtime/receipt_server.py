"""FastAPI server for receiving receipt images and OCR text."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from receiptbox.receipt.ocr_result_parser import parse_receipt_text
from receiptbox.receipt.serialization import receipt_to_dict
from receiptbox.runtime.logging import get_logger
from receiptbox.runtime.paths import get_paths
from receiptbox.runtime.receipt_pipeline import process_receipt_async
from receiptbox.runtime.receipt_storage import list_scanned_receipts, save_receipt_image, save_scanned_receipt

logger = get_logger(__name__)


class ParseTextRequest(BaseModel):
    """Body of ``POST /parse``."""

    text: str = ""
    save: bool = False


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create receipts directories on startup."""
    get_paths().ensure_receipt_directories()
    yield


app = FastAPI(title="Receipt Scanner", lifespan=lifespan)


@app.post("/upload")
async def upload_receipt(request: Request) -> JSONResponse:
    """Receive a receipt image, OCR and parse it, and save the draft to scanned/."""
    form = await request.form()

    file = None
    for key, value in form.items():
        logger.debug("Form field: key=%r, type=%s", key, type(value))
        if hasattr(value, "read"):
            file = value
            break

    if file is None:
        return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

    contents = await file.read()
    if not contents:
        return JSONResponse({"status": "error", "message": "Uploaded file is empty"}, status_code=400)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    file_filename = getattr(file, "filename", None)
    ext = Path(file_filename).suffix if file_filename else ".jpg"
    image_path = save_receipt_image(contents, f"receipt_{timestamp}{ext or '.jpg'}")

    receipt = await process_receipt_async(contents)
    output_path = save_scanned_receipt(receipt)
    logger.info(
        "Received %s: %s, %s, $%.2f, %d items",
        image_path.name,
        receipt.store_name or "unknown store",
        receipt.purchase_date,
        receipt.total_amount,
        len(receipt.items),
    )

    return JSONResponse(
        {
            "status": "success",
            "message": f"Saved for review: {output_path.name}",
            "image_filename": image_path.name,
            "draft_filename": output_path.name,
            "size_bytes": len(contents),
            "receipt": receipt_to_dict(receipt),
        }
    )


@app.post("/parse")
async def parse_text(body: ParseTextRequest) -> JSONResponse:
    """Parse OCR text that was recognized elsewhere."""
    receipt = parse_receipt_text(body.text)
    payload: dict[str, object] = {"status": "success", "receipt": receipt_to_dict(receipt)}
    if body.save:
        payload["draft_filename"] = save_scanned_receipt(receipt).name
    return JSONResponse(payload)


@app.get("/receipts")
async def list_receipts() -> dict[str, list[str]]:
    """List receipt drafts waiting for review."""
    return {"receipts": [path.name for path in list_scanned_receipts()]}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
