"""FastAPI server that turns uploaded receipts into extracted line items."""

import hashlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from resibo.receipt.formatter import result_to_dict
from resibo.receipt.ocr_result_parser import extract_receipt_items
from resibo.runtime.logging import get_logger
from resibo.runtime.paths import get_ocr_service_url, get_paths
from resibo.runtime.receipt_pipeline import RecognitionFailure, call_ocr_service_async, save_ocr_text

logger = get_logger(__name__)


class ExtractRequest(BaseModel):
    text: str


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create receipts directories on startup."""
    get_paths().ensure_receipt_directories()
    yield


app = FastAPI(title="Receipt Item Extractor", lifespan=lifespan)


@app.post("/extract")
async def extract_text(body: ExtractRequest) -> dict[str, Any]:
    """Extract items from OCR text the caller already has."""
    return result_to_dict(extract_receipt_items(body.text))


@app.post("/upload")
async def upload_receipt(request: Request) -> JSONResponse:
    """Receive a receipt image, run it through OCR and return the extracted items."""
    form = await request.form()

    file = None
    for value in form.values():
        if hasattr(value, "read"):
            file = value
            break

    if not file:
        return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    file_filename = getattr(file, "filename", None)
    ext = Path(file_filename).suffix if file_filename else ".jpg"
    filename = f"receipt_{timestamp}{ext}"

    paths = get_paths()
    paths.receipts_images.mkdir(parents=True, exist_ok=True)
    filepath = paths.receipts_images / filename
    contents = await file.read()
    filepath.write_bytes(contents)
    receipt_id = hashlib.sha256(contents).hexdigest()

    try:
        text = await call_ocr_service_async(filename, contents, get_ocr_service_url())
    except RecognitionFailure as e:
        logger.error("Recognition failed for %s: %s", filename, e)
        return JSONResponse(
            {"status": "error", "message": "Failed to extract text from the image."},
            status_code=502,
        )

    save_ocr_text(text, filepath)
    result = extract_receipt_items(text)
    logger.info("Parsed %s: %d items, total %s", filename, len(result.items), result.total)

    return JSONResponse(
        {
            "status": "success",
            "receipt_id": receipt_id,
            "image_filename": filename,
            **result_to_dict(result),
        }
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
