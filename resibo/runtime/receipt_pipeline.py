"""Runtime helpers for the receipt recognition step (non-HTTP-server)."""

import time
from pathlib import Path
from typing import Any

import httpx

from resibo.runtime.logging import get_logger
from resibo.runtime.paths import get_paths

logger = get_logger(__name__)

OCR_TIMEOUT_SECONDS = 60.0

_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


class RecognitionFailure(RuntimeError):
    """Raised when the OCR service cannot produce text for an image."""


def content_type_for(filename: str) -> str:
    return _CONTENT_TYPES.get(Path(filename).suffix.lower(), "application/octet-stream")


def text_from_ocr_response(response: httpx.Response) -> str:
    """
    Pull the recognized text out of an OCR service response.

    Raises:
        RecognitionFailure: On a non-200 status, a non-JSON body, or no text field
    """
    if response.status_code != 200:
        logger.error("OCR service error: %s", response.status_code)
        raise RecognitionFailure(f"OCR service error: {response.status_code}")

    try:
        payload: Any = response.json()
    except ValueError as e:
        raise RecognitionFailure("OCR service returned a non-JSON response") from e

    if not isinstance(payload, dict):
        raise RecognitionFailure("OCR service returned an unexpected payload")
    text = payload.get("text")
    if text is None:
        text = payload.get("full_text")
    if not isinstance(text, str):
        raise RecognitionFailure("OCR service response has no text")
    return text


def call_ocr_service(image_path: Path, ocr_url: str) -> str:
    """
    Send one receipt image to the OCR service and return the recognized text.

    Raises:
        RecognitionFailure: If the service is unreachable or returns no text
    """
    ocr_url = ocr_url.rstrip("/")
    logger.info("Sending %s to OCR service at %s...", image_path.name, ocr_url)

    try:
        image_bytes = image_path.read_bytes()
        start_time = time.time()
        response = httpx.post(
            f"{ocr_url}/ocr",
            files={"file": (image_path.name, image_bytes, content_type_for(image_path.name))},
            timeout=OCR_TIMEOUT_SECONDS,
        )
        logger.info("OCR service returned in %.2f seconds", time.time() - start_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise RecognitionFailure(f"Failed to connect to OCR service: {e}") from e

    return text_from_ocr_response(response)


async def call_ocr_service_async(filename: str, contents: bytes, ocr_url: str) -> str:
    """Async variant of call_ocr_service for already-loaded image bytes."""
    ocr_url = ocr_url.rstrip("/")
    try:
        async with httpx.AsyncClient(timeout=OCR_TIMEOUT_SECONDS) as client:
            response = await client.post(
                f"{ocr_url}/ocr",
                files={"file": (filename, contents, content_type_for(filename))},
            )
    except httpx.RequestError as e:
        logger.error("OCR service unavailable: %s", e)
        raise RecognitionFailure(f"Failed to connect to OCR service: {e}") from e

    return text_from_ocr_response(response)


def save_ocr_text(text: str, image_path: Path) -> Path:
    """Save recognized text for debugging."""
    ocr_dir = get_paths().receipts_ocr_text
    ocr_dir.mkdir(parents=True, exist_ok=True)
    ocr_text_path = ocr_dir / f"{image_path.stem}.txt"
    ocr_text_path.write_text(text, encoding="utf-8")
    logger.debug("OCR text saved to: %s", ocr_text_path)
    return ocr_text_path
