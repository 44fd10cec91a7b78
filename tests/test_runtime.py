"""Tests for runtime logging and configuration helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from resibo.runtime import DEFAULT_OCR_SERVICE_URL, get_logger, get_ocr_service_url, get_paths


def test_get_logger_uses_resibo_namespace() -> None:
    assert get_logger("scripts.tool").name == "resibo.scripts.tool"
    assert get_logger("resibo.receipt.normalizer").name == "resibo.receipt.normalizer"


def test_paths_follow_resibo_home(resibo_home: Path) -> None:
    paths = get_paths()

    assert paths.root == resibo_home.resolve()
    assert paths.receipts_extracted == resibo_home.resolve() / "receipts" / "extracted"

    paths.ensure_receipt_directories()
    assert paths.receipts_images.is_dir()
    assert paths.receipts_ocr_text.is_dir()


def test_ocr_service_url_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OCR_SERVICE_URL", raising=False)
    assert get_ocr_service_url() == DEFAULT_OCR_SERVICE_URL

    monkeypatch.setenv("OCR_SERVICE_URL", "http://ocr.internal:9000")
    assert get_ocr_service_url() == "http://ocr.internal:9000"
