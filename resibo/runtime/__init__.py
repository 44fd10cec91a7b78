"""Runtime infrastructure for resibo.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path and service configuration via get_paths(), ProjectPaths, get_ocr_service_url()

Usage:
    from resibo.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.receipts)
"""

from resibo.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from resibo.runtime.paths import (
    DEFAULT_OCR_SERVICE_URL,
    ProjectPaths,
    get_ocr_service_url,
    get_paths,
    reset_paths,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Paths
    "get_paths",
    "reset_paths",
    "get_ocr_service_url",
    "ProjectPaths",
    "DEFAULT_OCR_SERVICE_URL",
]
