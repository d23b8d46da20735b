"""
Rendering context logger.

Provides logging interface for rendering context with automatic [export] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resume_maker.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[export]"


def setup_export_logger(log_dir: Path, scale: float) -> Path:
    """
    Setup logger for an export session.

    Args:
        log_dir: Directory for this export session
        scale: Raster scale recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="export",
        log_dir=log_dir,
        extra_provenance={"Raster scale": scale},
    )


# Wrapper functions with automatic [export] prefix


def _log_info(message: str) -> None:
    """Log info message with [export] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [export] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [export] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [export] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [export] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level export-specific logging helpers


def log_export_start(profile_name: str, theme: str, scale: float, log_dir: Path) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export: {profile_name or 'unnamed resume'}")
    _log_info(f"Logging to {log_dir}")
    _log_debug(f"  Theme: {theme}")
    _log_debug(f"  Scale: {scale}")


def log_export_result(
    filename: str,
    result,  # ExportResult or None
    elapsed_time: float,
    error: Exception = None,
) -> None:
    """
    Log export result.

    Args:
        filename: Target file name
        result: ExportResult from export_to_document() (None if it failed)
        elapsed_time: Time taken to export
        error: Error raised by the export, if any
    """
    if result is not None:
        _log_success(f"{filename}: {result.page_count} page(s) ({elapsed_time:.2f}s)")
        _log_debug(f"  Size: {len(result.pdf_bytes)} bytes")
        _log_debug(f"  Bitmap: {result.plan.bitmap_width}x{result.plan.bitmap_height}px")
    else:
        _log_error(f"Export of {filename} failed ({elapsed_time:.2f}s)")
        if error is not None:
            # Multi-line error messages keep their own formatting
            logger.opt(raw=True).debug(f"\n{'=' * 80}\nEXPORT ERROR:\n{'=' * 80}\n{error}\n")
