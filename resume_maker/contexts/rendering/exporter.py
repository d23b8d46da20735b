"""
Export Pipeline

Turns a mounted resume surface into a paginated A4 PDF:
capture at a fixed size and scale, place the bitmap width-locked, cut it into
page-height segments, and assemble the pages.
"""

import os
import re
import shutil
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv
from PIL import Image

from resume_maker.contexts.rendering.exceptions import ExportError
from resume_maker.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    log_export_result,
    log_export_start,
    setup_export_logger,
)
from resume_maker.contexts.rendering.paginator import PaginationPlan, assemble_pdf, plan_pages
from resume_maker.contexts.rendering.rasterizer import capture_surface
from resume_maker.contexts.templating.surface import RenderedSurface
from resume_maker.utils.pdf_processing import page_count
from resume_maker.utils.timestamp import now, today

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

DEFAULT_SCALE = 2
FILENAME_SUFFIX = "_Resume.pdf"

Rasterizer = Callable[[RenderedSurface, float], Image.Image]


@dataclass
class ExportResult:
    """
    Result of exporting a surface.

    Attributes:
        pdf_bytes: The assembled PDF
        page_count: Number of pages in the PDF (read back from the bytes)
        filename: Suggested file name ("{Name}_Resume.pdf")
        plan: Page placement used for the PDF
        pdf_path: Where the PDF was written (None until saved)
    """

    pdf_bytes: bytes
    page_count: int
    filename: str
    plan: PaginationPlan
    pdf_path: Optional[Path] = None


def export_filename(profile_name: str) -> str:
    """
    File name for an exported resume.

    Examples:
        export_filename("Ada  Lovelace")
        # "Ada_Lovelace_Resume.pdf"
    """
    stem = re.sub(r"\s+", "_", profile_name or "")
    return f"{stem}{FILENAME_SUFFIX}"


def export_to_document(
    surface: RenderedSurface,
    scale: float = DEFAULT_SCALE,
    rasterize: Rasterizer = capture_surface,
) -> ExportResult:
    """
    Export a surface to a paginated PDF in memory.

    Args:
        surface: Rendered HTML surface
        scale: Raster scale (device pixels per CSS pixel)
        rasterize: Capture function (default: headless Chromium)

    Returns:
        ExportResult with the PDF bytes and its page count

    Raises:
        ExportError: If capture or assembly fails
    """
    bitmap = rasterize(surface, scale)
    plan = plan_pages(bitmap.width, bitmap.height)
    _log_debug(
        f"Placing {bitmap.width}x{bitmap.height}px bitmap: "
        f"{plan.image_height_pt:.1f}pt tall, {plan.page_count} page(s)"
    )

    pdf_bytes = assemble_pdf(bitmap, plan)

    pages = page_count(pdf_bytes)
    if pages is None:
        raise ExportError("Assembled PDF could not be read back", stage="assemble")

    return ExportResult(
        pdf_bytes=pdf_bytes,
        page_count=pages,
        filename=export_filename(surface.profile_name),
        plan=plan,
    )


def _write_atomic(path: Path, content: bytes) -> None:
    fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        shutil.move(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def export_resume(
    surface: RenderedSurface,
    output_dir: Optional[Path] = None,
    log_dir: Optional[Path] = None,
    scale: float = DEFAULT_SCALE,
    rasterize: Rasterizer = capture_surface,
) -> ExportResult:
    """
    Export a surface to a PDF file with session logging and organized output.

    On success:
        - Writes the PDF to output_dir (default: RESULTS_PATH/YYYY-MM-DD/)
        - Creates a symlink in the log directory pointing to the PDF

    Args:
        surface: Rendered HTML surface
        output_dir: Directory for the PDF (default: dated results directory)
        log_dir: Session log directory (default: LOGS_PATH/export_{timestamp})
        scale: Raster scale
        rasterize: Capture function

    Returns:
        ExportResult with pdf_path set

    Raises:
        ExportError: If capture or assembly fails
    """
    if log_dir is None:
        log_dir = LOGS_PATH / f"export_{now()}"
    log_dir = Path(log_dir)

    setup_export_logger(log_dir, scale)
    log_export_start(surface.profile_name, surface.theme.value, scale, log_dir)

    filename = export_filename(surface.profile_name)
    start_time = time.time()

    try:
        result = export_to_document(surface, scale=scale, rasterize=rasterize)
    except ExportError as e:
        log_export_result(filename, None, time.time() - start_time, error=e)
        raise

    log_export_result(filename, result, time.time() - start_time)

    output_dir = Path(output_dir) if output_dir is not None else RESULTS_PATH / today()
    output_dir.mkdir(parents=True, exist_ok=True)

    pdf_path = (output_dir / result.filename).resolve()
    _write_atomic(pdf_path, result.pdf_bytes)
    _log_info(f"PDF saved to: {pdf_path}")

    pdf_symlink = log_dir / result.filename
    if not pdf_symlink.exists() and not pdf_symlink.is_symlink():
        pdf_symlink.symlink_to(pdf_path)

    result.pdf_path = pdf_path
    return result
