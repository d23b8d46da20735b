"""
Rendering Context

Responsibilities:
- Captures a mounted resume surface into a bitmap (headless Chromium)
- Places the bitmap width-locked on A4 pages and cuts it into page-height segments
- Assembles the pages into a PDF and writes it to the results directory

Owns: Rasterization, pagination, PDF assembly, export logs
Never: Decides layout or touches document content
"""

from resume_maker.contexts.rendering.exceptions import ExportError
from resume_maker.contexts.rendering.exporter import (
    ExportResult,
    export_filename,
    export_resume,
    export_to_document,
)
from resume_maker.contexts.rendering.paginator import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    PagePlacement,
    PaginationPlan,
    assemble_pdf,
    plan_pages,
)
from resume_maker.contexts.rendering.rasterizer import capture_surface

__all__ = [
    # Orchestration
    "export_to_document",
    "export_resume",
    "export_filename",
    "ExportResult",
    # Pipeline stages
    "capture_surface",
    "plan_pages",
    "assemble_pdf",
    "PagePlacement",
    "PaginationPlan",
    "A4_WIDTH_PT",
    "A4_HEIGHT_PT",
    # Errors
    "ExportError",
]
