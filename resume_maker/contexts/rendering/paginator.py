"""
Page placement and PDF assembly.

The captured bitmap is placed at the full page width with its height scaled
proportionally, then cut into page-height segments. Each page shows the same
image shifted up by one page height per page, so the first page starts at the
top of the bitmap and the last page is padded with white.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import List, Tuple

from PIL import Image

from resume_maker.contexts.rendering.exceptions import ExportError
from resume_maker.contexts.rendering.logger import _log_debug

# A4 portrait in PDF points
A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89

POINTS_PER_INCH = 72
PAGE_BACKGROUND = (255, 255, 255)


@dataclass(frozen=True)
class PagePlacement:
    """
    Where the image sits on one page.

    Attributes:
        index: Zero-based page number
        offset_pt: Vertical image position on the page (0, -page_height, ...)
    """

    index: int
    offset_pt: float


@dataclass(frozen=True)
class PaginationPlan:
    """Width-locked placement of one bitmap across pages."""

    bitmap_width: int
    bitmap_height: int
    page_width_pt: float
    page_height_pt: float
    image_height_pt: float
    placements: Tuple[PagePlacement, ...]

    @property
    def page_count(self) -> int:
        return len(self.placements)

    @property
    def pixels_per_point(self) -> float:
        return self.bitmap_width / self.page_width_pt

    @property
    def page_height_px(self) -> float:
        return self.page_height_pt * self.pixels_per_point

    def source_rows(self, placement: PagePlacement) -> Tuple[int, int]:
        """Bitmap row range [top, bottom) shown on a page."""
        top = round(-placement.offset_pt * self.pixels_per_point)
        bottom = min(round(top + self.page_height_px), self.bitmap_height)
        return top, max(top, bottom)


def plan_pages(
    bitmap_width: int,
    bitmap_height: int,
    page_width_pt: float = A4_WIDTH_PT,
    page_height_pt: float = A4_HEIGHT_PT,
) -> PaginationPlan:
    """
    Compute page placements for a bitmap.

    Pages are emitted while the covered height is below the scaled image
    height, with at least one page. A scaled height of 2.4 pages yields 3.

    Args:
        bitmap_width: Bitmap width in pixels (must be positive)
        bitmap_height: Bitmap height in pixels
        page_width_pt: Page width in points
        page_height_pt: Page height in points

    Returns:
        PaginationPlan (same inputs always give an equal plan)

    Raises:
        ValueError: If bitmap_width is not positive or the bitmap height is negative
    """
    if bitmap_width <= 0:
        raise ValueError(f"Bitmap width must be positive, got {bitmap_width}")
    if bitmap_height < 0:
        raise ValueError(f"Bitmap height must not be negative, got {bitmap_height}")

    image_height_pt = bitmap_height * page_width_pt / bitmap_width

    placements: List[PagePlacement] = []
    covered = 0.0
    while True:
        index = len(placements)
        placements.append(PagePlacement(index=index, offset_pt=-index * page_height_pt))
        covered += page_height_pt
        if covered >= image_height_pt:
            break

    return PaginationPlan(
        bitmap_width=bitmap_width,
        bitmap_height=bitmap_height,
        page_width_pt=page_width_pt,
        page_height_pt=page_height_pt,
        image_height_pt=image_height_pt,
        placements=tuple(placements),
    )


def render_pages(bitmap: Image.Image, plan: PaginationPlan) -> List[Image.Image]:
    """
    Cut the bitmap into page images of exactly one page height each.

    Returns:
        One RGB image per placement; the last is padded with white
    """
    page_height_px = round(plan.page_height_px)
    pages = []

    for placement in plan.placements:
        top, bottom = plan.source_rows(placement)
        page = Image.new("RGB", (plan.bitmap_width, page_height_px), PAGE_BACKGROUND)
        if bottom > top:
            page.paste(bitmap.crop((0, top, plan.bitmap_width, bottom)), (0, 0))
        pages.append(page)

    return pages


def assemble_pdf(bitmap: Image.Image, plan: PaginationPlan) -> bytes:
    """
    Build a PDF with one page per placement.

    The PDF resolution is chosen so each page image spans exactly the page
    width in points.

    Raises:
        ExportError: If Pillow fails to write the PDF
    """
    bitmap = bitmap.convert("RGB")
    pages = render_pages(bitmap, plan)
    resolution = POINTS_PER_INCH * plan.pixels_per_point

    _log_debug(f"Assembling {len(pages)} page(s) at {resolution:.1f} dpi")

    buffer = BytesIO()
    try:
        pages[0].save(
            buffer,
            format="PDF",
            resolution=resolution,
            save_all=True,
            append_images=pages[1:],
        )
    except (OSError, ValueError) as e:
        raise ExportError("Failed to assemble PDF", stage="assemble", original_error=e) from e

    return buffer.getvalue()
