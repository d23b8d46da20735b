"""
Surface capture.

Mounts a rendered surface in headless Chromium at the fixed surface size and
screenshots the surface element at a fixed device scale factor.
"""

from io import BytesIO

from PIL import Image
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from resume_maker.contexts.rendering.exceptions import ExportError
from resume_maker.contexts.rendering.logger import _log_debug
from resume_maker.contexts.templating.surface import RenderedSurface

CAPTURE_TIMEOUT_MS = 30000


def capture_surface(surface: RenderedSurface, scale: float) -> Image.Image:
    """
    Capture a surface into a bitmap.

    The viewport is the surface's own size (794x1123 CSS px); content taller
    than the minimum height extends the captured element, not the viewport.

    Args:
        surface: Rendered HTML surface
        scale: Device scale factor (2 gives a 1588 px wide bitmap)

    Returns:
        RGB Pillow image of the whole surface element

    Raises:
        ExportError: If the browser cannot be launched or the capture fails
    """
    _log_debug(f"Capturing {surface.selector} at {scale}x")

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                context = browser.new_context(
                    viewport={"width": surface.width, "height": surface.min_height},
                    device_scale_factor=scale,
                )
                page = context.new_page()
                page.set_content(surface.html, wait_until="load", timeout=CAPTURE_TIMEOUT_MS)
                png = page.locator(surface.selector).screenshot(
                    type="png", timeout=CAPTURE_TIMEOUT_MS
                )
            finally:
                browser.close()
    except PlaywrightError as e:
        raise ExportError("Failed to capture resume surface", stage="capture", original_error=e) from e

    bitmap = Image.open(BytesIO(png)).convert("RGB")
    _log_debug(f"Captured bitmap {bitmap.width}x{bitmap.height}px")
    return bitmap
