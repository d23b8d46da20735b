"""
End-to-end export through a headless Chromium.

Skipped when Playwright's Chromium is not installed
(install with: playwright install chromium).
"""

from io import BytesIO

import pytest
from PyPDF2 import PdfReader

from resume_maker.contexts.editing import add_array_item, update
from resume_maker.contexts.rendering import A4_HEIGHT_PT, A4_WIDTH_PT, export_to_document
from resume_maker.contexts.rendering.rasterizer import capture_surface
from resume_maker.contexts.templating import render_surface


def chromium_available() -> bool:
    try:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as p:
            p.chromium.launch(headless=True).close()
    except Exception:
        return False
    return True


pytestmark = [
    pytest.mark.integration,
    pytest.mark.browser,
    pytest.mark.skipif(not chromium_available(), reason="Playwright Chromium not installed"),
]


def long_document(document, entries=12):
    """Document with enough experience entries to run past one page."""
    entry = document.experience[0]
    for _ in range(entries):
        document = add_array_item(document, "experience", entry.clone)
    return update(document, "profile.name", "Ada Lovelace")


@pytest.mark.parametrize("theme", ["classic", "modern"])
def test_capture_matches_surface_width(document, theme):
    surface = render_surface(update(document, "meta.theme", theme))

    bitmap = capture_surface(surface, scale=2)

    assert bitmap.mode == "RGB"
    assert bitmap.width == 794 * 2
    assert bitmap.height >= 1123 * 2


def test_dark_surface_captures_dark_background(document):
    surface = render_surface(update(document, "meta.dark", True))

    bitmap = capture_surface(surface, scale=1)

    assert sum(bitmap.getpixel((2, bitmap.height - 2))) < 3 * 64


def test_single_page_export(document):
    result = export_to_document(render_surface(document))
    reader = PdfReader(BytesIO(result.pdf_bytes))

    assert result.page_count == len(reader.pages) >= 1
    page = reader.pages[0]
    assert float(page.mediabox.width) == pytest.approx(A4_WIDTH_PT, abs=1)
    assert float(page.mediabox.height) == pytest.approx(A4_HEIGHT_PT, abs=1)


def test_long_resume_spans_pages(document):
    result = export_to_document(render_surface(long_document(document)))

    assert result.filename == "Ada_Lovelace_Resume.pdf"
    assert result.page_count >= 2
    assert len(PdfReader(BytesIO(result.pdf_bytes)).pages) == result.page_count
