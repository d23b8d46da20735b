"""Unit tests for pagination, PDF assembly and the export pipeline (no browser)."""

from io import BytesIO

import pytest
from PIL import Image
from PyPDF2 import PdfReader

from resume_maker import __version__
from resume_maker.contexts.editing import update
from resume_maker.contexts.rendering import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    ExportError,
    assemble_pdf,
    export_filename,
    export_resume,
    export_to_document,
    plan_pages,
)
from resume_maker.contexts.rendering import exporter
from resume_maker.contexts.rendering.paginator import render_pages
from resume_maker.contexts.templating import render_surface

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


# plan_pages


@pytest.mark.unit
@pytest.mark.parametrize(
    "bitmap_height, expected_pages",
    [
        (0, 1),
        (50, 1),
        (100, 1),
        (101, 2),
        (200, 2),
        (240, 3),
        (1000, 10),
    ],
)
def test_page_count_is_ceiling_with_minimum_one(bitmap_height, expected_pages):
    """Test the page count for a 100x100pt page and a 100px wide bitmap."""
    plan = plan_pages(100, bitmap_height, page_width_pt=100, page_height_pt=100)
    assert plan.page_count == expected_pages


@pytest.mark.unit
def test_two_point_four_pages_yields_three():
    """Test the A4 case of a bitmap 2.4 pages tall."""
    width = 1588
    height = round(2.4 * A4_HEIGHT_PT * width / A4_WIDTH_PT)

    plan = plan_pages(width, height)

    assert plan.image_height_pt == pytest.approx(2.4 * A4_HEIGHT_PT, rel=1e-3)
    assert plan.page_count == 3


@pytest.mark.unit
def test_placements_shift_by_page_height():
    """Test width-locked placement offsets."""
    plan = plan_pages(100, 240, page_width_pt=100, page_height_pt=100)

    assert [p.offset_pt for p in plan.placements] == [0, -100, -200]
    assert [plan.source_rows(p) for p in plan.placements] == [(0, 100), (100, 200), (200, 240)]


@pytest.mark.unit
def test_width_locked_scaling():
    """Test that the image height scales with the page width."""
    plan = plan_pages(1588, 1588)
    assert plan.image_height_pt == pytest.approx(A4_WIDTH_PT)
    assert plan.pixels_per_point == pytest.approx(1588 / A4_WIDTH_PT)


@pytest.mark.unit
def test_plan_is_reproducible():
    assert plan_pages(1588, 5000) == plan_pages(1588, 5000)


@pytest.mark.unit
@pytest.mark.parametrize("width, height", [(0, 100), (-1, 100), (100, -1)])
def test_plan_rejects_invalid_bitmap(width, height):
    with pytest.raises(ValueError):
        plan_pages(width, height)


# Page images


@pytest.mark.unit
def test_last_page_padded_with_white():
    bitmap = Image.new("RGB", (100, 240), BLACK)
    plan = plan_pages(100, 240, page_width_pt=100, page_height_pt=100)

    pages = render_pages(bitmap, plan)

    assert [page.size for page in pages] == [(100, 100)] * 3
    assert pages[1].getpixel((50, 99)) == BLACK
    assert pages[2].getpixel((50, 39)) == BLACK
    assert pages[2].getpixel((50, 40)) == WHITE
    assert pages[2].getpixel((50, 99)) == WHITE


@pytest.mark.unit
def test_pages_follow_bitmap_rows():
    """Test that each page shows the next segment of the bitmap."""
    bitmap = Image.new("RGB", (100, 200), WHITE)
    bitmap.paste((255, 0, 0), (0, 100, 100, 200))
    plan = plan_pages(100, 200, page_width_pt=100, page_height_pt=100)

    first, second = render_pages(bitmap, plan)

    assert first.getpixel((10, 10)) == WHITE
    assert second.getpixel((10, 10)) == (255, 0, 0)


# assemble_pdf


@pytest.mark.unit
def test_assemble_pdf_pages_are_a4():
    bitmap = Image.new("RGB", (1588, 5000), (30, 60, 90))
    plan = plan_pages(bitmap.width, bitmap.height)

    reader = PdfReader(BytesIO(assemble_pdf(bitmap, plan)))

    assert len(reader.pages) == plan.page_count == 3
    for page in reader.pages:
        assert float(page.mediabox.width) == pytest.approx(A4_WIDTH_PT, abs=1)
        assert float(page.mediabox.height) == pytest.approx(A4_HEIGHT_PT, abs=1)


@pytest.mark.unit
def test_assemble_pdf_accepts_rgba():
    bitmap = Image.new("RGBA", (200, 100), (0, 0, 0, 0))
    plan = plan_pages(bitmap.width, bitmap.height)
    assert assemble_pdf(bitmap, plan).startswith(b"%PDF")


# export_filename


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, filename",
    [
        ("Ada Lovelace", "Ada_Lovelace_Resume.pdf"),
        ("Ada   Byron  Lovelace", "Ada_Byron_Lovelace_Resume.pdf"),
        ("Ada\tLovelace", "Ada_Lovelace_Resume.pdf"),
        ("Ada", "Ada_Resume.pdf"),
        ("", "_Resume.pdf"),
    ],
)
def test_export_filename(name, filename):
    assert export_filename(name) == filename


# export_to_document


@pytest.mark.unit
def test_export_to_document(document, rasterizer_factory):
    """Test the pipeline with a stand-in capture 2.4 pages tall."""
    rasterize = rasterizer_factory(height_ratio=2.4 * A4_HEIGHT_PT / A4_WIDTH_PT)
    surface = render_surface(update(document, "profile.name", "Ada Lovelace"))

    result = export_to_document(surface, rasterize=rasterize)

    assert rasterize.calls == [(surface, 2)]
    assert result.plan.bitmap_width == 1588
    assert result.page_count == 3
    assert result.filename == "Ada_Lovelace_Resume.pdf"
    assert result.pdf_bytes.startswith(b"%PDF")
    assert result.pdf_path is None


@pytest.mark.unit
def test_export_to_document_single_page(document, rasterizer_factory):
    rasterize = rasterizer_factory(height_ratio=A4_HEIGHT_PT / A4_WIDTH_PT * 0.9)
    result = export_to_document(render_surface(document), rasterize=rasterize)
    assert result.page_count == 1


@pytest.mark.unit
def test_export_to_document_custom_scale(document, rasterizer_factory):
    rasterize = rasterizer_factory()
    result = export_to_document(render_surface(document), scale=1, rasterize=rasterize)
    assert result.plan.bitmap_width == 794


@pytest.mark.unit
def test_export_propagates_capture_errors(document):
    def broken(surface, scale):
        raise ExportError("browser crashed", stage="capture")

    with pytest.raises(ExportError):
        export_to_document(render_surface(document), rasterize=broken)


# export_resume


@pytest.mark.unit
def test_export_resume_writes_pdf_and_log(tmp_path, document, rasterizer_factory):
    """Test the orchestrator's output file, symlink and session log."""
    output_dir = tmp_path / "results"
    log_dir = tmp_path / "logs" / "export_test"

    result = export_resume(
        render_surface(document),
        output_dir=output_dir,
        log_dir=log_dir,
        rasterize=rasterizer_factory(),
    )

    assert result.pdf_path == (output_dir / "Your_Name_Resume.pdf").resolve()
    assert result.pdf_path.read_bytes() == result.pdf_bytes
    assert (log_dir / "Your_Name_Resume.pdf").is_symlink()

    log_text = (log_dir / "export.log").read_text()
    assert "[export] Starting export: Your Name" in log_text
    assert "Raster scale: 2" in log_text
    assert f"Resume Maker {__version__}" in log_text


@pytest.mark.unit
def test_export_resume_failure_is_logged(tmp_path, document):
    def broken(surface, scale):
        raise ExportError("browser crashed", stage="capture")

    log_dir = tmp_path / "logs"
    with pytest.raises(ExportError):
        export_resume(render_surface(document), output_dir=tmp_path / "out", log_dir=log_dir, rasterize=broken)

    assert "[export] Export of Your_Name_Resume.pdf failed" in (log_dir / "export.log").read_text()
    assert not (tmp_path / "out").exists()


@pytest.mark.unit
def test_failed_pdf_write_leaves_no_temp_file(tmp_path, monkeypatch, document, rasterizer_factory):
    def failing_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(exporter.shutil, "move", failing_move)
    output_dir = tmp_path / "out"

    with pytest.raises(OSError, match="disk full"):
        export_resume(
            render_surface(document),
            output_dir=output_dir,
            log_dir=tmp_path / "logs",
            rasterize=rasterizer_factory(),
        )

    assert list(output_dir.iterdir()) == []
