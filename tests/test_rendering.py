"""
Tests for the rasterizer and the PDF exporter.
"""

import logging
import re

import pytest
from PIL import Image

from src.diagnostics.rules import infer
from src.errors import ExportFailure, RenderFailure
from src.reporting.composer import compose
from src.reporting.exporter import ChecklistExporter, checklist_filename
from src.reporting.pagination import PageGeometry, paginate_geometry
from src.reporting.renderer import DocumentRenderer
from src.schemas.models import InspectionRecord, RepairType
from utils.config import config
from utils.image_utils import decode_image


def _count_pdf_pages(content: bytes) -> int:
    return len(re.findall(rb"/Type /Page\b", content))


@pytest.fixture
def renderer():
    return DocumentRenderer(width_px=400, scale=1)


class TestDocumentRenderer:
    """Tests for DocumentRenderer."""

    def test_renders_fixed_width(self, renderer, blank_record):
        rendered = renderer.render(compose(blank_record, infer(blank_record)))
        assert rendered.width == 400
        assert rendered.height > 0
        assert rendered.image.mode == "RGB"

    def test_scale_multiplies_width(self, blank_record):
        rendered = DocumentRenderer(width_px=300, scale=2).render(compose(blank_record, infer(blank_record)))
        assert rendered.width == 600

    def test_photos_make_document_taller(self, renderer, photo):
        without = InspectionRecord(service_order="OS1", customer_name="Ana")
        with_photos = InspectionRecord(service_order="OS1", customer_name="Ana", photos=[photo, photo, photo])

        short = renderer.render(compose(without, infer(without)))
        tall = renderer.render(compose(with_photos, infer(with_photos)))
        assert tall.height > short.height

    def test_long_problem_text_wraps(self, renderer):
        short = InspectionRecord(
            service_order="OS1", customer_name="Ana",
            repair_types=[RepairType.ESTIMATE], problem_text="curto",
        )
        long = InspectionRecord(
            service_order="OS1", customer_name="Ana",
            repair_types=[RepairType.ESTIMATE], problem_text="palavra " * 200,
        )
        assert renderer.render(compose(long, infer(long))).height > renderer.render(compose(short, infer(short))).height

    def test_corrupt_photo_is_render_failure(self, renderer, corrupt_photo):
        record = InspectionRecord(service_order="OS1", customer_name="Ana", photos=[corrupt_photo])
        with pytest.raises(RenderFailure):
            renderer.render(compose(record, infer(record)))

    def test_warns_without_marker_font(self, monkeypatch, caplog):
        monkeypatch.setattr(config, "render_font_path", None)
        with caplog.at_level(logging.WARNING):
            renderer = DocumentRenderer(width_px=400, scale=1)

        assert renderer.font_path is None
        assert "answer markers" in caplog.text

    def test_configured_font_path_is_used(self, caplog):
        with caplog.at_level(logging.WARNING):
            renderer = DocumentRenderer(width_px=400, scale=1, font_path="/nonexistent/Symbola.ttf")

        assert renderer.font_path == "/nonexistent/Symbola.ttf"
        assert "answer markers" not in caplog.text

    def test_oversized_photo_is_render_failure(self, renderer, photo, monkeypatch):
        """A photo over Pillow's pixel limit fails the render instead of escaping."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        record = InspectionRecord(service_order="OS1", customer_name="Ana", photos=[photo])

        with pytest.raises(RenderFailure):
            renderer.render(compose(record, infer(record)))

    def test_decode_rejects_oversized_image(self, png_bytes, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        with pytest.raises(ValueError):
            decode_image(png_bytes, "grande.png")


class TestChecklistExporter:
    """Tests for ChecklistExporter."""

    @pytest.fixture
    def geometry(self):
        return PageGeometry.uniform(width=200, height=300, margin=10)

    def test_single_page(self, renderer, blank_record, geometry):
        exporter = ChecklistExporter(geometry)
        rendered = renderer.render(compose(blank_record, infer(blank_record)))
        offsets = [10]

        content = exporter.export(rendered, offsets)
        assert content.startswith(b"%PDF")
        assert _count_pdf_pages(content) == 1

    def test_page_count_follows_offsets(self, renderer, blank_record, geometry):
        exporter = ChecklistExporter(geometry)
        rendered = renderer.render(compose(blank_record, infer(blank_record)))
        offsets = paginate_geometry(exporter.image_height(rendered), geometry)

        assert len(offsets) > 1
        assert _count_pdf_pages(exporter.export(rendered, offsets)) == len(offsets)

    def test_image_height_scales_to_content_width(self, renderer, blank_record, geometry):
        rendered = renderer.render(compose(blank_record, infer(blank_record)))
        expected = rendered.height * geometry.content_width / rendered.width
        assert ChecklistExporter(geometry).image_height(rendered) == pytest.approx(expected)

    def test_no_offsets_is_export_failure(self, renderer, blank_record, geometry):
        rendered = renderer.render(compose(blank_record, infer(blank_record)))
        with pytest.raises(ExportFailure):
            ChecklistExporter(geometry).export(rendered, [])


class TestChecklistFilename:
    """Tests for checklist_filename."""

    def test_convention(self):
        assert checklist_filename("JCELL", "OS123") == "checklist-JCELL-OS123.pdf"

    def test_unsafe_characters_replaced(self):
        assert checklist_filename("JCELL", "../OS 12/3") == "checklist-JCELL-OS_12_3.pdf"
