"""
Multi-page PDF export of a rendered checklist.

Every page redraws the same raster at the offset computed by the pagination
engine, clipped to the printable window between the margins.
"""

import io
import re
from typing import Optional, Sequence

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from src.errors import ExportFailure
from src.reporting.pagination import PageGeometry, scale_to_page_width
from src.reporting.renderer import RenderedDocument
from utils.logger import setup_logger
from utils.config import config

logger = setup_logger(__name__, level=config.log_level, component="EXPORTER")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def default_geometry() -> PageGeometry:
    """Configured page geometry in PDF points."""
    return PageGeometry.uniform(
        width=config.page_width_mm * mm,
        height=config.page_height_mm * mm,
        margin=config.page_margin_mm * mm,
    )


def checklist_filename(brand: str, service_order: str) -> str:
    """``checklist-<brand>-<serviceOrder>.pdf`` with filesystem-safe parts."""
    def _clean(value: str) -> str:
        return _UNSAFE_FILENAME_CHARS.sub("_", value.strip()).strip("._") or "sem-os"

    return f"checklist-{_clean(brand)}-{_clean(service_order)}.pdf"


class ChecklistExporter:
    """Writes a paginated raster to PDF bytes."""

    def __init__(self, geometry: Optional[PageGeometry] = None, title: Optional[str] = None):
        self.logger = logger
        self.geometry = geometry or default_geometry()
        self.title = title or config.app_title

    def image_height(self, rendered: RenderedDocument) -> float:
        """Raster height once scaled to the page content width."""
        return scale_to_page_width(rendered.width, rendered.height, self.geometry.content_width)

    def export(self, rendered: RenderedDocument, offsets: Sequence[float]) -> bytes:
        """
        Build the PDF.

        Args:
            rendered: Raster of the whole document
            offsets: One top-down offset per page, from the pagination engine

        Returns:
            PDF file bytes

        Raises:
            ExportFailure: If the PDF cannot be produced
        """
        if not offsets:
            raise ExportFailure("No pages to export")

        geometry = self.geometry
        image_width = geometry.content_width
        image_height = self.image_height(rendered)
        page_count = len(offsets)

        self.logger.info(f"Exporting {page_count} page(s), image {image_width:.1f}x{image_height:.1f}pt")

        buffer = io.BytesIO()
        try:
            pdf = canvas.Canvas(buffer, pagesize=(geometry.width, geometry.height))
            pdf.setTitle(self.title)
            pdf.setAuthor(config.brand_name)

            image = ImageReader(rendered.image)

            for page_number, offset in enumerate(offsets, 1):
                pdf.saveState()
                window = pdf.beginPath()
                window.rect(
                    geometry.left_margin,
                    geometry.bottom_margin,
                    geometry.content_width,
                    geometry.usable_height,
                )
                pdf.clipPath(window, stroke=0, fill=0)
                # ReportLab measures y from the bottom edge
                pdf.drawImage(
                    image,
                    geometry.left_margin,
                    geometry.height - offset - image_height,
                    width=image_width,
                    height=image_height,
                )
                pdf.restoreState()
                self._draw_page_number(pdf, page_number, page_count)
                pdf.showPage()

            pdf.save()
        except Exception as e:
            self.logger.error(f"PDF export failed: {e}")
            raise ExportFailure(f"Failed to export PDF: {e}", cause=e)

        return buffer.getvalue()

    def _draw_page_number(self, pdf: canvas.Canvas, page_number: int, page_count: int):
        """Page number in the bottom margin."""
        if page_count < 2 or self.geometry.bottom_margin < 8:
            return
        pdf.saveState()
        pdf.setFont("Helvetica", 7)
        pdf.setFillColorRGB(0.4, 0.4, 0.4)
        pdf.drawRightString(
            self.geometry.width - self.geometry.right_margin,
            self.geometry.bottom_margin / 2,
            f"Página {page_number} de {page_count}",
        )
        pdf.restoreState()
