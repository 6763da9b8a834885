"""
Reporting module: composition, pagination, rasterizing and PDF export.
"""

from src.reporting.composer import compose, render_text, SECTION_ORDER
from src.reporting.pagination import PageGeometry, paginate, iter_page_offsets
from src.reporting.renderer import DocumentRenderer, RenderedDocument
from src.reporting.exporter import ChecklistExporter, checklist_filename

__all__ = [
    "compose",
    "render_text",
    "SECTION_ORDER",
    "PageGeometry",
    "paginate",
    "iter_page_offsets",
    "DocumentRenderer",
    "RenderedDocument",
    "ChecklistExporter",
    "checklist_filename",
]
