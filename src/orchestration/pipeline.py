"""
Checklist generation pipeline.

validate -> snapshot -> infer -> compose -> render -> paginate -> export -> write

Rendering and export run in worker threads and are awaited one after the
other; pagination only starts once the raster exists, and export only once
every page offset is known.
"""

import asyncio
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from src.diagnostics.rules import infer
from src.errors import CaseValidationError, ChecklistError, ExportFailure
from src.reporting.composer import compose, render_text
from src.reporting.exporter import ChecklistExporter, checklist_filename
from src.reporting.pagination import paginate
from src.reporting.renderer import DocumentRenderer
from src.schemas.models import ChecklistForm, InspectionRecord
from utils.logger import (
    clear_request_id,
    new_request_id,
    print_error,
    print_generation_result,
    setup_logger,
)
from utils.config import config, REPORT_DIR

logger = setup_logger(__name__, level=config.log_level, log_file=config.get_log_file(), component="PIPELINE")


class GenerationResult:
    """Outcome of a successful generation."""

    def __init__(
        self,
        path: Path,
        content: bytes,
        page_count: int,
        diagnostics: List[str],
        text: str,
        request_id: str,
    ):
        self.path = path
        self.content = content
        self.page_count = page_count
        self.diagnostics = diagnostics
        self.text = text
        self.request_id = request_id

    @property
    def filename(self) -> str:
        return self.path.name

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "filename": self.filename,
            "page_count": self.page_count,
            "diagnostics": list(self.diagnostics),
            "request_id": self.request_id,
        }


def take_snapshot(source: Union[ChecklistForm, InspectionRecord]) -> InspectionRecord:
    """Validate required fields and freeze the record."""
    missing = source.missing_fields()
    if missing:
        raise CaseValidationError(missing)
    if isinstance(source, ChecklistForm):
        return source.snapshot()
    return source


async def generate_checklist(
    source: Union[ChecklistForm, InspectionRecord],
    output_dir: Optional[Path] = None,
    generated_at: Optional[datetime] = None,
    renderer: Optional[DocumentRenderer] = None,
    exporter: Optional[ChecklistExporter] = None,
) -> GenerationResult:
    """
    Generate the checklist PDF for a form or record.

    Args:
        source: Live form (snapshotted here) or an existing snapshot
        output_dir: Where to write the PDF (defaults to REPORT_DIR)
        generated_at: Footer timestamp (defaults to now)
        renderer: Rasterizer to use
        exporter: PDF exporter to use

    Returns:
        GenerationResult with the written path

    Raises:
        CaseValidationError: Required case fields are blank
        RenderFailure: The document could not be rasterized
        ExportFailure: The PDF could not be built or written
    """
    request_id = new_request_id()
    start_time = time.time()

    try:
        record = take_snapshot(source)
        logger.info(f"Generating checklist for OS {record.service_order}")

        diagnostics = infer(record)
        logger.info(f"Diagnostics: {len(diagnostics)} statement(s)")

        document = compose(record, diagnostics, generated_at=generated_at)

        renderer = renderer or DocumentRenderer()
        exporter = exporter or ChecklistExporter()

        rendered = await asyncio.to_thread(renderer.render, document)

        geometry = exporter.geometry
        offsets = paginate(
            exporter.image_height(rendered),
            geometry.width,
            geometry.height,
            geometry.top_margin,
            geometry.bottom_margin,
        )

        content = await asyncio.to_thread(exporter.export, rendered, offsets)

        output_dir = Path(output_dir) if output_dir is not None else REPORT_DIR
        path = output_dir / checklist_filename(config.brand_name, record.service_order)
        await asyncio.to_thread(_write_file, path, content)

    except ChecklistError as e:
        logger.error(f"Checklist generation failed: {e}")
        print_error(type(e).__name__, e.user_message, str(e))
        clear_request_id()
        raise

    processing_time = time.time() - start_time
    logger.info(f"Checklist written: {path} ({len(offsets)} page(s), {processing_time:.2f}s)")
    print_generation_result(
        service_order=record.service_order,
        diagnostics=diagnostics,
        page_count=len(offsets),
        processing_time=processing_time,
        report_path=str(path),
    )
    clear_request_id()

    return GenerationResult(
        path=path,
        content=content,
        page_count=len(offsets),
        diagnostics=diagnostics,
        text=render_text(document),
        request_id=request_id,
    )


def _write_file(path: Path, content: bytes):
    """Write atomically so a failed attempt leaves no partial PDF behind."""
    tmp_path = path.with_name(path.name + ".part")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(content)
        tmp_path.replace(path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise ExportFailure(f"Failed to write {path}: {e}", cause=e)


def generate_checklist_sync(
    source: Union[ChecklistForm, InspectionRecord],
    output_dir: Optional[Path] = None,
    generated_at: Optional[datetime] = None,
) -> GenerationResult:
    """Blocking wrapper for callers without an event loop (the Streamlit UI)."""
    return asyncio.run(generate_checklist(source, output_dir=output_dir, generated_at=generated_at))
