"""
Checklist document composition.
Assembles case info, answers, photos and diagnostics into ordered sections.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from src.diagnostics.rules import is_no_defect
from src.schemas.document import (
    ConditionalBlockSection,
    Document,
    FooterSection,
    GallerySection,
    HeaderSection,
    KeyValueSection,
    ListSection,
)
from src.schemas.models import InspectionQuestion, InspectionRecord, state_marker
from utils.logger import setup_logger
from utils.config import config

logger = setup_logger(__name__, level=config.log_level, component="COMPOSER")


# ============================================================================
# SECTION IDS - canonical order
# ============================================================================
SECTION_HEADER = "header"
SECTION_BASIC_INFO = "basic_info"
SECTION_REQUESTED_SERVICES = "requested_services"
SECTION_PROBLEM_DESCRIPTION = "problem_description"
SECTION_INSPECTION = "inspection"
SECTION_PHOTOS = "photos"
SECTION_DIAGNOSTICS = "diagnostics"
SECTION_FOOTER = "footer"

SECTION_ORDER = [
    SECTION_HEADER,
    SECTION_BASIC_INFO,
    SECTION_REQUESTED_SERVICES,
    SECTION_PROBLEM_DESCRIPTION,
    SECTION_INSPECTION,
    SECTION_PHOTOS,
    SECTION_DIAGNOSTICS,
    SECTION_FOOTER,
]

NO_REPAIR_TYPE_PLACEHOLDER = "Nenhum selecionado"
NO_PHOTO_PLACEHOLDER = "Nenhuma foto anexada"
REPAIR_TYPE_SEPARATOR = ", "

TITLE_BASIC_INFO = "Informações Básicas"
TITLE_REQUESTED_SERVICES = "Serviços Solicitados"
TITLE_PROBLEM_DESCRIPTION = "Descrição do Problema"
TITLE_INSPECTION = "Inspeção Visual"
TITLE_PHOTOS = "Fotos"
TITLE_DIAGNOSTICS_FINDINGS = "Análise de Defeitos e Possíveis Problemas"
TITLE_DIAGNOSTICS_CLEAN = "Análise de Defeitos"


def format_timestamp(moment: datetime) -> str:
    """Timestamp in the dd/mm/yyyy HH:MM:SS form used on the footer."""
    return moment.strftime("%d/%m/%Y %H:%M:%S")


def has_problem_description(record: InspectionRecord) -> bool:
    """Problem text only counts for estimates and only when non-blank."""
    return record.is_estimate and bool(record.problem_text.strip())


def compose(
    record: InspectionRecord,
    diagnostics: Sequence[str],
    brand: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> Document:
    """
    Build the checklist document.

    Args:
        record: Snapshot of the checklist
        diagnostics: Output of the rule engine
        brand: Shop name for the header (defaults to config)
        generated_at: Footer timestamp (defaults to now)

    Returns:
        Document with sections in canonical order
    """
    brand = brand or config.brand_name
    generated_at = generated_at or datetime.now()

    sections = [
        HeaderSection(section_id=SECTION_HEADER, title=f"{brand} - Checklist Técnico"),
        KeyValueSection(
            section_id=SECTION_BASIC_INFO,
            title=TITLE_BASIC_INFO,
            items=(
                ("Data", record.case_date),
                ("Número da OS", record.service_order),
                ("Cliente", record.customer_name),
            ),
        ),
        KeyValueSection(
            section_id=SECTION_REQUESTED_SERVICES,
            title=TITLE_REQUESTED_SERVICES,
            items=(("Tipo de Reparo", _repair_types_text(record)),),
        ),
    ]

    if has_problem_description(record):
        sections.append(ConditionalBlockSection(
            section_id=SECTION_PROBLEM_DESCRIPTION,
            title=TITLE_PROBLEM_DESCRIPTION,
            text=record.problem_text,
        ))

    sections.append(KeyValueSection(
        section_id=SECTION_INSPECTION,
        title=TITLE_INSPECTION,
        items=tuple(
            (question.label, state_marker(record.answer(question)))
            for question in InspectionQuestion
        ),
    ))

    sections.append(GallerySection(
        section_id=SECTION_PHOTOS,
        title=TITLE_PHOTOS,
        photos=tuple(record.attached_photos),
        placeholder=NO_PHOTO_PLACEHOLDER,
    ))

    diagnostics = list(diagnostics)
    sections.append(ListSection(
        section_id=SECTION_DIAGNOSTICS,
        title=TITLE_DIAGNOSTICS_CLEAN if is_no_defect(diagnostics) else TITLE_DIAGNOSTICS_FINDINGS,
        items=tuple(diagnostics),
    ))

    sections.append(FooterSection(
        section_id=SECTION_FOOTER,
        text=f"Checklist gerado em {format_timestamp(generated_at)}",
    ))

    document = Document(sections=tuple(sections))
    logger.debug(f"Composed document: {document.section_ids}")
    return document


def _repair_types_text(record: InspectionRecord) -> str:
    if not record.repair_types:
        return NO_REPAIR_TYPE_PLACEHOLDER
    return REPAIR_TYPE_SEPARATOR.join(tag.label for tag in record.repair_types)


# ============================================================================
# PLAIN TEXT FORM
# ============================================================================

def render_text(document: Document) -> str:
    """
    Plain-text form of a document, as copied to the clipboard.

    Sections are separated by a blank line; no markup is emitted.
    """
    blocks: List[str] = []

    for section in document.sections:
        lines: List[str] = []

        if section.kind == "header":
            lines.append(section.title)
        elif section.kind == "key_value":
            lines.append(section.title)
            lines.extend(f"{key}: {value}" for key, value in section.items)
        elif section.kind == "conditional_block":
            lines.append(f"{section.title}:")
            lines.append(section.text)
        elif section.kind == "gallery":
            lines.append(section.title)
            if section.is_empty:
                lines.append(section.placeholder)
            else:
                lines.extend(f"[{photo.filename}]" for photo in section.photos)
        elif section.kind == "list":
            lines.append(section.title)
            lines.extend(f"{section.bullet}{item}" for item in section.items)
        elif section.kind == "footer":
            lines.append(section.text)

        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)
