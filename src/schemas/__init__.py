"""
Pydantic schemas for the inspection checklist.
"""

from src.schemas.models import (
    MAX_PHOTOS,
    AnswerState,
    InspectionQuestion,
    RepairType,
    PhotoAttachment,
    InspectionRecord,
    ChecklistForm,
    state_marker,
)
from src.schemas.document import (
    HeaderSection,
    KeyValueSection,
    ListSection,
    ConditionalBlockSection,
    GallerySection,
    FooterSection,
    Section,
    Document,
)

__all__ = [
    "MAX_PHOTOS",
    "AnswerState",
    "InspectionQuestion",
    "RepairType",
    "PhotoAttachment",
    "InspectionRecord",
    "ChecklistForm",
    "state_marker",
    "HeaderSection",
    "KeyValueSection",
    "ListSection",
    "ConditionalBlockSection",
    "GallerySection",
    "FooterSection",
    "Section",
    "Document",
]
