"""
Structured checklist document.

A document is an ordered list of sections, each a tagged variant, so the
composer never has to know how a section is drawn.
"""

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.models import PhotoAttachment


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    section_id: str = Field(..., description="Stable identifier of the section")


class HeaderSection(_Section):
    kind: Literal["header"] = "header"
    title: str


class KeyValueSection(_Section):
    kind: Literal["key_value"] = "key_value"
    title: str
    items: Tuple[Tuple[str, str], ...] = ()


class ListSection(_Section):
    kind: Literal["list"] = "list"
    title: str
    items: Tuple[str, ...] = ()
    bullet: str = "• "


class ConditionalBlockSection(_Section):
    """Labelled free text that only exists when its condition held."""
    kind: Literal["conditional_block"] = "conditional_block"
    title: str
    text: str


class GallerySection(_Section):
    kind: Literal["gallery"] = "gallery"
    title: str
    photos: Tuple[PhotoAttachment, ...] = ()
    placeholder: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.photos


class FooterSection(_Section):
    kind: Literal["footer"] = "footer"
    text: str


Section = Annotated[
    Union[
        HeaderSection,
        KeyValueSection,
        ListSection,
        ConditionalBlockSection,
        GallerySection,
        FooterSection,
    ],
    Field(discriminator="kind"),
]


class Document(BaseModel):
    """Ordered sections of a composed checklist."""
    model_config = ConfigDict(frozen=True)

    sections: Tuple[Section, ...] = Field(default=())

    @property
    def section_ids(self) -> List[str]:
        return [section.section_id for section in self.sections]

    def get(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.section_id == section_id:
                return section
        return None

    def __contains__(self, section_id: str) -> bool:
        return self.get(section_id) is not None


__all__ = [
    "HeaderSection",
    "KeyValueSection",
    "ListSection",
    "ConditionalBlockSection",
    "GallerySection",
    "FooterSection",
    "Section",
    "Document",
]
