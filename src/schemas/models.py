"""
Pydantic schemas for the inspection checklist.

The live form (``ChecklistForm``) is what the UI edits; ``snapshot()`` turns it
into a frozen ``InspectionRecord`` that the diagnostic engine, composer and
renderer consume.
"""

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.validators import validate_case_fields, validate_service_order


MAX_PHOTOS = 3


def format_case_date(value: Optional[date] = None) -> str:
    """Format a date as dd/mm/yyyy (defaults to today)."""
    value = value or datetime.now().date()
    return value.strftime("%d/%m/%Y")


# ============================================================================
# CLOSED VOCABULARIES
# ============================================================================

class AnswerState(str, Enum):
    """Admissible answers. ``None`` stands for unanswered."""
    YES = "yes"
    NO = "no"
    NOT_TESTABLE = "na"


class InspectionQuestion(str, Enum):
    """The fixed inspection questions, declared in canonical display order."""
    HAS_PHYSICAL_BUTTONS = "has_physical_buttons"
    BUTTONS_WORK = "buttons_work"
    SCREEN_WORKS = "screen_works"
    TOUCH_WORKS = "touch_works"
    SCREEN_CRACKED = "screen_cracked"
    SCREEN_SCRATCHED = "screen_scratched"
    BACK_BROKEN = "back_broken"
    BACK_SCRATCHED = "back_scratched"
    CAMERA_LENS_DAMAGED = "camera_lens_damaged"
    CAMERA_EXPOSED = "camera_exposed"
    CAMERA_DAMAGED = "camera_damaged"
    AUDIO_OUTPUT_DAMAGED = "audio_output_damaged"
    AUDIO_OUTPUT_DIRTY = "audio_output_dirty"
    HAS_SOUND = "has_sound"
    HEADPHONE_JACK_DAMAGED = "headphone_jack_damaged"
    DEVICE_TURNS_ON = "device_turns_on"
    DEVICE_CHARGES = "device_charges"
    MOISTURE_SIGNS = "moisture_signs"

    @property
    def label(self) -> str:
        return QUESTION_LABELS[self]


QUESTION_LABELS: Dict[InspectionQuestion, str] = {
    InspectionQuestion.HAS_PHYSICAL_BUTTONS: "Há botões físicos?",
    InspectionQuestion.BUTTONS_WORK: "Botões funcionam?",
    InspectionQuestion.SCREEN_WORKS: "Tela acende e exibe imagem?",
    InspectionQuestion.TOUCH_WORKS: "Touch funciona?",
    InspectionQuestion.SCREEN_CRACKED: "Tela trincada?",
    InspectionQuestion.SCREEN_SCRATCHED: "Tela riscada?",
    InspectionQuestion.BACK_BROKEN: "Traseira quebrada?",
    InspectionQuestion.BACK_SCRATCHED: "Traseira riscada?",
    InspectionQuestion.CAMERA_LENS_DAMAGED: "Lente da câmera danificada?",
    InspectionQuestion.CAMERA_EXPOSED: "Câmera exposta?",
    InspectionQuestion.CAMERA_DAMAGED: "Câmera danificada?",
    InspectionQuestion.AUDIO_OUTPUT_DAMAGED: "Saídas de som danificadas?",
    InspectionQuestion.AUDIO_OUTPUT_DIRTY: "Saídas de som sujas?",
    InspectionQuestion.HAS_SOUND: "O aparelho tem som?",
    InspectionQuestion.HEADPHONE_JACK_DAMAGED: "Entrada de fone de ouvido danificada?",
    InspectionQuestion.DEVICE_TURNS_ON: "Aparelho liga (vibra)?",
    InspectionQuestion.DEVICE_CHARGES: "O celular carrega?",
    InspectionQuestion.MOISTURE_SIGNS: "Há sinais de umidade?",
}

STATE_MARKERS: Dict[AnswerState, str] = {
    AnswerState.YES: "✅ Sim",
    AnswerState.NO: "❌ Não",
    AnswerState.NOT_TESTABLE: "⚠️ Não possível testar",
}
UNANSWERED_MARKER = "- Não respondido"


def state_marker(state: Optional[AnswerState]) -> str:
    """Marker text for an answer; unanswered is distinct from not testable."""
    if state is None:
        return UNANSWERED_MARKER
    return STATE_MARKERS[state]


class RepairType(str, Enum):
    """Requested repair tags. ``ESTIMATE`` unlocks the problem description."""
    SCREEN_REPLACEMENT = "troca_tela"
    BATTERY_REPLACEMENT = "troca_bateria"
    CHARGE_PORT_REPLACEMENT = "troca_conector"
    BOARD_REPAIR = "reparo_placa"
    SOFTWARE = "software"
    ESTIMATE = "orcamento"

    @property
    def label(self) -> str:
        return REPAIR_TYPE_LABELS[self]


REPAIR_TYPE_LABELS: Dict[RepairType, str] = {
    RepairType.SCREEN_REPLACEMENT: "Troca de tela",
    RepairType.BATTERY_REPLACEMENT: "Troca de bateria",
    RepairType.CHARGE_PORT_REPLACEMENT: "Troca de conector de carga",
    RepairType.BOARD_REPAIR: "Reparo de placa",
    RepairType.SOFTWARE: "Software",
    RepairType.ESTIMATE: "Orçamento",
}


def _empty_answers() -> Dict[InspectionQuestion, Optional[AnswerState]]:
    return {question: None for question in InspectionQuestion}


def _order_repair_types(values) -> Tuple[RepairType, ...]:
    chosen = {RepairType(v) for v in values}
    return tuple(tag for tag in RepairType if tag in chosen)


# ============================================================================
# PHOTOS
# ============================================================================

class PhotoAttachment(BaseModel):
    """Raw encoded image bytes plus the name they were uploaded with."""
    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Original file name")
    content: bytes = Field(..., repr=False, description="Encoded image bytes")
    content_type: Optional[str] = Field(None, description="Media type reported by the uploader")

    @property
    def size_bytes(self) -> int:
        return len(self.content)


# ============================================================================
# SNAPSHOT
# ============================================================================

class InspectionRecord(BaseModel):
    """Immutable snapshot of a checklist, taken at generation time."""
    model_config = ConfigDict(frozen=True)

    case_date: str = Field(default_factory=format_case_date)
    service_order: str = ""
    customer_name: str = ""
    repair_types: Tuple[RepairType, ...] = ()
    problem_text: str = ""
    answers: Tuple[Tuple[InspectionQuestion, Optional[AnswerState]], ...] = Field(
        default_factory=lambda: tuple(_empty_answers().items()),
        description="(question, state) pairs in canonical question order",
    )
    photos: Tuple[Optional[PhotoAttachment], ...] = (None,) * MAX_PHOTOS

    @field_validator("repair_types", mode="before")
    @classmethod
    def normalize_repair_types(cls, v):
        """Deduplicate and order tags by vocabulary order."""
        return _order_repair_types(v or ())

    @field_validator("answers", mode="before")
    @classmethod
    def fill_answers(cls, v):
        """Every question is always present; missing ones are unanswered."""
        pairs = v.items() if isinstance(v, Mapping) else (v or ())
        answers = _empty_answers()
        for key, value in pairs:
            answers[InspectionQuestion(key)] = AnswerState(value) if value is not None else None
        return tuple(answers.items())

    @field_validator("photos", mode="before")
    @classmethod
    def pad_photos(cls, v):
        photos = list(v or ())
        if len(photos) > MAX_PHOTOS:
            raise ValueError(f"At most {MAX_PHOTOS} photo slots are allowed")
        return tuple(photos + [None] * (MAX_PHOTOS - len(photos)))

    def answer(self, question: InspectionQuestion) -> Optional[AnswerState]:
        question = InspectionQuestion(question)
        for key, state in self.answers:
            if key == question:
                return state
        return None

    @property
    def is_estimate(self) -> bool:
        return RepairType.ESTIMATE in self.repair_types

    @property
    def attached_photos(self) -> List[PhotoAttachment]:
        """Non-empty slots in slot order."""
        return [photo for photo in self.photos if photo is not None]

    def missing_fields(self) -> List[str]:
        return _missing_fields(self.service_order, self.customer_name)


def _missing_fields(service_order: str, customer_name: str) -> List[str]:
    _, missing, _ = validate_case_fields(service_order, customer_name)
    return missing


# ============================================================================
# LIVE FORM
# ============================================================================

class ChecklistForm(BaseModel):
    """
    Mutable checklist state edited by the UI.

    A freshly constructed form is the "start new" state: today's date, no
    tags, every question unanswered and every photo slot empty.
    """
    model_config = ConfigDict(validate_assignment=True)

    case_date: str = Field(default_factory=format_case_date)
    service_order: str = ""
    customer_name: str = ""
    repair_types: List[RepairType] = Field(default_factory=list)
    problem_text: str = ""
    answers: Dict[InspectionQuestion, Optional[AnswerState]] = Field(default_factory=_empty_answers)
    photos: List[Optional[PhotoAttachment]] = Field(default_factory=lambda: [None] * MAX_PHOTOS)

    @field_validator("service_order")
    @classmethod
    def normalize_service_order(cls, v):
        """Collapse internal whitespace; a blank value is allowed until generation."""
        is_valid, error, normalized = validate_service_order(v)
        if normalized and not is_valid:
            raise ValueError(error)
        return normalized

    @model_validator(mode="after")
    def check_photo_slots(self):
        if len(self.photos) != MAX_PHOTOS:
            raise ValueError(f"Exactly {MAX_PHOTOS} photo slots are required")
        return self

    def set_answer(self, question: InspectionQuestion, state: Optional[AnswerState]):
        """Set one answer; no other question is touched."""
        question = InspectionQuestion(question)
        self.answers[question] = AnswerState(state) if state is not None else None

    def clear_answer(self, question: InspectionQuestion):
        self.set_answer(question, None)

    def toggle_repair_type(self, tag: RepairType, selected: bool):
        """Select or deselect a tag. Deselecting the estimate clears the problem text."""
        tag = RepairType(tag)
        current = [t for t in self.repair_types if t != tag]
        if selected:
            current.append(tag)
        self.repair_types = list(_order_repair_types(current))
        if tag == RepairType.ESTIMATE and not selected:
            self.problem_text = ""

    def attach_photo(self, slot: int, photo: PhotoAttachment):
        """Put an already validated photo into a 0-based slot."""
        if not 0 <= slot < MAX_PHOTOS:
            raise IndexError(f"Photo slot must be between 0 and {MAX_PHOTOS - 1}, got {slot}")
        self.photos[slot] = photo

    def clear_photo(self, slot: int):
        if not 0 <= slot < MAX_PHOTOS:
            raise IndexError(f"Photo slot must be between 0 and {MAX_PHOTOS - 1}, got {slot}")
        self.photos[slot] = None

    def missing_fields(self) -> List[str]:
        """Required case fields that are still blank."""
        return _missing_fields(self.service_order, self.customer_name)

    def is_ready(self) -> bool:
        """Whether generation may be offered."""
        return not self.missing_fields()

    def snapshot(self) -> InspectionRecord:
        """Deep, frozen copy of the current state."""
        data = self.model_dump()
        return InspectionRecord(
            case_date=data["case_date"],
            service_order=data["service_order"],
            customer_name=data["customer_name"],
            repair_types=tuple(data["repair_types"]),
            problem_text=data["problem_text"],
            answers=dict(data["answers"]),
            photos=tuple(
                PhotoAttachment(**photo) if photo is not None else None
                for photo in data["photos"]
            ),
        )


__all__ = [
    "MAX_PHOTOS",
    "AnswerState",
    "InspectionQuestion",
    "QUESTION_LABELS",
    "STATE_MARKERS",
    "UNANSWERED_MARKER",
    "state_marker",
    "RepairType",
    "REPAIR_TYPE_LABELS",
    "PhotoAttachment",
    "InspectionRecord",
    "ChecklistForm",
    "format_case_date",
]
