"""
Shared fixtures for the checklist tests.
"""

import io
from datetime import datetime

import pytest
from PIL import Image

from src.schemas.models import (
    AnswerState,
    ChecklistForm,
    InspectionQuestion,
    InspectionRecord,
    PhotoAttachment,
)


@pytest.fixture
def png_bytes():
    """A small valid PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 30), (200, 60, 60)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def photo(png_bytes):
    return PhotoAttachment(filename="frente.png", content=png_bytes, content_type="image/png")


@pytest.fixture
def corrupt_photo():
    return PhotoAttachment(filename="quebrada.jpg", content=b"\xff\xd8not really a jpeg", content_type="image/jpeg")


@pytest.fixture
def blank_record():
    """Every question unanswered, no tags, no photos."""
    return InspectionRecord(service_order="OS1", customer_name="Cliente")


@pytest.fixture
def sample_form():
    """The end-to-end case: cracked screen, device does not turn on."""
    form = ChecklistForm(case_date="19/10/2026", service_order="OS123", customer_name="Maria")
    form.set_answer(InspectionQuestion.SCREEN_CRACKED, AnswerState.YES)
    form.set_answer(InspectionQuestion.DEVICE_TURNS_ON, AnswerState.NO)
    return form


@pytest.fixture
def fixed_time():
    return datetime(2026, 10, 19, 14, 30, 5)


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "reports"
    path.mkdir()
    return path


@pytest.fixture
def make_record():
    """Build a record from answers keyed by question value."""
    def _make(**answers) -> InspectionRecord:
        return InspectionRecord(
            service_order="OS1",
            customer_name="Cliente",
            answers={InspectionQuestion(key): value for key, value in answers.items()},
        )
    return _make
