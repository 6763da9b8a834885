"""
Tests for the checklist form and its snapshot.
"""

import pytest
from pydantic import ValidationError

from src.schemas.models import (
    MAX_PHOTOS,
    AnswerState,
    ChecklistForm,
    InspectionQuestion,
    InspectionRecord,
    RepairType,
    format_case_date,
    state_marker,
)


class TestChecklistForm:
    """Tests for the live form."""

    def test_defaults(self):
        form = ChecklistForm()

        assert len(form.answers) == 18
        assert all(state is None for state in form.answers.values())
        assert form.photos == [None] * MAX_PHOTOS
        assert form.repair_types == []
        assert form.case_date == format_case_date()

    def test_set_answer_is_independent(self):
        form = ChecklistForm()
        form.set_answer(InspectionQuestion.TOUCH_WORKS, AnswerState.NO)

        assert form.answers[InspectionQuestion.TOUCH_WORKS] == AnswerState.NO
        others = [state for q, state in form.answers.items() if q != InspectionQuestion.TOUCH_WORKS]
        assert all(state is None for state in others)

    def test_set_answer_accepts_wire_values(self):
        form = ChecklistForm()
        form.set_answer("screen_works", "na")
        assert form.answers[InspectionQuestion.SCREEN_WORKS] == AnswerState.NOT_TESTABLE

    def test_invalid_answer_rejected(self):
        with pytest.raises(ValueError):
            ChecklistForm().set_answer(InspectionQuestion.HAS_SOUND, "maybe")

    def test_clear_answer(self):
        form = ChecklistForm()
        form.set_answer(InspectionQuestion.HAS_SOUND, AnswerState.YES)
        form.clear_answer(InspectionQuestion.HAS_SOUND)
        assert form.answers[InspectionQuestion.HAS_SOUND] is None

    def test_deselecting_estimate_clears_problem_text(self):
        form = ChecklistForm()
        form.toggle_repair_type(RepairType.ESTIMATE, True)
        form.problem_text = "Tela piscando"

        form.toggle_repair_type(RepairType.SCREEN_REPLACEMENT, False)
        assert form.problem_text == "Tela piscando"

        form.toggle_repair_type(RepairType.ESTIMATE, False)
        assert form.problem_text == ""
        assert form.repair_types == []

    def test_repair_types_kept_in_vocabulary_order(self):
        form = ChecklistForm()
        form.toggle_repair_type(RepairType.ESTIMATE, True)
        form.toggle_repair_type(RepairType.SCREEN_REPLACEMENT, True)
        form.toggle_repair_type(RepairType.ESTIMATE, True)
        assert form.repair_types == [RepairType.SCREEN_REPLACEMENT, RepairType.ESTIMATE]

    def test_photo_slots(self, photo):
        form = ChecklistForm()
        form.attach_photo(2, photo)
        assert form.photos[2] == photo

        form.clear_photo(2)
        assert form.photos[2] is None

    @pytest.mark.parametrize("slot", [-1, MAX_PHOTOS])
    def test_photo_slot_out_of_range(self, photo, slot):
        with pytest.raises(IndexError):
            ChecklistForm().attach_photo(slot, photo)

    @pytest.mark.parametrize(
        "service_order,customer_name,missing",
        [
            ("OS1", "Ana", []),
            ("", "Ana", ["service_order"]),
            ("OS1", "   ", ["customer_name"]),
            (" ", "", ["service_order", "customer_name"]),
        ],
    )
    def test_missing_fields(self, service_order, customer_name, missing):
        form = ChecklistForm(service_order=service_order, customer_name=customer_name)
        assert form.missing_fields() == missing
        assert form.is_ready() is (not missing)

    def test_service_order_whitespace_collapsed(self):
        form = ChecklistForm()
        form.service_order = "  OS   12 "
        assert form.service_order == "OS 12"

    def test_service_order_too_long_rejected(self):
        form = ChecklistForm(service_order="OS1")
        with pytest.raises(ValidationError):
            form.service_order = "9" * 51
        assert form.service_order == "OS1"


class TestSnapshot:
    """Snapshots are frozen and detached from the live form."""

    def test_snapshot_copies_values(self, sample_form, photo):
        sample_form.attach_photo(0, photo)
        record = sample_form.snapshot()

        assert isinstance(record, InspectionRecord)
        assert record.service_order == "OS123"
        assert record.answer(InspectionQuestion.SCREEN_CRACKED) == AnswerState.YES
        assert record.attached_photos == [photo]

    def test_later_edits_do_not_leak(self, sample_form):
        record = sample_form.snapshot()

        sample_form.set_answer(InspectionQuestion.SCREEN_CRACKED, AnswerState.NO)
        sample_form.customer_name = "Outra"
        sample_form.toggle_repair_type(RepairType.SOFTWARE, True)

        assert record.answer(InspectionQuestion.SCREEN_CRACKED) == AnswerState.YES
        assert record.customer_name == "Maria"
        assert record.repair_types == ()

    def test_record_is_frozen(self, sample_form):
        record = sample_form.snapshot()
        with pytest.raises(ValidationError):
            record.customer_name = "Outra"

    def test_reset_restores_defaults(self, sample_form):
        fresh = ChecklistForm()
        assert fresh.service_order == ""
        assert fresh.answers != sample_form.answers


class TestInspectionRecord:
    """Tests for InspectionRecord normalization."""

    def test_missing_answers_filled(self):
        record = InspectionRecord(answers={InspectionQuestion.HAS_SOUND: AnswerState.NO})
        assert len(record.answers) == 18
        assert record.answer(InspectionQuestion.DEVICE_CHARGES) is None

    def test_answers_cannot_be_mutated(self, sample_form):
        record = sample_form.snapshot()
        with pytest.raises(TypeError):
            record.answers[0] = (InspectionQuestion.SCREEN_CRACKED, AnswerState.NO)
        assert record.answer(InspectionQuestion.SCREEN_CRACKED) == AnswerState.YES

    def test_answers_in_canonical_order(self):
        record = InspectionRecord(answers={
            InspectionQuestion.MOISTURE_SIGNS: AnswerState.YES,
            InspectionQuestion.HAS_PHYSICAL_BUTTONS: AnswerState.NO,
        })
        assert [question for question, _ in record.answers] == list(InspectionQuestion)

    def test_photos_padded(self, photo):
        record = InspectionRecord(photos=[photo])
        assert len(record.photos) == MAX_PHOTOS
        assert record.attached_photos == [photo]

    def test_too_many_photos(self, photo):
        with pytest.raises(ValidationError):
            InspectionRecord(photos=[photo] * (MAX_PHOTOS + 1))

    def test_is_estimate(self):
        assert InspectionRecord(repair_types=[RepairType.ESTIMATE]).is_estimate
        assert not InspectionRecord(repair_types=[RepairType.SOFTWARE]).is_estimate


class TestStateMarker:
    """Marker text for answers."""

    def test_markers(self):
        assert state_marker(AnswerState.YES) == "✅ Sim"
        assert state_marker(AnswerState.NO) == "❌ Não"
        assert state_marker(AnswerState.NOT_TESTABLE) == "⚠️ Não possível testar"
        assert state_marker(None) == "- Não respondido"
