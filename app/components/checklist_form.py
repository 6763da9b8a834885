"""
Checklist form components.
Each renderer mirrors its widgets into the live ChecklistForm.
"""

import streamlit as st

from app.services.file_handler import build_photo
from app.services.session_manager import widget_key
from src.schemas.models import (
    MAX_PHOTOS,
    AnswerState,
    ChecklistForm,
    InspectionQuestion,
    RepairType,
)
from utils.config import config
from utils.validators import validate_service_order

ANSWER_OPTIONS = [None, AnswerState.YES, AnswerState.NO, AnswerState.NOT_TESTABLE]
ANSWER_LABELS = {
    None: "—",
    AnswerState.YES: "Sim",
    AnswerState.NO: "Não",
    AnswerState.NOT_TESTABLE: "Não possível testar",
}


def render_basic_info(form: ChecklistForm):
    """Date, service order and customer name."""
    st.subheader("Informações Básicas")
    col1, col2, col3 = st.columns([1, 1, 2])

    with col1:
        form.case_date = st.text_input("Data", value=form.case_date, key=widget_key("case_date"))
    with col2:
        raw_service_order = st.text_input(
            "Número da OS *", value=form.service_order, key=widget_key("service_order")
        )
        is_valid, error, normalized = validate_service_order(raw_service_order)
        if is_valid or not normalized:
            form.service_order = normalized
        else:
            st.error(error)
    with col3:
        form.customer_name = st.text_input(
            "Cliente *", value=form.customer_name, key=widget_key("customer_name")
        )


def render_repair_types(form: ChecklistForm):
    """Repair-type checkboxes; the estimate tag reveals the problem description."""
    st.subheader("Serviços Solicitados")
    columns = st.columns(3)

    for index, tag in enumerate(RepairType):
        with columns[index % 3]:
            selected = st.checkbox(
                tag.label,
                value=tag in form.repair_types,
                key=widget_key(f"repair_{tag.value}"),
            )
        form.toggle_repair_type(tag, selected)

    if RepairType.ESTIMATE in form.repair_types:
        form.problem_text = st.text_area(
            "Descrição do Problema",
            value=form.problem_text,
            key=widget_key("problem_text"),
        )


def render_inspection_questions(form: ChecklistForm):
    """One horizontal radio group per inspection question."""
    st.subheader("Inspeção Visual")

    for question in InspectionQuestion:
        current = form.answers.get(question)
        choice = st.radio(
            question.label,
            options=ANSWER_OPTIONS,
            index=ANSWER_OPTIONS.index(current),
            format_func=lambda option: ANSWER_LABELS[option],
            horizontal=True,
            key=widget_key(f"question_{question.value}"),
        )
        form.set_answer(question, choice)


def render_photo_slots(form: ChecklistForm):
    """Three photo uploaders with previews."""
    st.subheader("Fotos")
    columns = st.columns(MAX_PHOTOS)

    for slot in range(MAX_PHOTOS):
        with columns[slot]:
            uploaded = st.file_uploader(
                f"Foto {slot + 1}",
                type=config.photo_extensions_list,
                key=widget_key(f"photo_{slot}"),
            )

            if uploaded is None:
                form.clear_photo(slot)
                continue

            current = form.photos[slot]
            if current is None or current.filename != uploaded.name or current.size_bytes != uploaded.size:
                photo, error = build_photo(uploaded)
                if photo is None:
                    st.error(error)
                    form.clear_photo(slot)
                    continue
                form.attach_photo(slot, photo)

            st.image(form.photos[slot].content, caption=form.photos[slot].filename)
