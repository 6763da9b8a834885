"""
Generation controls and result display.
"""

import streamlit as st

from app.services.session_manager import get_state, record_generation, reset_form
from src.errors import ChecklistError
from src.orchestration import generate_checklist_sync
from src.schemas.models import ChecklistForm
from utils.logger import setup_logger
from utils.validators import validate_case_fields

logger = setup_logger(__name__, component="UI")


def render_generate_button(form: ChecklistForm):
    """Generate button, disabled until the required fields are filled."""
    ready = form.is_ready()
    if not ready:
        _, _, errors = validate_case_fields(form.service_order, form.customer_name)
        for error in errors:
            st.caption(error)

    if st.button("Gerar PDF", type="primary", disabled=not ready, use_container_width=True):
        with st.spinner("Gerando PDF..."):
            try:
                result = generate_checklist_sync(form)
            except ChecklistError as e:
                record_generation(error=e.user_message)
            else:
                record_generation(result=result)
                st.success("PDF gerado com sucesso!")


def render_result():
    """Download button and copyable text of the last generated checklist."""
    error = get_state("last_error")
    if error:
        st.error(error)

    result = get_state("last_result")
    if result is None:
        return

    st.download_button(
        "Baixar PDF",
        data=result.content,
        file_name=result.filename,
        mime="application/pdf",
        use_container_width=True,
    )

    with st.expander("Texto do checklist"):
        st.code(result.text, language=None)


def render_reset_button():
    """Start a new checklist from defaults."""
    if st.button("Novo checklist", use_container_width=True):
        logger.info("Checklist reset")
        reset_form()
        st.rerun()
