"""
Streamlit UI for the inspection checklist.
"""

import sys
from pathlib import Path

import streamlit as st

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.config import config
from app.components import (
    render_basic_info,
    render_repair_types,
    render_inspection_questions,
    render_photo_slots,
    render_generate_button,
    render_result,
    render_reset_button,
)
from app.services.session_manager import get_form, init_session_state

st.set_page_config(
    page_title=config.app_title,
    page_icon="📱",
    layout="centered",
)


def main():
    init_session_state()
    form = get_form()

    st.title(config.app_title)

    render_basic_info(form)
    st.divider()
    render_repair_types(form)
    st.divider()
    render_inspection_questions(form)
    st.divider()
    render_photo_slots(form)
    st.divider()

    col1, col2 = st.columns([2, 1])
    with col1:
        render_generate_button(form)
    with col2:
        render_reset_button()

    render_result()


main()
