"""
Session state management for the checklist UI.
Keeps the live form and the last generation result in Streamlit session state.
"""

from datetime import datetime
from typing import Any, Optional

import streamlit as st

from src.schemas.models import ChecklistForm


def init_session_state():
    """Initialize all required session state variables."""
    defaults = {
        "form": ChecklistForm(),
        "form_version": 0,  # bumped on reset so widget keys start fresh
        "last_result": None,
        "last_error": None,
        "generation_count": 0,
        "last_generation_time": None,
    }

    for key, default_value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default_value


def get_state(key: str, default: Any = None) -> Any:
    """Get a session state value safely."""
    return st.session_state.get(key, default)


def set_state(key: str, value: Any):
    """Set a session state value."""
    st.session_state[key] = value


def get_form() -> ChecklistForm:
    """The live, editable checklist."""
    init_session_state()
    return st.session_state.form


def widget_key(name: str) -> str:
    """Widget key scoped to the current form version."""
    return f"{name}_{get_state('form_version', 0)}"


def reset_form():
    """Discard the live form and start a new checklist."""
    st.session_state.form = ChecklistForm()
    st.session_state.form_version = get_state("form_version", 0) + 1
    st.session_state.last_result = None
    st.session_state.last_error = None


def record_generation(result: Optional[Any] = None, error: Optional[str] = None):
    """Record the outcome of a generation attempt."""
    st.session_state.last_result = result
    st.session_state.last_error = error
    if result is not None:
        st.session_state.generation_count += 1
        st.session_state.last_generation_time = datetime.now()
