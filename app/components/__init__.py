"""
UI Components for the inspection checklist.
"""

from app.components.checklist_form import (
    render_basic_info,
    render_repair_types,
    render_inspection_questions,
    render_photo_slots,
)
from app.components.result_panel import (
    render_generate_button,
    render_result,
    render_reset_button,
)

__all__ = [
    # Checklist Form
    "render_basic_info",
    "render_repair_types",
    "render_inspection_questions",
    "render_photo_slots",
    # Result Panel
    "render_generate_button",
    "render_result",
    "render_reset_button",
]
