"""
Generation pipeline for the inspection checklist.
"""

from src.orchestration.pipeline import (
    GenerationResult,
    generate_checklist,
    generate_checklist_sync,
    take_snapshot,
)

__all__ = [
    "GenerationResult",
    "generate_checklist",
    "generate_checklist_sync",
    "take_snapshot",
]
