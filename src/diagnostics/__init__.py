"""
Diagnostic rule engine for the inspection checklist.
"""

from src.diagnostics.rules import (
    DIAGNOSTIC_RULES,
    NO_DEFECT_STATEMENT,
    DiagnosticRule,
    group_by_subsystem,
    infer,
    is_no_defect,
)

__all__ = [
    "DIAGNOSTIC_RULES",
    "NO_DEFECT_STATEMENT",
    "DiagnosticRule",
    "group_by_subsystem",
    "infer",
    "is_no_defect",
]
