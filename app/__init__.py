"""
App package for the inspection checklist.
"""

from app.main import main, startup_health_checks

__all__ = [
    "main",
    "startup_health_checks",
]
