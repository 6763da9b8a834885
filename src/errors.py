"""
Error kinds for checklist generation.
Each one is terminal for a single generation attempt; nothing is retried.
"""

from typing import List, Optional


class ChecklistError(Exception):
    """Base class for generation failures surfaced to the user."""

    user_message = "Erro ao gerar PDF. Tente novamente."

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class CaseValidationError(ChecklistError):
    """Required case fields (service order, customer name) are blank."""

    user_message = "Preencha o número da OS e o nome do cliente."

    def __init__(self, missing_fields: List[str]):
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")
        self.missing_fields = list(missing_fields)


class RenderFailure(ChecklistError):
    """The document could not be rasterized (e.g. a corrupt photo)."""


class ExportFailure(ChecklistError):
    """The paginated raster could not be written as a PDF."""


__all__ = [
    "ChecklistError",
    "CaseValidationError",
    "RenderFailure",
    "ExportFailure",
]
