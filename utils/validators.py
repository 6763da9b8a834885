"""
Input validators for the inspection checklist.
Provides validation functions for form fields and photo uploads.
"""

import re
from typing import List, Optional, Tuple

from utils.config import config


REQUIRED_FIELD_LABELS = {
    "service_order": "Número da OS",
    "customer_name": "Cliente",
}

PHOTO_TYPE_ERROR = "Por favor, selecione apenas arquivos de imagem."


def validate_required_text(value: Optional[str], field_name: str) -> Tuple[bool, Optional[str], str]:
    """
    Validate a required free-text field.

    Args:
        value: Raw input
        field_name: Field identifier (used in the message)

    Returns:
        Tuple of (is_valid, error_message, normalized_value)
    """
    normalized = (value or "").strip()
    if not normalized:
        label = REQUIRED_FIELD_LABELS.get(field_name, field_name)
        return False, f"{label} é obrigatório", normalized
    return True, None, normalized


def validate_case_fields(
    service_order: Optional[str],
    customer_name: Optional[str],
) -> Tuple[bool, List[str], List[str]]:
    """
    Check the fields that gate document generation.

    Returns:
        Tuple of (is_valid, missing field names, error messages)
    """
    missing = []
    errors = []
    for field_name, value in (("service_order", service_order), ("customer_name", customer_name)):
        is_valid, error, _ = validate_required_text(value, field_name)
        if not is_valid:
            missing.append(field_name)
            errors.append(error)
    return not missing, missing, errors


def validate_service_order(value: Optional[str]) -> Tuple[bool, Optional[str], str]:
    """
    Validate a service order number.
    Internal whitespace is collapsed; anything printable is accepted.
    """
    is_valid, error, normalized = validate_required_text(value, "service_order")
    if not is_valid:
        return is_valid, error, normalized
    normalized = re.sub(r"\s+", " ", normalized)
    if len(normalized) > 50:
        return False, "Número da OS muito longo (máx. 50 caracteres)", normalized
    return True, None, normalized


def validate_photo_upload(
    content_type: Optional[str],
    size_bytes: int,
    max_size_bytes: Optional[int] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Validate a photo before it enters a slot.

    Args:
        content_type: Media type reported by the uploader
        size_bytes: Size of the encoded file
        max_size_bytes: Limit (defaults to config, 5 MiB)

    Returns:
        Tuple of (is_valid, error_message)
    """
    max_size_bytes = max_size_bytes or config.max_photo_size_bytes

    if not content_type or not content_type.lower().startswith("image/"):
        return False, PHOTO_TYPE_ERROR

    if size_bytes <= 0:
        return False, "O arquivo está vazio."

    if size_bytes > max_size_bytes:
        limit_mb = max_size_bytes / (1024 * 1024)
        return False, f"A imagem deve ter no máximo {limit_mb:g}MB."

    return True, None
