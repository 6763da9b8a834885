"""
Utility modules for the inspection checklist.
"""

from utils.config import config, REPORT_DIR, LOG_DIR
from utils.logger import setup_logger
from utils.image_utils import (
    decode_image,
    fit_within,
    load_font,
)
from utils.validators import (
    validate_case_fields,
    validate_photo_upload,
    validate_required_text,
    validate_service_order,
)

__all__ = [
    "config",
    "REPORT_DIR",
    "LOG_DIR",
    "setup_logger",
    "decode_image",
    "fit_within",
    "load_font",
    "validate_case_fields",
    "validate_photo_upload",
    "validate_required_text",
    "validate_service_order",
]
