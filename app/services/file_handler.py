"""
File handling service for the checklist UI.
Turns uploaded files into validated photo attachments.
"""

from typing import Optional, Tuple

from src.schemas.models import PhotoAttachment
from utils.logger import setup_logger
from utils.validators import validate_photo_upload

logger = setup_logger(__name__, component="FILE_HANDLER")


def validate_image(uploaded_file) -> Tuple[bool, str]:
    """
    Validate uploaded image file.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not uploaded_file:
        return False, "Nenhum arquivo enviado"

    is_valid, error = validate_photo_upload(uploaded_file.type, uploaded_file.size)
    return is_valid, error or ""


def build_photo(uploaded_file) -> Tuple[Optional[PhotoAttachment], str]:
    """
    Validate an upload and wrap its bytes for a photo slot.

    Args:
        uploaded_file: Streamlit UploadedFile (anything with name/type/size/getvalue)

    Returns:
        Tuple of (attachment or None, error_message)
    """
    is_valid, error = validate_image(uploaded_file)
    if not is_valid:
        logger.warning(f"Photo rejected ({getattr(uploaded_file, 'name', '?')}): {error}")
        return None, error

    photo = PhotoAttachment(
        filename=uploaded_file.name,
        content=uploaded_file.getvalue(),
        content_type=uploaded_file.type,
    )
    logger.info(f"Photo accepted: {photo.filename} ({photo.size_bytes} bytes)")
    return photo, ""
