"""
Tests for input validators and the upload handler.
"""

import pytest

from app.services.file_handler import build_photo, validate_image
from utils.validators import (
    PHOTO_TYPE_ERROR,
    validate_case_fields,
    validate_photo_upload,
    validate_required_text,
    validate_service_order,
)

MIB = 1024 * 1024


class FakeUpload:
    """Stands in for a Streamlit UploadedFile."""

    def __init__(self, name, type, content):
        self.name = name
        self.type = type
        self._content = content
        self.size = len(content)

    def getvalue(self):
        return self._content


class TestPhotoUpload:
    """Image media type and 5 MiB limit."""

    @pytest.mark.parametrize("content_type", ["image/jpeg", "image/png", "IMAGE/WEBP", "image/heic"])
    def test_accepts_images(self, content_type):
        assert validate_photo_upload(content_type, 1024) == (True, None)

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", "", None])
    def test_rejects_non_images(self, content_type):
        assert validate_photo_upload(content_type, 1024) == (False, PHOTO_TYPE_ERROR)

    def test_size_limit_is_inclusive(self):
        assert validate_photo_upload("image/png", 5 * MIB)[0] is True
        is_valid, error = validate_photo_upload("image/png", 5 * MIB + 1)
        assert is_valid is False
        assert "5MB" in error

    def test_empty_file(self):
        assert validate_photo_upload("image/png", 0)[0] is False


class TestCaseFields:
    """Required case fields."""

    def test_required_text(self):
        assert validate_required_text("  OS1 ", "service_order") == (True, None, "OS1")
        is_valid, error, _ = validate_required_text("   ", "customer_name")
        assert is_valid is False
        assert "Cliente" in error

    def test_case_fields(self):
        assert validate_case_fields("OS1", "Ana") == (True, [], [])
        is_valid, missing, errors = validate_case_fields("", None)
        assert is_valid is False
        assert missing == ["service_order", "customer_name"]
        assert len(errors) == 2

    def test_service_order_normalized(self):
        assert validate_service_order("  OS   12 ") == (True, None, "OS 12")

    def test_service_order_too_long(self):
        assert validate_service_order("9" * 51)[0] is False


class TestFileHandler:
    """Tests for the upload handler."""

    def test_build_photo(self, png_bytes):
        photo, error = build_photo(FakeUpload("a.png", "image/png", png_bytes))
        assert error == ""
        assert photo.filename == "a.png"
        assert photo.content == png_bytes

    def test_rejects_wrong_type(self):
        photo, error = build_photo(FakeUpload("a.pdf", "application/pdf", b"%PDF"))
        assert photo is None
        assert error == PHOTO_TYPE_ERROR

    def test_rejects_oversized(self):
        is_valid, error = validate_image(FakeUpload("big.jpg", "image/jpeg", b"0" * (5 * MIB + 1)))
        assert is_valid is False

    def test_no_file(self):
        assert validate_image(None) == (False, "Nenhum arquivo enviado")
