"""
Unit tests for the sliding-window pagination engine.
"""

import pytest
from reportlab.lib.units import mm

from src.reporting.pagination import (
    PageGeometry,
    expected_page_count,
    iter_page_offsets,
    paginate,
    paginate_geometry,
    scale_to_page_width,
)

# A4 in millimetres with 10mm margins: 277mm usable
WIDTH = 210
HEIGHT = 297
MARGIN = 10
SPAN = HEIGHT - 2 * MARGIN


def _paginate(total_height):
    return paginate(total_height, WIDTH, HEIGHT, MARGIN, MARGIN)


class TestPaginate:
    """Edge cases of page placement."""

    def test_zero_height_is_one_page(self):
        assert _paginate(0) == [MARGIN]

    def test_negative_height_is_one_page(self):
        assert _paginate(-50) == [MARGIN]

    def test_exactly_one_span_is_one_page(self):
        assert _paginate(SPAN) == [MARGIN]

    def test_one_unit_over_is_two_pages(self):
        offsets = _paginate(SPAN + 1)
        assert len(offsets) == 2
        assert offsets[1] == offsets[0] - SPAN

    def test_three_spans_is_three_pages(self):
        offsets = _paginate(3 * SPAN)
        assert len(offsets) == 3
        assert [b - a for a, b in zip(offsets, offsets[1:])] == [-SPAN, -SPAN]

    def test_first_offset_is_top_margin(self):
        assert _paginate(10 * SPAN)[0] == MARGIN

    @pytest.mark.parametrize("total_height", [1, SPAN - 1, SPAN, SPAN + 1, 2 * SPAN, 7 * SPAN + 3, 40 * SPAN])
    def test_matches_closed_form(self, total_height):
        assert len(_paginate(total_height)) == expected_page_count(total_height, SPAN)

    @pytest.mark.parametrize("total_height", [SPAN + 1, 5 * SPAN - 1, 12 * SPAN])
    def test_windows_cover_content_without_gaps(self, total_height):
        """Page i shows raster rows [MARGIN - offset, MARGIN - offset + SPAN]."""
        covered_until = 0
        for offset in _paginate(total_height):
            window_start = MARGIN - offset
            assert window_start <= covered_until
            covered_until = window_start + SPAN
        assert covered_until >= total_height

    def test_uneven_margins(self):
        offsets = paginate(250, 100, 100, 15, 5)
        assert offsets == [15, 15 - 80, 15 - 160, 15 - 240]

    def test_no_usable_height_is_rejected(self):
        with pytest.raises(ValueError):
            paginate(100, WIDTH, 20, 10, 10)

    def test_generator_is_lazy(self):
        offsets = iter_page_offsets(10 * SPAN, WIDTH, HEIGHT, MARGIN, MARGIN)
        assert next(offsets) == MARGIN
        assert next(offsets) == MARGIN - SPAN


class TestPageGeometry:
    """Tests for PageGeometry helpers."""

    def test_uniform(self):
        geometry = PageGeometry.uniform(WIDTH, HEIGHT, MARGIN)
        assert geometry.usable_height == SPAN
        assert geometry.content_width == WIDTH - 2 * MARGIN

    def test_paginate_geometry(self):
        geometry = PageGeometry.uniform(WIDTH, HEIGHT, MARGIN)
        assert paginate_geometry(SPAN + 1, geometry) == [MARGIN, MARGIN - SPAN]

    def test_margins_too_large(self):
        with pytest.raises(ValueError):
            PageGeometry.uniform(WIDTH, 20, 10)

    def test_scale_to_page_width(self):
        assert scale_to_page_width(1600, 3200, 190) == pytest.approx(380)

    def test_scale_rejects_zero_width(self):
        with pytest.raises(ValueError):
            scale_to_page_width(0, 100, 190)


class TestPointGeometry:
    """A4 in PDF points, where the span is not a whole number."""

    @pytest.fixture
    def geometry(self):
        return PageGeometry.uniform(210 * mm, 297 * mm, 10 * mm)

    def test_exactly_one_span_is_one_page(self):
        span = 297 * mm - 2 * 10 * mm
        assert paginate(span, 210 * mm, 297 * mm, 10 * mm, 10 * mm) == [10 * mm]

    @pytest.mark.parametrize("pages", [1, 2, 3, 7, 8, 12, 23, 24, 50])
    def test_whole_spans_have_no_trailing_page(self, geometry, pages):
        offsets = paginate_geometry(pages * geometry.usable_height, geometry)
        assert len(offsets) == pages
        assert len(offsets) == expected_page_count(pages * geometry.usable_height, geometry.usable_height)

    @pytest.mark.parametrize("pages", [1, 7, 24])
    def test_slightly_over_adds_a_page(self, geometry, pages):
        offsets = paginate_geometry(pages * geometry.usable_height + 0.5, geometry)
        assert len(offsets) == pages + 1
        assert offsets[-1] == pytest.approx(10 * mm - pages * geometry.usable_height)
