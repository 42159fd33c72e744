"""Tests for photo metadata derivation."""

from datetime import datetime

import pytest

from photobook.engine import Orientation, build_photo_metadata, calculate_dpi, derive_orientation
from photobook.engine.photo_analysis import derive_aspect_ratio


class TestOrientation:
    """Tests for derive_orientation()."""

    @pytest.mark.parametrize("width,height,expected", [
        (4000, 3000, Orientation.LANDSCAPE),
        (3000, 4000, Orientation.PORTRAIT),
        (3000, 3000, Orientation.SQUARE),
        (1000, 1050, Orientation.SQUARE),
        (1100, 1000, Orientation.SQUARE),
        (None, 1000, Orientation.UNKNOWN),
        (0, 1000, Orientation.UNKNOWN),
        (-5, 1000, Orientation.UNKNOWN),
    ])
    def test_thresholds(self, width, height, expected):
        assert derive_orientation(width, height) == expected

    def test_aspect_ratio(self):
        assert derive_aspect_ratio(4000, 2000) == 2
        assert derive_aspect_ratio(4000, None) is None


class TestDPI:
    """Tests for calculate_dpi()."""

    def test_optimal(self):
        result = calculate_dpi(2400, 2400, 8, 8)
        assert result.actual_dpi == 300
        assert result.is_print_safe and result.is_print_optimal
        assert result.warning_message is None

    def test_safe_but_not_optimal(self):
        result = calculate_dpi(1200, 1200, 8, 8)
        assert result.actual_dpi == 150
        assert result.is_print_safe
        assert not result.is_print_optimal
        assert "below optimal 300 DPI" in result.warning_message

    def test_below_minimum(self):
        result = calculate_dpi(800, 800, 8, 8)
        assert not result.is_print_safe
        assert "below minimum 150 DPI" in result.warning_message

    def test_uses_worst_axis(self):
        assert calculate_dpi(3000, 1200, 8, 8).actual_dpi == 150


class TestBuildPhotoMetadata:
    """Tests for build_photo_metadata()."""

    def test_print_safe_photo(self):
        taken_at = datetime(2024, 5, 4, 12, 0)
        photo = build_photo_metadata("p1", 4000, 3000, sort_order=3, taken_at=taken_at)

        assert photo.id == "p1"
        assert photo.aspect_ratio == pytest.approx(4 / 3)
        assert photo.orientation == Orientation.LANDSCAPE
        assert photo.sort_order == 3
        assert photo.is_print_safe
        assert photo.quality_warnings == []
        assert photo.taken_at == taken_at

    def test_low_resolution_photo(self):
        photo = build_photo_metadata("p2", 1600, 1200)
        assert not photo.is_print_safe
        assert photo.quality_warnings == ["Low resolution: 150 DPI (300+ recommended)"]

    def test_larger_target_size(self):
        photo = build_photo_metadata("p3", 4000, 3000, target_inches=12)
        assert not photo.is_print_safe

    def test_unknown_dimensions(self):
        photo = build_photo_metadata("p4", None, None)
        assert photo.orientation == Orientation.UNKNOWN
        assert photo.aspect_ratio is None
        assert not photo.has_dimensions
        assert not photo.is_print_safe
        assert photo.quality_warnings == []
