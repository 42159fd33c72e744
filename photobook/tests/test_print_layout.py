"""Tests for print areas, spine width and print conversion."""

import pytest

from photobook.engine import (
    LayoutConfigurationError,
    LayoutOptions,
    PrintLayoutConverter,
    Rect,
    Spacing,
    build_photo_metadata,
    calculate_print_areas,
    calculate_spine_width,
    generate_layout,
)
from photobook.engine.print_layout import (
    BindingType,
    absolute_to_normalized,
    is_in_bleed_area,
    is_within_print_area,
    normalized_to_absolute,
)


# =============================================================================
# PRINT AREAS
# =============================================================================

class TestPrintAreas:
    """Tests for bleed, trim and safe areas."""

    def test_square_8_areas(self):
        areas = calculate_print_areas("8x8")

        assert areas.bleed_area == Rect(0, 0, 8.25, 8.25)
        assert areas.trim_area == Rect(0.125, 0.125, 8, 8)
        assert areas.safe_area.x == pytest.approx(0.375)
        assert areas.safe_area.width == pytest.approx(7.5)

    def test_without_bleed(self):
        areas = calculate_print_areas("letter", include_bleed=False)

        assert areas.bleed_area == Rect(0, 0, 8.5, 11)
        assert areas.trim_area == areas.bleed_area

    def test_point_mapping_round_trip(self):
        area = Rect(0.5, 0.5, 7, 7)
        assert normalized_to_absolute(0.5, 0.5, area) == (4, 4)
        assert absolute_to_normalized(4, 4, area) == (0.5, 0.5)

    def test_within_print_area(self):
        area = Rect(0, 0, 8, 8)
        assert is_within_print_area(Rect(1, 1, 2, 2), area)
        assert not is_within_print_area(Rect(7, 7, 2, 2), area)

    def test_bleed_detection(self):
        areas = calculate_print_areas("8x8")
        crossing = Rect(0.05, 1, 1, 1)
        inside = Rect(1, 1, 1, 1)

        assert is_in_bleed_area(crossing, areas.trim_area, areas.bleed_area)
        assert not is_in_bleed_area(inside, areas.trim_area, areas.bleed_area)


# =============================================================================
# SPINE
# =============================================================================

class TestSpineWidth:
    """Tests for calculate_spine_width()."""

    def test_softcover(self):
        assert calculate_spine_width(100) == 0.21875

    def test_hardcover_adds_board(self):
        assert calculate_spine_width(100, binding="hardcover") == 0.34375

    def test_minimum_width(self):
        assert calculate_spine_width(2) == 0.0625

    def test_binding_enum(self):
        assert calculate_spine_width(100, binding=BindingType.LAYFLAT) == calculate_spine_width(100)

    def test_unknown_binding_raises(self):
        with pytest.raises(LayoutConfigurationError, match="binding"):
            calculate_spine_width(100, binding="spiral")

    def test_rounds_up_to_thirty_seconds(self):
        width = calculate_spine_width(250, paper_weight=100)
        assert (width * 32) == int(width * 32)


# =============================================================================
# CONVERSION
# =============================================================================

class TestPrintLayoutConverter:
    """Tests for converting normalized layouts to print units."""

    def test_content_page_uses_style_margin(self):
        photos = [build_photo_metadata("a", 4000, 3000)]
        result = generate_layout(photos, LayoutOptions(layout_style="classic"))
        page = PrintLayoutConverter().convert(result, photos)[0]

        element = page.elements[0]
        assert page.width_inches == pytest.approx(8.25)
        assert page.dpi == 300
        # Classic margin (0.5") beats the safe zone: area starts at 0.625"
        assert element.x_inches == pytest.approx(0.625 + 0.1 * 7)
        assert element.width_inches == pytest.approx(5.6)
        assert element.width_px == 1680
        assert element.effective_dpi == 536
        assert page.warnings == []

    def test_small_margin_falls_back_to_safe_zone(self):
        photos = [build_photo_metadata("a", 4000, 3000)]
        options = LayoutOptions(spacing=Spacing(margin=0.1, gutter=0.1))
        result = generate_layout(photos, options)
        element = PrintLayoutConverter().convert(result)[0].elements[0]

        assert element.x_inches == pytest.approx(0.375 + 0.1 * 7.5)
        assert element.width_inches == pytest.approx(6.0)

    def test_cover_maps_to_bleed_area(self, make_photos):
        options = LayoutOptions(cover_photo_id="photo-1", cover_title="Trip")
        result = generate_layout(make_photos(1), options)
        page = PrintLayoutConverter(dpi=150).convert(result)[0]

        image, title = page.elements
        assert page.page_type == "cover"
        assert (image.x_inches, image.width_inches) == (0, 8.25)
        assert image.width_px == 1238
        assert title.kind == "text"
        assert title.content == "Trip"

    def test_low_resolution_placement_warns(self):
        photos = [build_photo_metadata("small", 1200, 900)]
        result = generate_layout(photos, LayoutOptions(layout_style="classic"))
        page = PrintLayoutConverter().convert(result, photos)[0]

        assert page.elements[0].effective_dpi == 161
        assert len(page.warnings) == 1
        assert page.warnings[0].startswith("Page 1: photo small:")

    def test_every_page_is_converted(self, make_photos):
        result = generate_layout(make_photos(9), LayoutOptions(layout_style="minimalist", include_back_page=True))
        pages = PrintLayoutConverter().convert(result)

        assert [p.page_number for p in pages] == list(range(1, result.total_pages + 1))
        assert pages[-1].page_type == "back"
        assert pages[-1].elements == []
