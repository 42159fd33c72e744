"""Tests for style rules, the template catalog and grid computation."""

import pytest

from photobook.engine import (
    LAYOUT_TEMPLATES,
    LayoutConfigurationError,
    LayoutStyle,
    LayoutTemplate,
    ObjectFit,
    Spacing,
    get_all_styles,
    get_all_templates,
    get_effective_spacing,
    get_style_rules,
    get_template,
    get_templates_for_photo_count,
    get_templates_for_style,
    style_supports_photo_count,
)
from photobook.engine.grid_layout import GridSpec, compute_grid, uniform_grid_spec


# =============================================================================
# STYLE RULES
# =============================================================================

class TestStyleRules:
    """Tests for the per-style policy table."""

    def test_four_styles(self):
        assert [r.style for r in get_all_styles()] == [
            LayoutStyle.CLASSIC,
            LayoutStyle.COLLAGE,
            LayoutStyle.MAGAZINE,
            LayoutStyle.MINIMALIST,
        ]

    def test_classic_rules(self):
        rules = get_style_rules("classic")
        assert rules.templates == (LayoutTemplate.SINGLE, LayoutTemplate.DOUBLE, LayoutTemplate.GRID_2X2)
        assert (rules.photos_per_page_range.min, rules.photos_per_page_range.max) == (1, 4)
        assert rules.spacing == Spacing(margin=0.5, gutter=0.25)
        assert not rules.allows_rotation

    def test_only_collage_allows_rotation(self):
        rotating = [r.style for r in get_all_styles() if r.allows_rotation]
        assert rotating == [LayoutStyle.COLLAGE]

    def test_collage_supports_photo_count(self):
        assert style_supports_photo_count("collage", 2) is False
        assert style_supports_photo_count("collage", 3) is True
        assert style_supports_photo_count("collage", 9) is True
        assert style_supports_photo_count(LayoutStyle.COLLAGE, 10) is False

    def test_style_templates_fit_style_range(self):
        for rules in get_all_styles():
            for template_id in rules.templates:
                template = get_template(template_id)
                assert rules.photos_per_page_range.contains(template.photos_per_page), (
                    f"{rules.style.value} lists {template_id.value}"
                )

    def test_effective_spacing(self):
        assert get_effective_spacing("minimalist").margin == 1.0
        override = Spacing(margin=0.2, gutter=0.1)
        assert get_effective_spacing("minimalist", override) is override

    def test_unknown_style_raises(self):
        with pytest.raises(LayoutConfigurationError):
            get_style_rules("retro")

    def test_lookup_is_stable(self):
        assert get_style_rules("magazine") == get_style_rules(LayoutStyle.MAGAZINE)
        assert get_style_rules("magazine").to_dict() == get_style_rules("magazine").to_dict()


# =============================================================================
# GRID COMPUTATION
# =============================================================================

class TestGridLayout:
    """Tests for grid slot generation."""

    def test_uniform_grid_fills_page(self):
        spec = uniform_grid_spec(rows=2, cols=2, margin=0.05, gutter=0.05)
        assert spec.cell_width == pytest.approx(0.425)
        assert spec.col_stride == pytest.approx(0.475)
        assert spec.gutter_h == pytest.approx(0.05)

        grid = compute_grid(spec)
        last = grid.cells[-1]
        assert (last.row, last.col) == (1, 1)
        assert last.x == pytest.approx(0.525)
        assert last.right_edge == pytest.approx(0.95)

    def test_cells_are_row_major(self):
        grid = compute_grid(GridSpec(
            rows=2, cols=3, margin_x=0.0, margin_y=0.0,
            cell_width=0.3, cell_height=0.4, col_stride=0.33, row_stride=0.5,
        ))
        assert [(c.row, c.col) for c in grid.cells] == [
            (0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2),
        ]
        assert (grid.num_rows, grid.num_cols) == (2, 3)
        assert grid.cells[4].x == pytest.approx(0.33)
        assert grid.cells[4].bottom_edge == pytest.approx(0.9)


# =============================================================================
# TEMPLATE CATALOG
# =============================================================================

class TestTemplateCatalog:
    """Tests for the fixed page templates."""

    def test_declaration_order(self):
        assert [t.id for t in get_all_templates()] == list(LayoutTemplate)

    def test_slot_count_matches_photos_per_page(self):
        for template in get_all_templates():
            assert len(template.positions) == template.photos_per_page

    def test_every_slot_is_on_the_page(self):
        for template in get_all_templates():
            for slot in template.positions:
                assert slot.x >= 0 and slot.y >= 0
                assert slot.right_edge <= 1 + 1e-6, template.id
                assert slot.bottom_edge <= 1 + 1e-6, template.id

    def test_single_is_contained(self):
        slot = get_template("single").positions[0]
        assert (slot.x, slot.y, slot.width, slot.height) == (0.1, 0.1, 0.8, 0.8)
        assert slot.object_fit == ObjectFit.CONTAIN

    def test_grid_3x3_geometry(self):
        positions = get_template(LayoutTemplate.GRID_3X3).positions
        assert positions[0].x == pytest.approx(0.033)
        assert positions[8].x == pytest.approx(0.673)
        assert positions[8].y == pytest.approx(0.673)
        assert positions[8].width == pytest.approx(0.287)

    def test_grid_2x3_geometry(self):
        positions = get_template("grid-2x3").positions
        assert positions[0].y == pytest.approx(0.15)
        assert positions[3].y == pytest.approx(0.5)
        assert positions[2].x == pytest.approx(0.673)

    def test_asymmetric_has_z_order(self):
        positions = get_template("asymmetric").positions
        assert [p.z_index for p in positions] == [1, 2, 2]

    def test_custom_has_no_slots(self):
        assert get_template("custom").photos_per_page == 0

    def test_templates_for_photo_count(self):
        assert [t.id for t in get_templates_for_photo_count(4)] == [
            LayoutTemplate.GRID_2X2,
            LayoutTemplate.CUSTOM,
        ]
        assert [t.id for t in get_templates_for_photo_count(5)] == [LayoutTemplate.CUSTOM]

    def test_templates_for_photo_count_never_exclude_count(self):
        for count in range(0, 12):
            for template in get_templates_for_photo_count(count):
                assert template.id == LayoutTemplate.CUSTOM or template.photos_per_page == count

    def test_templates_for_style_follow_style_rules(self):
        for rules in get_all_styles():
            assert tuple(t.id for t in get_templates_for_style(rules.style)) == rules.templates

    def test_unknown_template_raises(self):
        with pytest.raises(LayoutConfigurationError):
            get_template("grid-4x4")

    def test_lookup_is_stable(self):
        assert get_template("double") is LAYOUT_TEMPLATES[LayoutTemplate.DOUBLE]
        assert get_template("double").to_dict() == get_template(LayoutTemplate.DOUBLE).to_dict()
