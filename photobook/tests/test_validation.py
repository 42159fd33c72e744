"""Tests for post-hoc layout validation."""

from datetime import datetime, timezone

import pytest

from photobook.engine import (
    LayoutMetadata,
    LayoutOptions,
    LayoutResult,
    LayoutTemplate,
    PageLayout,
    PageType,
    PhotoMetadata,
    PhotoPosition,
    generate_layout,
    validate_layout,
)


def build_result(pages, options=None, photos_unused=None, warnings=None, photos_used=None) -> LayoutResult:
    """Hand-assemble a LayoutResult around the given pages."""
    placed = sum(len(p.photos) for p in pages)
    return LayoutResult(
        pages=pages,
        total_pages=len(pages),
        photos_used=placed if photos_used is None else photos_used,
        photos_unused=photos_unused or [],
        warnings=warnings or [],
        metadata=LayoutMetadata(
            generated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            generation_time_ms=0.0,
            algorithm="hand-built",
            options=options or LayoutOptions(),
        ),
    )


def content_page(page_number, template, *positions) -> PageLayout:
    return PageLayout(
        page_number=page_number,
        page_type=PageType.CONTENT,
        layout_template=template,
        photos=list(positions),
    )


def position(photo_id, x=0.1, y=0.1, width=0.8, height=0.8) -> PhotoPosition:
    return PhotoPosition(photo_id=photo_id, x=x, y=y, width=width, height=height)


def rules_of(violations) -> list[str]:
    return [v.rule for v in violations]


class TestValidLayouts:
    """Generated layouts pass validation."""

    def test_generated_layout_is_valid(self, make_photos):
        photos = make_photos(11)
        result = generate_layout(photos, LayoutOptions(layout_style="magazine", cover_photo_id="photo-2"))
        assert validate_layout(result, photos) == []

    def test_hand_built_layout_is_valid(self):
        result = build_result([content_page(1, LayoutTemplate.SINGLE, position("a"))])
        assert validate_layout(result, [PhotoMetadata(id="a")]) == []


class TestContainment:
    """Slots must stay inside the page."""

    def test_overflowing_slot_is_reported(self):
        result = build_result([
            content_page(1, LayoutTemplate.SINGLE, position("a", x=0.9, width=0.3)),
        ])
        violations = validate_layout(result)

        assert rules_of(violations) == ["containment"]
        assert violations[0].photo_ids == ["a"]
        assert violations[0].page_number == 1
        assert str(violations[0]).startswith("[containment]")

    def test_negative_origin_is_reported(self):
        result = build_result([content_page(1, LayoutTemplate.SINGLE, position("a", y=-0.1))])
        assert rules_of(validate_layout(result)) == ["containment"]

    def test_rounding_is_tolerated(self):
        result = build_result([
            content_page(1, LayoutTemplate.SINGLE, position("a", x=0.2, width=0.8 + 1e-9)),
        ])
        assert validate_layout(result) == []

    def test_flagged_overflow_tolerated_with_cropping(self):
        result = build_result(
            [content_page(1, LayoutTemplate.SINGLE, position("a", x=0.9, width=0.3))],
            options=LayoutOptions(allow_cropping=True),
            warnings=["Page 1: photo a bleeds off the page edge"],
        )
        assert validate_layout(result) == []

    def test_flagged_overflow_rejected_without_cropping(self):
        result = build_result(
            [content_page(1, LayoutTemplate.SINGLE, position("a", x=0.9, width=0.3))],
            options=LayoutOptions(allow_cropping=False),
            warnings=["Page 1: photo a bleeds off the page edge"],
        )
        assert rules_of(validate_layout(result)) == ["containment"]

    @pytest.mark.parametrize("overflowing, warning", [
        ("p1", "Photo p10 could not be placed: no 'classic' template holds 1 photo(s)"),
        ("p1", "Page 1: photo xp1 bleeds off the page edge"),
        ("1", "1 photos could not fit in the layout"),
    ])
    def test_overflow_needs_a_warning_naming_that_photo(self, overflowing, warning):
        result = build_result(
            [content_page(1, LayoutTemplate.SINGLE, position(overflowing, x=0.9, width=0.3))],
            options=LayoutOptions(allow_cropping=True),
            warnings=[warning],
        )
        violations = validate_layout(result)

        assert rules_of(violations) == ["containment"]
        assert violations[0].photo_ids == [overflowing]


class TestPlacements:
    """Each photo appears at most once and only if supplied."""

    def test_duplicate_placement(self):
        result = build_result([
            content_page(1, LayoutTemplate.SINGLE, position("a")),
            content_page(2, LayoutTemplate.SINGLE, position("a")),
        ])
        violations = validate_layout(result)
        assert "duplicate_placement" in rules_of(violations)

    def test_phantom_photo(self):
        result = build_result([content_page(1, LayoutTemplate.SINGLE, position("ghost"))])
        violations = validate_layout(result, [PhotoMetadata(id="real")])
        assert "phantom_photo" in rules_of(violations)


class TestConservation:
    """Counts must add up."""

    def test_photos_used_mismatch(self):
        result = build_result([content_page(1, LayoutTemplate.SINGLE, position("a"))], photos_used=2)
        assert rules_of(validate_layout(result)) == ["conservation"]

    def test_lost_photo(self):
        result = build_result([content_page(1, LayoutTemplate.SINGLE, position("a"))])
        photos = [PhotoMetadata(id="a"), PhotoMetadata(id="b")]
        assert rules_of(validate_layout(result, photos)) == ["conservation"]

    def test_unused_photo_accounts(self):
        result = build_result(
            [content_page(1, LayoutTemplate.SINGLE, position("a"))],
            photos_unused=["b"],
        )
        photos = [PhotoMetadata(id="a"), PhotoMetadata(id="b")]
        assert validate_layout(result, photos) == []


class TestPages:
    """Per-page rules."""

    def test_page_numbering_gap(self):
        result = build_result([
            content_page(1, LayoutTemplate.SINGLE, position("a")),
            content_page(3, LayoutTemplate.SINGLE, position("b")),
        ])
        assert rules_of(validate_layout(result)) == ["page_numbering"]

    def test_empty_content_page(self):
        result = build_result([content_page(1, LayoutTemplate.SINGLE)])
        assert rules_of(validate_layout(result)) == ["empty_page"]

    def test_too_many_photos_for_template(self):
        result = build_result([
            content_page(1, LayoutTemplate.SINGLE, position("a"), position("b", x=0.0, width=0.1)),
        ])
        assert rules_of(validate_layout(result)) == ["template_slots"]

    def test_bounds_are_a_warning(self):
        result = build_result(
            [content_page(1, LayoutTemplate.GRID_3X3, position("a"))],
            options=LayoutOptions(layout_style="minimalist"),
        )
        violations = validate_layout(result)

        assert rules_of(violations) == ["bounds"]
        assert violations[0].severity == "warning"

    @pytest.mark.parametrize("page_type", [PageType.COVER, PageType.BACK])
    def test_non_content_pages_are_exempt(self, page_type):
        page = PageLayout(page_number=1, page_type=page_type, layout_template=LayoutTemplate.CUSTOM)
        assert validate_layout(build_result([page])) == []
