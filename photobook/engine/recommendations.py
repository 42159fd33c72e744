"""
recommendations.py — Page-count estimates and style/template recommendations.

These helpers feed the UI before a full generate_layout() call: previewing
how many pages a book will have, suggesting a style for a photo count and
listing the book templates that suit it. Estimates are for display only.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .data_models import (
    LayoutStyle,
    LayoutTemplate,
    Orientation,
    PhotoMetadata,
    PhotosPerPageRange,
    coerce_enum,
)
from .style_rules import get_style_rules
from .units import clamp


# =============================================================================
# PAGE COUNT
# =============================================================================

@dataclass(frozen=True)
class PageCountEstimate:
    """Page count range for a photo count."""
    min: int
    max: int
    recommended: int


def estimate_page_count(
    photo_count: int,
    style: Union[LayoutStyle, str],
    photos_per_page: Optional[PhotosPerPageRange] = None,
    average_photos_per_page: Optional[float] = None,
) -> PageCountEstimate:
    """
    Estimate how many content pages a book will need.

    Args:
        photo_count: Number of photos in the book
        style: Layout style
        photos_per_page: Optional override of the style's range
        average_photos_per_page: Divisor for the recommendation
            (defaults to the range midpoint)

    Returns:
        PageCountEstimate(min, max, recommended)
    """
    bounds = photos_per_page or get_style_rules(style).photos_per_page_range
    average = average_photos_per_page or bounds.midpoint
    count = max(photo_count, 0)

    return PageCountEstimate(
        min=math.ceil(count / bounds.max),
        max=math.ceil(count / bounds.min),
        recommended=math.ceil(count / average),
    )


def calculate_optimal_photos_per_page(
    total_photos: int,
    style: Union[LayoutStyle, str],
    target_pages: Optional[int] = None,
    photos_per_page: Optional[PhotosPerPageRange] = None,
) -> int:
    """
    Pick a photos-per-page count within the style's range.

    With target_pages, spread the photos over that many pages and clamp to
    the range. Otherwise choose the count leaving the smallest remainder on
    the last page, preferring larger counts on ties.
    """
    bounds = photos_per_page or get_style_rules(style).photos_per_page_range

    if target_pages:
        return int(clamp(math.ceil(total_photos / target_pages), bounds.min, bounds.max))

    if total_photos <= 0:
        return bounds.min

    return min(
        range(bounds.min, bounds.max + 1),
        key=lambda n: (total_photos % n, -n),
    )


# =============================================================================
# ORIENTATION GROUPS
# =============================================================================

@dataclass
class OrientationGroups:
    """Photos partitioned by orientation; unknown orientations go to mixed."""
    portrait: List[PhotoMetadata] = field(default_factory=list)
    landscape: List[PhotoMetadata] = field(default_factory=list)
    square: List[PhotoMetadata] = field(default_factory=list)
    mixed: List[PhotoMetadata] = field(default_factory=list)


def group_photos_by_orientation(photos: Sequence[PhotoMetadata]) -> OrientationGroups:
    """Partition photos by orientation, keeping their order."""
    groups = OrientationGroups()
    buckets = {
        Orientation.PORTRAIT: groups.portrait,
        Orientation.LANDSCAPE: groups.landscape,
        Orientation.SQUARE: groups.square,
    }
    for photo in photos:
        buckets.get(photo.orientation, groups.mixed).append(photo)
    return groups


# =============================================================================
# STYLE RECOMMENDATION
# =============================================================================

# Upper photo-count bound (inclusive) per recommended style
STYLE_RECOMMENDATION_THRESHOLDS: Tuple[Tuple[int, LayoutStyle], ...] = (
    (30, LayoutStyle.MINIMALIST),
    (60, LayoutStyle.MAGAZINE),
    (100, LayoutStyle.CLASSIC),
)


def get_recommended_style(photo_count: int) -> LayoutStyle:
    """Suggest a style for a book of `photo_count` photos."""
    for upper_bound, style in STYLE_RECOMMENDATION_THRESHOLDS:
        if photo_count <= upper_bound:
            return style
    return LayoutStyle.COLLAGE


# =============================================================================
# BOOK TEMPLATES
# =============================================================================

@dataclass(frozen=True)
class BookTemplate:
    """A pre-built photo book offering shown in the template picker."""
    id: str
    name: str
    description: str
    style: LayoutStyle
    photo_range: PhotosPerPageRange      # Photos per book, not per page
    popularity: int
    features: Tuple[str, ...] = ()
    best_for: Tuple[str, ...] = ()

    @property
    def layouts(self) -> Tuple[LayoutTemplate, ...]:
        """Page templates the book uses, taken from its style."""
        return get_style_rules(self.style).templates

    def supports_photo_count(self, photo_count: int) -> bool:
        return self.photo_range.contains(photo_count)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "style": self.style.value,
            "layouts": [t.value for t in self.layouts],
            "photo_range": {"min": self.photo_range.min, "max": self.photo_range.max},
            "popularity": self.popularity,
            "features": list(self.features),
            "best_for": list(self.best_for),
        }


BOOK_TEMPLATES: Dict[LayoutStyle, BookTemplate] = {
    LayoutStyle.CLASSIC: BookTemplate(
        id="classic",
        name="Classic Album",
        description="Traditional photo album style with clean, symmetric layouts.",
        style=LayoutStyle.CLASSIC,
        photo_range=PhotosPerPageRange(min=20, max=200),
        popularity=100,
        features=("Clean, symmetric layouts", "1-4 photos per page", "Consistent spacing"),
        best_for=("Family albums", "Wedding photos", "Baby books"),
    ),
    LayoutStyle.COLLAGE: BookTemplate(
        id="collage",
        name="Dynamic Collage",
        description="Creative, dynamic layouts with multiple photos per page.",
        style=LayoutStyle.COLLAGE,
        photo_range=PhotosPerPageRange(min=50, max=300),
        popularity=90,
        features=("Multiple photos per page", "Dynamic arrangements", "Space-efficient"),
        best_for=("Vacation albums", "Event coverage", "Travel journals"),
    ),
    LayoutStyle.MAGAZINE: BookTemplate(
        id="magazine",
        name="Magazine Editorial",
        description="Bold, editorial-style layouts with striking compositions.",
        style=LayoutStyle.MAGAZINE,
        photo_range=PhotosPerPageRange(min=15, max=100),
        popularity=75,
        features=("Editorial layouts", "Bold compositions", "Generous white space"),
        best_for=("Photography portfolios", "Fashion lookbooks", "Product catalogs"),
    ),
    LayoutStyle.MINIMALIST: BookTemplate(
        id="minimalist",
        name="Minimalist Gallery",
        description="Clean, spacious layouts emphasizing individual photos.",
        style=LayoutStyle.MINIMALIST,
        photo_range=PhotosPerPageRange(min=10, max=60),
        popularity=60,
        features=("Maximum white space", "1-2 photos per page", "Gallery-quality presentation"),
        best_for=("Fine art photography", "Portfolio books", "Coffee table books"),
    ),
}


def get_book_template(style: Union[LayoutStyle, str]) -> BookTemplate:
    return BOOK_TEMPLATES[coerce_enum(LayoutStyle, style, "layout style")]


def get_book_templates_for_photo_count(photo_count: int) -> List[BookTemplate]:
    """Book templates whose photo range includes `photo_count`."""
    return [t for t in BOOK_TEMPLATES.values() if t.supports_photo_count(photo_count)]


def get_popular_book_templates(limit: int = 4) -> List[BookTemplate]:
    """Book templates by descending popularity."""
    return sorted(BOOK_TEMPLATES.values(), key=lambda t: -t.popularity)[:limit]


def get_recommended_book_template(photo_count: int) -> BookTemplate:
    return BOOK_TEMPLATES[get_recommended_style(photo_count)]
