"""
style_rules.py — Per-style layout policy.

Each style is a fixed bundle of business rules: which templates it may use,
how many photos a page may hold, spacing, and whether rotation/asymmetry
are permitted. The four rows below are authoritative product data.

This module owns the style -> template relation. template_catalog derives
its per-style lookup from LayoutStyleRules.templates.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .data_models import (
    LayoutStyle,
    LayoutTemplate,
    PhotosPerPageRange,
    Spacing,
    coerce_enum,
)


@dataclass(frozen=True)
class LayoutStyleRules:
    """Static layout policy for one style."""
    style: LayoutStyle
    name: str
    description: str
    templates: Tuple[LayoutTemplate, ...]      # Ordered by preference
    photos_per_page_range: PhotosPerPageRange
    spacing: Spacing                           # Inches
    allows_rotation: bool
    allows_asymmetry: bool
    preferred_aspect_ratios: Optional[Tuple[float, ...]] = None

    def to_dict(self) -> dict:
        return {
            "style": self.style.value,
            "name": self.name,
            "description": self.description,
            "templates": [t.value for t in self.templates],
            "photos_per_page_range": {
                "min": self.photos_per_page_range.min,
                "max": self.photos_per_page_range.max,
            },
            "spacing": {"margin": self.spacing.margin, "gutter": self.spacing.gutter},
            "allows_rotation": self.allows_rotation,
            "allows_asymmetry": self.allows_asymmetry,
            "preferred_aspect_ratios": (
                list(self.preferred_aspect_ratios) if self.preferred_aspect_ratios else None
            ),
        }


# =============================================================================
# STYLE TABLE
# =============================================================================

LAYOUT_STYLE_RULES: Dict[LayoutStyle, LayoutStyleRules] = {
    LayoutStyle.CLASSIC: LayoutStyleRules(
        style=LayoutStyle.CLASSIC,
        name="Classic",
        description="Traditional photo album style with clean, symmetric layouts",
        templates=(LayoutTemplate.SINGLE, LayoutTemplate.DOUBLE, LayoutTemplate.GRID_2X2),
        photos_per_page_range=PhotosPerPageRange(min=1, max=4),
        spacing=Spacing(margin=0.5, gutter=0.25),
        allows_rotation=False,
        allows_asymmetry=False,
        preferred_aspect_ratios=(1, 1.5, 0.67),  # square, 3:2, 2:3
    ),
    LayoutStyle.COLLAGE: LayoutStyleRules(
        style=LayoutStyle.COLLAGE,
        name="Collage",
        description="Dynamic, overlapping layouts with multiple photos per page",
        templates=(
            LayoutTemplate.GRID_2X2,
            LayoutTemplate.GRID_3X3,
            LayoutTemplate.GRID_2X3,
            LayoutTemplate.ASYMMETRIC,
        ),
        photos_per_page_range=PhotosPerPageRange(min=3, max=9),
        spacing=Spacing(margin=0.25, gutter=0.15),
        allows_rotation=True,
        allows_asymmetry=True,
    ),
    LayoutStyle.MAGAZINE: LayoutStyleRules(
        style=LayoutStyle.MAGAZINE,
        name="Magazine",
        description="Editorial-style layouts with bold, striking compositions",
        templates=(LayoutTemplate.SINGLE, LayoutTemplate.DOUBLE, LayoutTemplate.ASYMMETRIC),
        photos_per_page_range=PhotosPerPageRange(min=1, max=3),
        spacing=Spacing(margin=0.75, gutter=0.5),
        allows_rotation=False,
        allows_asymmetry=True,
        preferred_aspect_ratios=(0.67, 1.5),  # portrait and landscape emphasis
    ),
    LayoutStyle.MINIMALIST: LayoutStyleRules(
        style=LayoutStyle.MINIMALIST,
        name="Minimalist",
        description="Clean, spacious layouts emphasizing individual photos",
        templates=(LayoutTemplate.SINGLE, LayoutTemplate.DOUBLE),
        photos_per_page_range=PhotosPerPageRange(min=1, max=2),
        spacing=Spacing(margin=1.0, gutter=0.75),
        allows_rotation=False,
        allows_asymmetry=False,
        preferred_aspect_ratios=(1,),
    ),
}


# =============================================================================
# LOOKUPS
# =============================================================================

def get_style_rules(style: Union[LayoutStyle, str]) -> LayoutStyleRules:
    """Get the rules for a style."""
    return LAYOUT_STYLE_RULES[coerce_enum(LayoutStyle, style, "layout style")]


def get_all_styles() -> List[LayoutStyleRules]:
    """All styles in declaration order."""
    return list(LAYOUT_STYLE_RULES.values())


def style_supports_photo_count(style: Union[LayoutStyle, str], count: int) -> bool:
    """Check if a style allows `count` photos on one page."""
    return get_style_rules(style).photos_per_page_range.contains(count)


def get_effective_spacing(style: Union[LayoutStyle, str], override: Optional[Spacing] = None) -> Spacing:
    """Spacing override if given, else the style's own spacing."""
    return override if override is not None else get_style_rules(style).spacing
