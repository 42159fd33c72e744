"""
units.py — Page dimensions, print constants and unit conversions.

This is the foundation module. ALL physical sizing uses the table and
functions here. Never hardcode page sizes or DPI values anywhere else.

Layouts are expressed in normalized page coordinates (0-1); this module is
what the renderer uses to turn them into inches, points and pixels.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from .data_models import PageSize, coerce_enum


# =============================================================================
# PRINT CONSTANTS
# =============================================================================

PRINT_DPI = 300          # Target resolution for print output
MIN_DPI = 150            # Below this, print quality is poor
SCREEN_DPI = 72

POINTS_PER_INCH = 72

STANDARD_BLEED = 0.125      # 1/8" bleed all around
STANDARD_SAFE_ZONE = 0.25   # 1/4" from trim


# =============================================================================
# PAGE DIMENSIONS
# =============================================================================

@dataclass(frozen=True)
class PageDimensions:
    """Physical page size in inches with bleed and safe zone."""
    width: float
    height: float
    bleed: float
    safe_zone: float


@dataclass(frozen=True)
class AreaSize:
    """Width/height pair in inches."""
    width: float
    height: float


@dataclass(frozen=True)
class PixelDimensions:
    """Page dimensions converted to pixels at a given DPI."""
    width: int
    height: int
    bleed: int
    safe_zone: int
    dpi: int


class PageOrientation(Enum):
    """Orientation of a physical page."""
    SQUARE = "square"
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


PAGE_DIMENSIONS: Dict[PageSize, PageDimensions] = {
    PageSize.SQUARE_8: PageDimensions(width=8, height=8, bleed=STANDARD_BLEED, safe_zone=STANDARD_SAFE_ZONE),
    PageSize.SQUARE_10: PageDimensions(width=10, height=10, bleed=STANDARD_BLEED, safe_zone=STANDARD_SAFE_ZONE),
    PageSize.SQUARE_12: PageDimensions(width=12, height=12, bleed=STANDARD_BLEED, safe_zone=STANDARD_SAFE_ZONE),
    PageSize.PORTRAIT_8X11: PageDimensions(width=8, height=11, bleed=STANDARD_BLEED, safe_zone=STANDARD_SAFE_ZONE),
    PageSize.A4: PageDimensions(width=8.27, height=11.69, bleed=0.118, safe_zone=0.236),  # 3mm / 6mm
    PageSize.LETTER: PageDimensions(width=8.5, height=11, bleed=STANDARD_BLEED, safe_zone=STANDARD_SAFE_ZONE),
}


def get_dimensions(page_size: Union[PageSize, str]) -> PageDimensions:
    """Get physical dimensions for a page size."""
    return PAGE_DIMENSIONS[coerce_enum(PageSize, page_size, "page size")]


def get_printable_area(page_size: Union[PageSize, str]) -> AreaSize:
    """Get the area inside bleed AND safe zone, where content is never cropped."""
    dims = get_dimensions(page_size)
    margin = dims.bleed + dims.safe_zone
    return AreaSize(
        width=dims.width - margin * 2,
        height=dims.height - margin * 2,
    )


def get_content_area(page_size: Union[PageSize, str]) -> AreaSize:
    """Get the area inside the bleed only."""
    dims = get_dimensions(page_size)
    return AreaSize(
        width=dims.width - dims.bleed * 2,
        height=dims.height - dims.bleed * 2,
    )


# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

def inches_to_pixels(inches: float, dpi: int = PRINT_DPI) -> int:
    """Convert inches to whole pixels. Halves round up."""
    return int(math.floor(inches * dpi + 0.5))


def pixels_to_inches(pixels: float, dpi: int = PRINT_DPI) -> float:
    """Convert pixels to inches."""
    return pixels / dpi


def inches_to_points(inches: float) -> float:
    """Convert inches to PDF points."""
    return inches * POINTS_PER_INCH


def points_to_inches(points: float) -> float:
    """Convert PDF points to inches."""
    return points / POINTS_PER_INCH


def get_dimensions_in_pixels(page_size: Union[PageSize, str], dpi: int = PRINT_DPI) -> PixelDimensions:
    """Get page dimensions in pixels for rendering at the given DPI."""
    dims = get_dimensions(page_size)
    return PixelDimensions(
        width=inches_to_pixels(dims.width, dpi),
        height=inches_to_pixels(dims.height, dpi),
        bleed=inches_to_pixels(dims.bleed, dpi),
        safe_zone=inches_to_pixels(dims.safe_zone, dpi),
        dpi=dpi,
    )


# =============================================================================
# SHAPE QUERIES
# =============================================================================

def get_aspect_ratio(page_size: Union[PageSize, str]) -> float:
    """Width divided by height."""
    dims = get_dimensions(page_size)
    return dims.width / dims.height


def is_square(page_size: Union[PageSize, str]) -> bool:
    dims = get_dimensions(page_size)
    return dims.width == dims.height


def get_page_orientation(page_size: Union[PageSize, str]) -> PageOrientation:
    dims = get_dimensions(page_size)
    if dims.width == dims.height:
        return PageOrientation.SQUARE
    return PageOrientation.LANDSCAPE if dims.width > dims.height else PageOrientation.PORTRAIT


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))
