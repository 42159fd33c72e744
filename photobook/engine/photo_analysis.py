"""
photo_analysis.py — Derive layout metadata from raw photo dimensions.

The upload pipeline inspects each image and calls build_photo_metadata()
to produce the PhotoMetadata the layout engine consumes. Missing or
nonsensical pixel sizes degrade to orientation UNKNOWN instead of failing.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .data_models import Orientation, PhotoMetadata
from .units import MIN_DPI, PRINT_DPI

# Ratios within this band count as square
LANDSCAPE_RATIO_THRESHOLD = 1.1
PORTRAIT_RATIO_THRESHOLD = 0.9

# Print size assumed when judging a fresh upload
DEFAULT_TARGET_INCHES = 8.0


def derive_aspect_ratio(width: Optional[int], height: Optional[int]) -> Optional[float]:
    """width / height, or None when either side is unknown."""
    if not width or not height or width <= 0 or height <= 0:
        return None
    return width / height


def derive_orientation(width: Optional[int], height: Optional[int]) -> Orientation:
    ratio = derive_aspect_ratio(width, height)
    if ratio is None:
        return Orientation.UNKNOWN
    if ratio > LANDSCAPE_RATIO_THRESHOLD:
        return Orientation.LANDSCAPE
    if ratio < PORTRAIT_RATIO_THRESHOLD:
        return Orientation.PORTRAIT
    return Orientation.SQUARE


@dataclass(frozen=True)
class DPICalculation:
    """Effective resolution of an image printed at a given size."""
    actual_dpi: int
    target_dpi: int
    is_print_safe: bool
    is_print_optimal: bool
    warning_message: Optional[str] = None


def calculate_dpi(
    width_px: int,
    height_px: int,
    print_width_inches: float,
    print_height_inches: float,
) -> DPICalculation:
    """
    Calculate the DPI an image achieves when printed at a given size.

    Uses the lower of the horizontal and vertical DPI (worst case).
    """
    actual = min(width_px / print_width_inches, height_px / print_height_inches)
    rounded = int(round(actual))
    is_print_safe = actual >= MIN_DPI
    is_print_optimal = actual >= PRINT_DPI

    warning_message = None
    if not is_print_safe:
        warning_message = (
            f"Image DPI ({rounded}) is below minimum {MIN_DPI} DPI. Print quality will be poor."
        )
    elif not is_print_optimal:
        warning_message = (
            f"Image DPI ({rounded}) is below optimal {PRINT_DPI} DPI. "
            f"Consider using a higher resolution image for best print quality."
        )

    return DPICalculation(
        actual_dpi=rounded,
        target_dpi=PRINT_DPI,
        is_print_safe=is_print_safe,
        is_print_optimal=is_print_optimal,
        warning_message=warning_message,
    )


def build_photo_metadata(
    photo_id: str,
    width: Optional[int],
    height: Optional[int],
    sort_order: int = 0,
    taken_at: Optional[datetime] = None,
    target_inches: float = DEFAULT_TARGET_INCHES,
) -> PhotoMetadata:
    """
    Build PhotoMetadata for a freshly uploaded photo.

    A photo is print-safe when its short side reaches PRINT_DPI at
    `target_inches`; otherwise a low-resolution warning is recorded.
    """
    aspect_ratio = derive_aspect_ratio(width, height)
    warnings = []
    is_print_safe = False

    if aspect_ratio is not None:
        dpi = min(width, height) / target_inches
        is_print_safe = dpi >= PRINT_DPI
        if not is_print_safe:
            warnings.append(f"Low resolution: {round(dpi)} DPI ({PRINT_DPI}+ recommended)")

    return PhotoMetadata(
        id=photo_id,
        width=width,
        height=height,
        aspect_ratio=aspect_ratio,
        orientation=derive_orientation(width, height),
        sort_order=sort_order,
        is_print_safe=is_print_safe,
        quality_warnings=warnings,
        taken_at=taken_at,
    )
