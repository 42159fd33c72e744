"""
print_layout.py — Print areas and conversion of layouts to absolute units.

Layout results are normalized (0-1). The PDF renderer needs inches and
pixels on a physical sheet that includes bleed. This module computes the
bleed/trim/safe areas for a page size and maps every placed photo and text
element onto them:

- cover pages map onto the full bleed area (full-bleed cover photo)
- content and back pages map onto the placement area: the trim area inset
  by the safe zone, or by the style margin when that is larger

All coordinates are measured from the top-left corner of the bleed area.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from .data_models import PageSize, PhotoMetadata, coerce_enum
from .photo_analysis import calculate_dpi
from .positioned import LayoutResult, PageLayout, PageType
from .style_rules import get_effective_spacing
from .units import PRINT_DPI, get_dimensions, inches_to_pixels

logger = logging.getLogger(__name__)


# =============================================================================
# AREAS
# =============================================================================

@dataclass(frozen=True)
class Rect:
    """Rectangle in inches."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, amount: float) -> "Rect":
        return Rect(
            x=self.x + amount,
            y=self.y + amount,
            width=self.width - amount * 2,
            height=self.height - amount * 2,
        )


@dataclass(frozen=True)
class PrintAreas:
    """Bleed, trim and safe areas of one page."""
    bleed_area: Rect    # Whole sheet including bleed
    trim_area: Rect     # Final printed size
    safe_area: Rect     # Content never cropped inside this


def calculate_print_areas(page_size: Union[PageSize, str], include_bleed: bool = True) -> PrintAreas:
    """Compute bleed, trim and safe areas for a page size."""
    dims = get_dimensions(page_size)
    bleed = dims.bleed if include_bleed else 0.0

    bleed_area = Rect(x=0.0, y=0.0, width=dims.width + bleed * 2, height=dims.height + bleed * 2)
    trim_area = Rect(x=bleed, y=bleed, width=dims.width, height=dims.height)
    return PrintAreas(
        bleed_area=bleed_area,
        trim_area=trim_area,
        safe_area=trim_area.inset(dims.safe_zone),
    )


def normalized_to_absolute(normalized_x: float, normalized_y: float, area: Rect) -> tuple:
    """Map a normalized (0-1) point into an area, in inches."""
    return (
        area.x + normalized_x * area.width,
        area.y + normalized_y * area.height,
    )


def absolute_to_normalized(x: float, y: float, area: Rect) -> tuple:
    """Map an absolute point in inches back to normalized (0-1) coordinates."""
    return (
        (x - area.x) / area.width,
        (y - area.y) / area.height,
    )


def is_within_print_area(element: Rect, area: Rect) -> bool:
    return (
        element.x >= area.x
        and element.y >= area.y
        and element.right <= area.right
        and element.bottom <= area.bottom
    )


def is_in_bleed_area(element: Rect, trim_area: Rect, bleed_area: Rect) -> bool:
    """True if the element crosses the trim edge but stays inside the bleed."""
    return (
        (bleed_area.x <= element.x < trim_area.x)
        or (bleed_area.y <= element.y < trim_area.y)
        or (trim_area.right < element.right <= bleed_area.right)
        or (trim_area.bottom < element.bottom <= bleed_area.bottom)
    )


# =============================================================================
# SPINE
# =============================================================================

class BindingType(Enum):
    HARDCOVER = "hardcover"
    SOFTCOVER = "softcover"
    LAYFLAT = "layflat"


MIN_SPINE_WIDTH = 0.0625       # 1/16"
HARDCOVER_BOARD_WIDTH = 0.125  # 1/8"


def calculate_spine_width(
    page_count: int,
    paper_weight: float = 80,
    binding: Union[BindingType, str] = BindingType.SOFTCOVER,
) -> float:
    """
    Spine width in inches, rounded up to the nearest 1/32".

    Paper thickness per sheet is paper_weight / 20000 (80lb ~ 0.004"),
    with two pages per sheet.
    """
    binding = coerce_enum(BindingType, binding, "binding")
    sheets = math.ceil(page_count / 2)
    spine = sheets * (paper_weight / 20000)

    if binding == BindingType.HARDCOVER:
        spine += HARDCOVER_BOARD_WIDTH
    spine = max(spine, MIN_SPINE_WIDTH)

    return math.ceil(spine * 32) / 32


# =============================================================================
# LAYOUT CONVERSION
# =============================================================================

@dataclass
class PrintElement:
    """An image or text element in absolute units."""
    kind: str                        # "image" or "text"
    ref_id: str                      # Photo id or text element id
    x_inches: float
    y_inches: float
    width_inches: float
    height_inches: float
    x_px: int
    y_px: int
    width_px: int
    height_px: int
    rotation: Optional[float] = None
    z_index: Optional[int] = None
    object_fit: Optional[str] = None
    content: Optional[str] = None    # Text only
    font_size: Optional[float] = None
    effective_dpi: Optional[int] = None

    @property
    def rect(self) -> Rect:
        return Rect(self.x_inches, self.y_inches, self.width_inches, self.height_inches)


@dataclass
class PrintPage:
    """A page ready for the PDF renderer."""
    page_number: int
    page_type: str
    width_inches: float              # Including bleed
    height_inches: float
    dpi: int
    elements: List[PrintElement] = field(default_factory=list)
    background_color: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


class PrintLayoutConverter:
    """Converts a LayoutResult into PrintPages at a given DPI."""

    def __init__(self, dpi: int = PRINT_DPI, include_bleed: bool = True):
        self.dpi = dpi
        self.include_bleed = include_bleed

    def convert(
        self,
        result: LayoutResult,
        photos: Optional[Sequence[PhotoMetadata]] = None,
    ) -> List[PrintPage]:
        """
        Convert every page of a layout result.

        Args:
            result: Layout to convert
            photos: Optional photo metadata, enabling placement-DPI warnings
        """
        options = result.metadata.options
        areas = calculate_print_areas(options.page_size, self.include_bleed)
        spacing = get_effective_spacing(options.layout_style, options.spacing)
        dims = get_dimensions(options.page_size)
        placement_area = areas.trim_area.inset(max(dims.safe_zone, spacing.margin))
        photo_map: Dict[str, PhotoMetadata] = {p.id: p for p in photos or []}

        return [
            self.convert_page(page, areas, placement_area, photo_map)
            for page in result.pages
        ]

    def convert_page(
        self,
        page: PageLayout,
        areas: PrintAreas,
        placement_area: Rect,
        photo_map: Dict[str, PhotoMetadata],
    ) -> PrintPage:
        area = areas.bleed_area if page.page_type == PageType.COVER else placement_area
        print_page = PrintPage(
            page_number=page.page_number,
            page_type=page.page_type.value,
            width_inches=areas.bleed_area.width,
            height_inches=areas.bleed_area.height,
            dpi=self.dpi,
            background_color=page.background_color,
        )

        for position in page.photos:
            element = self._element(
                "image", position.photo_id, position.x, position.y,
                position.width, position.height, area,
            )
            element.rotation = position.rotation
            element.z_index = position.z_index
            element.object_fit = position.object_fit.value if position.object_fit else None

            photo = photo_map.get(position.photo_id)
            if photo is not None and photo.has_dimensions:
                dpi_check = calculate_dpi(
                    photo.width, photo.height, element.width_inches, element.height_inches
                )
                element.effective_dpi = dpi_check.actual_dpi
                if dpi_check.warning_message:
                    print_page.warnings.append(
                        f"Page {page.page_number}: photo {photo.id}: {dpi_check.warning_message}"
                    )
            elif photo_map and photo is None:
                logger.warning(f"Photo {position.photo_id} not found in metadata map")

            print_page.elements.append(element)

        for text in page.text_elements:
            element = self._element("text", text.id, text.x, text.y, text.width, text.height, area)
            element.content = text.content
            element.font_size = text.font_size
            print_page.elements.append(element)

        return print_page

    def _element(
        self,
        kind: str,
        ref_id: str,
        x: float,
        y: float,
        width: float,
        height: float,
        area: Rect,
    ) -> PrintElement:
        abs_x, abs_y = normalized_to_absolute(x, y, area)
        abs_w = width * area.width
        abs_h = height * area.height
        return PrintElement(
            kind=kind,
            ref_id=ref_id,
            x_inches=abs_x,
            y_inches=abs_y,
            width_inches=abs_w,
            height_inches=abs_h,
            x_px=inches_to_pixels(abs_x, self.dpi),
            y_px=inches_to_pixels(abs_y, self.dpi),
            width_px=inches_to_pixels(abs_w, self.dpi),
            height_px=inches_to_pixels(abs_h, self.dpi),
        )
