"""
data_models.py — Input data models shared by the layout engine modules.

This module holds the closed enums and the per-run input records
(PhotoMetadata, LayoutOptions). It has no dependencies on the other
engine modules so catalogs and the algorithm can all import from it.

Enum values are the exact wire strings used by the surrounding web
application ("8x8", "grid-2x2", ...).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Type, TypeVar, Union


class LayoutConfigurationError(ValueError):
    """Raised when the caller passes a value outside a closed configuration set."""


# =============================================================================
# ENUMS
# =============================================================================

class PageSize(Enum):
    """Physical page sizes offered for photo books."""
    SQUARE_8 = "8x8"
    SQUARE_10 = "10x10"
    SQUARE_12 = "12x12"
    PORTRAIT_8X11 = "8x11"
    A4 = "A4"
    LETTER = "letter"


class LayoutStyle(Enum):
    """Style policies guiding template selection across a whole book."""
    CLASSIC = "classic"
    COLLAGE = "collage"
    MAGAZINE = "magazine"
    MINIMALIST = "minimalist"


class LayoutTemplate(Enum):
    """Identifiers of the fixed page templates."""
    SINGLE = "single"
    DOUBLE = "double"
    GRID_2X2 = "grid-2x2"
    GRID_3X3 = "grid-3x3"
    GRID_2X3 = "grid-2x3"
    ASYMMETRIC = "asymmetric"
    CUSTOM = "custom"


class Orientation(Enum):
    """Photo orientation derived from pixel dimensions."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"
    SQUARE = "square"
    UNKNOWN = "unknown"


class ObjectFit(Enum):
    """How a photo fills its slot."""
    COVER = "cover"       # Fill the slot, cropping overflow
    CONTAIN = "contain"   # Fit inside the slot, never cropped
    FILL = "fill"         # Stretch to the slot


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Union[E, str], label: str) -> E:
    """
    Convert a string (or enum member) into a member of enum_cls.

    Raises:
        LayoutConfigurationError: If the value is not part of the enum
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise LayoutConfigurationError(
            f"Unknown {label} '{value}'. Expected one of: {allowed}"
        ) from None


# =============================================================================
# PHOTO INPUT
# =============================================================================

@dataclass(frozen=True)
class PhotoMetadata:
    """
    Layout-relevant facts about one uploaded photo.

    Produced by the upload pipeline (see photo_analysis.build_photo_metadata)
    and never mutated by the layout engine.
    """
    id: str
    width: Optional[int] = None            # Pixels, None if unknown
    height: Optional[int] = None           # Pixels, None if unknown
    aspect_ratio: Optional[float] = None   # width / height
    orientation: Orientation = Orientation.UNKNOWN
    sort_order: int = 0
    is_print_safe: bool = False
    quality_warnings: List[str] = field(default_factory=list)
    taken_at: Optional[datetime] = None    # Capture time, used by date grouping

    def __post_init__(self):
        if not isinstance(self.orientation, Orientation):
            object.__setattr__(
                self, "orientation",
                coerce_enum(Orientation, self.orientation, "orientation"),
            )

    @property
    def has_dimensions(self) -> bool:
        """True when both pixel dimensions are known and positive."""
        return bool(self.width and self.height and self.width > 0 and self.height > 0)


# =============================================================================
# LAYOUT OPTIONS
# =============================================================================

@dataclass(frozen=True)
class PhotosPerPageRange:
    """Inclusive photos-per-page bounds."""
    min: int
    max: int

    def contains(self, count: int) -> bool:
        return self.min <= count <= self.max

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


@dataclass(frozen=True)
class Spacing:
    """Page spacing in inches."""
    margin: float
    gutter: float
    padding: float = 0.0


@dataclass(frozen=True)
class LayoutOptions:
    """
    Per-run configuration for generate_layout().

    page_size and layout_style accept either the enum member or its string
    value; anything else fails immediately with LayoutConfigurationError.
    """
    page_size: PageSize = PageSize.SQUARE_8
    layout_style: LayoutStyle = LayoutStyle.CLASSIC
    photos_per_page: Optional[PhotosPerPageRange] = None
    spacing: Optional[Spacing] = None
    allow_cropping: bool = True
    allow_rotation: bool = False
    preserve_order: bool = True
    group_by_date: bool = False
    cover_photo_id: Optional[str] = None
    cover_title: Optional[str] = None
    include_back_page: bool = False
    background_color: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "page_size", coerce_enum(PageSize, self.page_size, "page size"))
        object.__setattr__(
            self, "layout_style", coerce_enum(LayoutStyle, self.layout_style, "layout style")
        )

        bounds = self.photos_per_page
        if bounds is not None:
            if bounds.min < 1:
                raise LayoutConfigurationError(
                    f"photos_per_page.min must be at least 1, got {bounds.min}"
                )
            if bounds.max < bounds.min:
                raise LayoutConfigurationError(
                    f"photos_per_page.max ({bounds.max}) is below min ({bounds.min})"
                )

        if self.spacing is not None:
            for name in ("margin", "gutter", "padding"):
                if getattr(self.spacing, name) < 0:
                    raise LayoutConfigurationError(f"spacing.{name} must not be negative")

    def to_dict(self) -> dict:
        """Serialize with enum values as plain strings."""
        return {
            "page_size": self.page_size.value,
            "layout_style": self.layout_style.value,
            "photos_per_page": (
                {"min": self.photos_per_page.min, "max": self.photos_per_page.max}
                if self.photos_per_page else None
            ),
            "spacing": (
                {
                    "margin": self.spacing.margin,
                    "gutter": self.spacing.gutter,
                    "padding": self.spacing.padding,
                }
                if self.spacing else None
            ),
            "allow_cropping": self.allow_cropping,
            "allow_rotation": self.allow_rotation,
            "preserve_order": self.preserve_order,
            "group_by_date": self.group_by_date,
            "cover_photo_id": self.cover_photo_id,
            "cover_title": self.cover_title,
            "include_back_page": self.include_back_page,
            "background_color": self.background_color,
        }
