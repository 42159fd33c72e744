"""
positioned.py — The contract between the layout engine and renderers.

The layout engine outputs LayoutResult objects.
Renderers (PDF, preview) consume these — they NEVER choose templates or
assign photos themselves.

All coordinates are NORMALIZED page fractions (0-1). The renderer converts
to inches/pixels with units.py or print_layout.py.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .data_models import LayoutOptions, LayoutTemplate, ObjectFit


class PageType(Enum):
    """Role of a page in the book."""
    COVER = "cover"
    CONTENT = "content"
    BACK = "back"


class TextAlignment(Enum):
    """Text alignment options."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class PhotoPosition:
    """A placed photo. Never produced without a backing photo."""
    photo_id: str
    x: float                               # Left edge, 0-1
    y: float                               # Top edge, 0-1
    width: float                           # 0-1
    height: float                          # 0-1
    rotation: Optional[float] = None       # Degrees
    z_index: Optional[int] = None          # Higher = in front
    object_fit: Optional[ObjectFit] = None

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "photo_id": self.photo_id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
            "z_index": self.z_index,
            "object_fit": self.object_fit.value if self.object_fit else None,
        }


@dataclass
class TextElement:
    """Text placed on a page. Font size is in points."""
    id: str
    content: str
    x: float
    y: float
    width: float
    height: float
    font_size: float
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    text_align: TextAlignment = TextAlignment.CENTER
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "font_size": self.font_size,
            "font_family": self.font_family,
            "font_weight": self.font_weight,
            "text_align": self.text_align.value,
            "color": self.color,
        }


@dataclass
class BackgroundGradient:
    """Page background gradient."""
    type: str                               # "linear" or "radial"
    colors: List[str] = field(default_factory=list)
    angle: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "colors": list(self.colors), "angle": self.angle}


@dataclass
class PageLayout:
    """One output page."""
    page_number: int
    page_type: PageType
    layout_template: LayoutTemplate
    photos: List[PhotoPosition] = field(default_factory=list)
    text_elements: List[TextElement] = field(default_factory=list)
    background_color: Optional[str] = None
    background_gradient: Optional[BackgroundGradient] = None

    @property
    def photo_ids(self) -> List[str]:
        return [p.photo_id for p in self.photos]

    def photos_sorted_by_z_index(self) -> List[PhotoPosition]:
        """Photos ordered back-to-front (missing z_index counts as 0)."""
        return sorted(self.photos, key=lambda p: p.z_index or 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_number": self.page_number,
            "page_type": self.page_type.value,
            "layout_template": self.layout_template.value,
            "photos": [p.to_dict() for p in self.photos],
            "text_elements": [t.to_dict() for t in self.text_elements],
            "background_color": self.background_color,
            "background_gradient": (
                self.background_gradient.to_dict() if self.background_gradient else None
            ),
        }


@dataclass
class LayoutMetadata:
    """How and when a result was produced."""
    generated_at: datetime
    generation_time_ms: float
    algorithm: str
    options: LayoutOptions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at.isoformat(),
            "generation_time_ms": self.generation_time_ms,
            "algorithm": self.algorithm,
            "options": self.options.to_dict(),
        }


@dataclass
class LayoutResult:
    """
    Complete output of one layout run.

    This is the sole return value of generate_layout(); nothing is mutated
    in place and every run is repeatable given identical inputs.
    """
    pages: List[PageLayout]
    total_pages: int
    photos_used: int
    photos_unused: List[str]
    warnings: List[str]
    metadata: LayoutMetadata

    def get_page(self, page_number: int) -> Optional[PageLayout]:
        """Find a page by its number."""
        for page in self.pages:
            if page.page_number == page_number:
                return page
        return None

    @property
    def placed_photo_ids(self) -> List[str]:
        """Every placed photo id, in page order."""
        return [photo_id for page in self.pages for photo_id in page.photo_ids]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pages": [p.to_dict() for p in self.pages],
            "total_pages": self.total_pages,
            "photos_used": self.photos_used,
            "photos_unused": list(self.photos_unused),
            "warnings": list(self.warnings),
            "metadata": self.metadata.to_dict(),
        }
