"""
template_catalog.py — Fixed page templates and their slot geometry.

Every template is a named, immutable list of slots in normalized page
coordinates. The catalog is declared once at import time; dictionary order
is the catalog declaration order and is used for deterministic tie-breaks.

Grid templates are generated by grid_layout.compute_grid(); the rest are
hand-authored.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .data_models import (
    LayoutStyle,
    LayoutTemplate,
    ObjectFit,
    Orientation,
    coerce_enum,
)
from .grid_layout import GridSpec, compute_grid, uniform_grid_spec
from .style_rules import get_style_rules


# =============================================================================
# TEMPLATE DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class SlotDefinition:
    """A photo slot in normalized page coordinates."""
    x: float
    y: float
    width: float
    height: float
    object_fit: Optional[ObjectFit] = None
    z_index: Optional[int] = None

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "object_fit": self.object_fit.value if self.object_fit else None,
            "z_index": self.z_index,
        }


@dataclass(frozen=True)
class LayoutTemplateDefinition:
    """A named page template."""
    id: LayoutTemplate
    name: str
    description: str
    photos_per_page: int
    positions: Tuple[SlotDefinition, ...]
    supported_orientations: Optional[Tuple[Orientation, ...]] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id.value,
            "name": self.name,
            "description": self.description,
            "photos_per_page": self.photos_per_page,
            "positions": [p.to_dict() for p in self.positions],
            "supported_orientations": (
                [o.value for o in self.supported_orientations]
                if self.supported_orientations else None
            ),
        }


def _grid_slots(spec: GridSpec, object_fit: ObjectFit = ObjectFit.COVER) -> Tuple[SlotDefinition, ...]:
    """Turn computed grid cells into template slots."""
    return tuple(
        SlotDefinition(
            x=cell.x,
            y=cell.y,
            width=cell.width,
            height=cell.height,
            object_fit=object_fit,
        )
        for cell in compute_grid(spec).cells
    )


# Shared by both three-column grids
_THIRDS_CELL = 0.287
_THIRDS_STRIDE = 0.32
_THIRDS_MARGIN = 0.033


# =============================================================================
# CATALOG
# =============================================================================

LAYOUT_TEMPLATES: Dict[LayoutTemplate, LayoutTemplateDefinition] = {
    LayoutTemplate.SINGLE: LayoutTemplateDefinition(
        id=LayoutTemplate.SINGLE,
        name="Single Photo",
        description="One full-page photo with margins",
        photos_per_page=1,
        positions=(
            SlotDefinition(x=0.1, y=0.1, width=0.8, height=0.8, object_fit=ObjectFit.CONTAIN),
        ),
    ),
    LayoutTemplate.DOUBLE: LayoutTemplateDefinition(
        id=LayoutTemplate.DOUBLE,
        name="Two Photos",
        description="Two photos side by side",
        photos_per_page=2,
        positions=(
            SlotDefinition(x=0.05, y=0.1, width=0.425, height=0.8, object_fit=ObjectFit.COVER),
            SlotDefinition(x=0.525, y=0.1, width=0.425, height=0.8, object_fit=ObjectFit.COVER),
        ),
    ),
    LayoutTemplate.GRID_2X2: LayoutTemplateDefinition(
        id=LayoutTemplate.GRID_2X2,
        name="2x2 Grid",
        description="Four photos in a 2x2 grid",
        photos_per_page=4,
        positions=_grid_slots(uniform_grid_spec(rows=2, cols=2, margin=0.05, gutter=0.05)),
    ),
    LayoutTemplate.GRID_3X3: LayoutTemplateDefinition(
        id=LayoutTemplate.GRID_3X3,
        name="3x3 Grid",
        description="Nine photos in a 3x3 grid",
        photos_per_page=9,
        positions=_grid_slots(GridSpec(
            rows=3, cols=3,
            margin_x=_THIRDS_MARGIN, margin_y=_THIRDS_MARGIN,
            cell_width=_THIRDS_CELL, cell_height=_THIRDS_CELL,
            col_stride=_THIRDS_STRIDE, row_stride=_THIRDS_STRIDE,
        )),
    ),
    LayoutTemplate.GRID_2X3: LayoutTemplateDefinition(
        id=LayoutTemplate.GRID_2X3,
        name="2x3 Grid",
        description="Six photos in a 2x3 grid",
        photos_per_page=6,
        positions=_grid_slots(GridSpec(
            rows=2, cols=3,
            margin_x=_THIRDS_MARGIN, margin_y=0.15,
            cell_width=_THIRDS_CELL, cell_height=_THIRDS_CELL,
            col_stride=_THIRDS_STRIDE, row_stride=0.35,
        )),
    ),
    LayoutTemplate.ASYMMETRIC: LayoutTemplateDefinition(
        id=LayoutTemplate.ASYMMETRIC,
        name="Asymmetric Layout",
        description="One large photo with smaller accent photos",
        photos_per_page=3,
        positions=(
            SlotDefinition(x=0.05, y=0.05, width=0.6, height=0.9, object_fit=ObjectFit.COVER, z_index=1),
            SlotDefinition(x=0.7, y=0.05, width=0.25, height=0.4, object_fit=ObjectFit.COVER, z_index=2),
            SlotDefinition(x=0.7, y=0.5, width=0.25, height=0.4, object_fit=ObjectFit.COVER, z_index=2),
        ),
    ),
    LayoutTemplate.CUSTOM: LayoutTemplateDefinition(
        id=LayoutTemplate.CUSTOM,
        name="Custom Layout",
        description="User-defined custom layout",
        photos_per_page=0,
        positions=(),
    ),
}


# Full-bleed slot used for cover pages
COVER_SLOT = SlotDefinition(x=0.0, y=0.0, width=1.0, height=1.0, object_fit=ObjectFit.COVER)


# =============================================================================
# LOOKUPS
# =============================================================================

def get_template(template_id: Union[LayoutTemplate, str]) -> LayoutTemplateDefinition:
    """Get a template by id."""
    return LAYOUT_TEMPLATES[coerce_enum(LayoutTemplate, template_id, "template")]


def get_all_templates() -> List[LayoutTemplateDefinition]:
    """All templates in declaration order."""
    return list(LAYOUT_TEMPLATES.values())


def get_templates_for_photo_count(count: int) -> List[LayoutTemplateDefinition]:
    """
    Templates holding exactly `count` photos, plus the always-eligible
    custom sentinel. Declaration order.
    """
    return [
        t for t in LAYOUT_TEMPLATES.values()
        if t.photos_per_page == count or t.id == LayoutTemplate.CUSTOM
    ]


def get_templates_for_style(style: Union[LayoutStyle, str]) -> List[LayoutTemplateDefinition]:
    """Templates a style may use, in the style's preference order."""
    return [LAYOUT_TEMPLATES[template_id] for template_id in get_style_rules(style).templates]
