"""
schemas.py — Pydantic request/response models for the API.

The engine works on plain dataclasses; these models are the wire format.
Each request model converts itself into engine objects with a to_*()
method. Enum-valued fields stay plain strings here so the engine decides
what is valid and reports it as a LayoutConfigurationError.
"""

import dataclasses
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from photobook.engine import (
    BackgroundGradient,
    LayoutMetadata,
    LayoutOptions,
    LayoutResult,
    LayoutTemplate,
    LayoutViolation,
    ObjectFit,
    PageLayout,
    PageType,
    PhotoMetadata,
    PhotoPosition,
    PhotosPerPageRange,
    PrintPage,
    Spacing,
    TextAlignment,
    TextElement,
)
from photobook.engine.data_models import coerce_enum


# =============================================================================
# INPUT MODELS
# =============================================================================

class PhotoSchema(BaseModel):
    """Layout-relevant metadata for one photo."""
    id: str = Field(..., min_length=1)
    width: Optional[int] = None
    height: Optional[int] = None
    aspect_ratio: Optional[float] = None
    orientation: str = "unknown"
    sort_order: int = 0
    is_print_safe: bool = False
    quality_warnings: List[str] = Field(default_factory=list)
    taken_at: Optional[datetime] = None

    def to_metadata(self) -> PhotoMetadata:
        return PhotoMetadata(
            id=self.id,
            width=self.width,
            height=self.height,
            aspect_ratio=self.aspect_ratio,
            orientation=self.orientation,
            sort_order=self.sort_order,
            is_print_safe=self.is_print_safe,
            quality_warnings=list(self.quality_warnings),
            taken_at=self.taken_at,
        )


class PhotosPerPageSchema(BaseModel):
    """Inclusive photos-per-page bounds."""
    min: int
    max: int


class SpacingSchema(BaseModel):
    """Page spacing in inches."""
    margin: float
    gutter: float
    padding: float = 0.0


class LayoutOptionsSchema(BaseModel):
    """Options for one layout run."""
    page_size: str = "8x8"
    layout_style: str = "classic"
    photos_per_page: Optional[PhotosPerPageSchema] = None
    spacing: Optional[SpacingSchema] = None
    allow_cropping: bool = True
    allow_rotation: bool = False
    preserve_order: bool = True
    group_by_date: bool = False
    cover_photo_id: Optional[str] = None
    cover_title: Optional[str] = None
    include_back_page: bool = False
    background_color: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "page_size": "10x10",
                "layout_style": "magazine",
                "cover_photo_id": "photo-1",
                "cover_title": "Summer 2024",
            }
        }

    def to_options(self) -> LayoutOptions:
        """Build engine options. Raises LayoutConfigurationError on bad values."""
        return LayoutOptions(
            page_size=self.page_size,
            layout_style=self.layout_style,
            photos_per_page=(
                PhotosPerPageRange(min=self.photos_per_page.min, max=self.photos_per_page.max)
                if self.photos_per_page else None
            ),
            spacing=(
                Spacing(
                    margin=self.spacing.margin,
                    gutter=self.spacing.gutter,
                    padding=self.spacing.padding,
                )
                if self.spacing else None
            ),
            allow_cropping=self.allow_cropping,
            allow_rotation=self.allow_rotation,
            preserve_order=self.preserve_order,
            group_by_date=self.group_by_date,
            cover_photo_id=self.cover_photo_id,
            cover_title=self.cover_title,
            include_back_page=self.include_back_page,
            background_color=self.background_color,
        )


class GenerateLayoutRequest(BaseModel):
    """Request to lay out a photo book."""
    photos: List[PhotoSchema] = Field(default_factory=list)
    options: LayoutOptionsSchema = Field(default_factory=LayoutOptionsSchema)


# =============================================================================
# LAYOUT RESULT MODELS
# =============================================================================

class PhotoPositionSchema(BaseModel):
    photo_id: str
    x: float
    y: float
    width: float
    height: float
    rotation: Optional[float] = None
    z_index: Optional[int] = None
    object_fit: Optional[str] = None

    def to_position(self) -> PhotoPosition:
        return PhotoPosition(
            photo_id=self.photo_id,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            rotation=self.rotation,
            z_index=self.z_index,
            object_fit=coerce_enum(ObjectFit, self.object_fit, "object fit") if self.object_fit else None,
        )


class TextElementSchema(BaseModel):
    id: str
    content: str
    x: float
    y: float
    width: float
    height: float
    font_size: float
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    text_align: str = "center"
    color: Optional[str] = None

    def to_element(self) -> TextElement:
        return TextElement(
            id=self.id,
            content=self.content,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            font_size=self.font_size,
            font_family=self.font_family,
            font_weight=self.font_weight,
            text_align=coerce_enum(TextAlignment, self.text_align, "text alignment"),
            color=self.color,
        )


class BackgroundGradientSchema(BaseModel):
    type: str
    colors: List[str] = Field(default_factory=list)
    angle: Optional[float] = None


class PageLayoutSchema(BaseModel):
    """One laid-out page."""
    page_number: int
    page_type: str
    layout_template: str
    photos: List[PhotoPositionSchema] = Field(default_factory=list)
    text_elements: List[TextElementSchema] = Field(default_factory=list)
    background_color: Optional[str] = None
    background_gradient: Optional[BackgroundGradientSchema] = None

    def to_page(self) -> PageLayout:
        gradient = self.background_gradient
        return PageLayout(
            page_number=self.page_number,
            page_type=coerce_enum(PageType, self.page_type, "page type"),
            layout_template=coerce_enum(LayoutTemplate, self.layout_template, "template"),
            photos=[p.to_position() for p in self.photos],
            text_elements=[t.to_element() for t in self.text_elements],
            background_color=self.background_color,
            background_gradient=(
                BackgroundGradient(type=gradient.type, colors=list(gradient.colors), angle=gradient.angle)
                if gradient else None
            ),
        )


class LayoutMetadataSchema(BaseModel):
    generated_at: datetime
    generation_time_ms: float
    algorithm: str
    options: LayoutOptionsSchema


class LayoutResultSchema(BaseModel):
    """Complete output of one layout run."""
    pages: List[PageLayoutSchema]
    total_pages: int
    photos_used: int
    photos_unused: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    metadata: LayoutMetadataSchema

    @classmethod
    def from_result(cls, result: LayoutResult) -> "LayoutResultSchema":
        return cls.model_validate(result.to_dict())

    def to_result(self) -> LayoutResult:
        return LayoutResult(
            pages=[p.to_page() for p in self.pages],
            total_pages=self.total_pages,
            photos_used=self.photos_used,
            photos_unused=list(self.photos_unused),
            warnings=list(self.warnings),
            metadata=LayoutMetadata(
                generated_at=self.metadata.generated_at,
                generation_time_ms=self.metadata.generation_time_ms,
                algorithm=self.metadata.algorithm,
                options=self.metadata.options.to_options(),
            ),
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidateLayoutRequest(BaseModel):
    """Request to check a layout against the layout invariants."""
    result: LayoutResultSchema
    photos: Optional[List[PhotoSchema]] = None


class ViolationSchema(BaseModel):
    rule: str
    message: str
    severity: str
    page_number: Optional[int] = None
    photo_ids: List[str] = Field(default_factory=list)

    @classmethod
    def from_violation(cls, violation: LayoutViolation) -> "ViolationSchema":
        return cls(
            rule=violation.rule,
            message=violation.message,
            severity=violation.severity,
            page_number=violation.page_number,
            photo_ids=list(violation.photo_ids),
        )


class ValidateLayoutResponse(BaseModel):
    """Validation outcome. A layout is valid when it has no error violations."""
    valid: bool
    error_count: int
    warning_count: int
    violations: List[ViolationSchema]


# =============================================================================
# PRINT MODELS
# =============================================================================

class PrintLayoutRequest(BaseModel):
    """Request to convert a layout into absolute print units."""
    result: LayoutResultSchema
    photos: Optional[List[PhotoSchema]] = None
    dpi: Optional[int] = Field(None, ge=72, le=1200)
    include_bleed: bool = True


class PrintElementSchema(BaseModel):
    kind: str
    ref_id: str
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
    content: Optional[str] = None
    font_size: Optional[float] = None
    effective_dpi: Optional[int] = None


class PrintPageSchema(BaseModel):
    page_number: int
    page_type: str
    width_inches: float
    height_inches: float
    dpi: int
    elements: List[PrintElementSchema]
    background_color: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_page(cls, page: PrintPage) -> "PrintPageSchema":
        return cls.model_validate(dataclasses.asdict(page))


class PrintLayoutResponse(BaseModel):
    dpi: int
    page_count: int
    pages: List[PrintPageSchema]
    warnings: List[str]


# =============================================================================
# ESTIMATE MODELS
# =============================================================================

class EstimateResponse(BaseModel):
    """Page-count preview for a photo count."""
    photo_count: int
    style: str
    min_pages: int
    max_pages: int
    recommended_pages: int
    optimal_photos_per_page: int
    recommended_style: str
    book_templates: List[Dict[str, Any]] = Field(default_factory=list)
