"""Read-only catalog routes: styles, page templates, page sizes, book templates."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query, status

from photobook.engine import (
    LayoutConfigurationError,
    calculate_print_areas,
    get_all_styles,
    get_all_templates,
    get_book_templates_for_photo_count,
    get_dimensions,
    get_dimensions_in_pixels,
    get_popular_book_templates,
    get_printable_area,
    get_template,
    get_templates_for_photo_count,
    get_templates_for_style,
)
from photobook.engine.units import get_aspect_ratio, get_page_orientation

router = APIRouter()


@router.get("/styles")
async def list_styles() -> list[dict[str, Any]]:
    """All layout styles and their rules."""
    return [rules.to_dict() for rules in get_all_styles()]


@router.get("/templates")
async def list_templates(
    photo_count: int | None = Query(None, ge=0),
    style: str | None = None,
) -> list[dict[str, Any]]:
    """List page templates, optionally filtered by photo count and style."""
    templates = get_templates_for_style(style) if style else get_all_templates()

    if photo_count is not None:
        matching = {t.id for t in get_templates_for_photo_count(photo_count)}
        templates = [t for t in templates if t.id in matching]

    return [t.to_dict() for t in templates]


@router.get("/templates/{template_id}")
async def get_template_detail(template_id: str) -> dict[str, Any]:
    """Get one page template with its slot geometry."""
    try:
        template = get_template(template_id)
    except LayoutConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    return template.to_dict()


@router.get("/page-sizes/{page_size}")
async def get_page_size(
    page_size: str,
    dpi: int = Query(300, ge=72, le=1200),
) -> dict[str, Any]:
    """Physical dimensions and print areas for a page size."""
    try:
        dims = get_dimensions(page_size)
    except LayoutConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e

    printable = get_printable_area(page_size)
    pixels = get_dimensions_in_pixels(page_size, dpi)
    areas = calculate_print_areas(page_size)

    return {
        "page_size": page_size,
        "width": dims.width,
        "height": dims.height,
        "bleed": dims.bleed,
        "safe_zone": dims.safe_zone,
        "aspect_ratio": get_aspect_ratio(page_size),
        "orientation": get_page_orientation(page_size).value,
        "printable_area": {"width": printable.width, "height": printable.height},
        "pixels": {
            "width": pixels.width,
            "height": pixels.height,
            "bleed": pixels.bleed,
            "safe_zone": pixels.safe_zone,
            "dpi": pixels.dpi,
        },
        "print_areas": {
            name: {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}
            for name, rect in (
                ("bleed", areas.bleed_area),
                ("trim", areas.trim_area),
                ("safe", areas.safe_area),
            )
        },
    }


@router.get("/book-templates")
async def list_book_templates(
    photo_count: int | None = Query(None, ge=0),
) -> list[dict[str, Any]]:
    """Book templates suiting a photo count, or all of them by popularity."""
    if photo_count is None:
        templates = get_popular_book_templates()
    else:
        templates = get_book_templates_for_photo_count(photo_count)
    return [t.to_dict() for t in templates]
