"""Layout generation, validation and print conversion routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from photobook.api.config import Settings, get_settings
from photobook.api.schemas import (
    EstimateResponse,
    GenerateLayoutRequest,
    LayoutResultSchema,
    PrintLayoutRequest,
    PrintLayoutResponse,
    PrintPageSchema,
    ValidateLayoutRequest,
    ValidateLayoutResponse,
    ViolationSchema,
)
from photobook.engine import (
    PrintLayoutConverter,
    calculate_optimal_photos_per_page,
    estimate_page_count,
    generate_layout,
    get_book_templates_for_photo_count,
    get_recommended_style,
    get_style_rules,
    validate_layout,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=LayoutResultSchema)
async def create_layout(
    request: GenerateLayoutRequest,
    settings: Settings = Depends(get_settings),
):
    """Lay out a photo book.

    Photo data problems come back as warnings and unused photo ids.
    Unknown page sizes, styles or invalid bounds are rejected with 422.
    """
    if len(request.photos) > settings.max_photos_per_request:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"{len(request.photos)} photos exceeds the limit of "
                f"{settings.max_photos_per_request} per request"
            ),
        )

    options = request.options.to_options()
    photos = [p.to_metadata() for p in request.photos]
    result = generate_layout(photos, options)

    logger.info(
        f"Generated {result.total_pages} pages for {len(photos)} photos "
        f"(style={options.layout_style.value}, unused={len(result.photos_unused)}, "
        f"{result.metadata.generation_time_ms:.1f}ms)"
    )
    return LayoutResultSchema.from_result(result)


@router.post("/validate", response_model=ValidateLayoutResponse)
async def check_layout(request: ValidateLayoutRequest):
    """Check a layout result against the layout invariants."""
    result = request.result.to_result()
    photos = [p.to_metadata() for p in request.photos] if request.photos is not None else None
    violations = validate_layout(result, photos)

    error_count = sum(1 for v in violations if v.severity == "error")
    return ValidateLayoutResponse(
        valid=error_count == 0,
        error_count=error_count,
        warning_count=len(violations) - error_count,
        violations=[ViolationSchema.from_violation(v) for v in violations],
    )


@router.post("/print", response_model=PrintLayoutResponse)
async def convert_for_print(
    request: PrintLayoutRequest,
    settings: Settings = Depends(get_settings),
):
    """Convert a layout to absolute inches and pixels for rendering."""
    dpi = request.dpi or settings.default_dpi
    result = request.result.to_result()
    photos = [p.to_metadata() for p in request.photos] if request.photos is not None else None

    converter = PrintLayoutConverter(dpi=dpi, include_bleed=request.include_bleed)
    pages = converter.convert(result, photos)

    return PrintLayoutResponse(
        dpi=dpi,
        page_count=len(pages),
        pages=[PrintPageSchema.from_page(p) for p in pages],
        warnings=[w for p in pages for w in p.warnings],
    )


@router.get("/estimate", response_model=EstimateResponse)
async def estimate_layout(
    photo_count: int = Query(..., ge=0),
    style: str | None = None,
):
    """Preview page counts for a photo count.

    Without a style, the recommended style for the photo count is used.
    """
    recommended_style = get_recommended_style(photo_count)
    rules = get_style_rules(style or recommended_style)
    estimate = estimate_page_count(photo_count, rules.style)

    return EstimateResponse(
        photo_count=photo_count,
        style=rules.style.value,
        min_pages=estimate.min,
        max_pages=estimate.max,
        recommended_pages=estimate.recommended,
        optimal_photos_per_page=calculate_optimal_photos_per_page(photo_count, rules.style),
        recommended_style=recommended_style.value,
        book_templates=[t.to_dict() for t in get_book_templates_for_photo_count(photo_count)],
    )
