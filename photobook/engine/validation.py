"""
validation.py — Post-hoc invariant checks over a finished LayoutResult.

validate_layout() re-checks what generate_layout() promises: every slot
stays on the page, every photo is placed at most once, counts add up,
pages are numbered 1..N and templates respect the photos-per-page bounds.
It reports violations and never repairs them.

Intended for tests and for callers that want a sanity check before
persisting or rendering a layout.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .data_models import PhotoMetadata
from .positioned import LayoutResult, PageType
from .style_rules import get_style_rules
from .template_catalog import get_template

# Tolerance for floating point rounding in slot geometry
EPSILON = 1e-6


@dataclass
class LayoutViolation:
    """A single broken invariant."""

    rule: str
    message: str
    severity: str = "error"  # "error" or "warning"
    page_number: Optional[int] = None
    photo_ids: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"[{self.rule}] {self.message}"


def validate_layout(
    result: LayoutResult,
    photos: Optional[Sequence[PhotoMetadata]] = None,
) -> List[LayoutViolation]:
    """
    Check a layout result against the layout invariants.

    Args:
        result: Output of generate_layout() (or a hand-built result)
        photos: The input photos, enabling phantom-id and conservation checks

    Returns:
        List of violations (empty if valid)
    """
    violations: List[LayoutViolation] = []

    violations.extend(_check_containment(result))
    violations.extend(_check_placements(result, photos))
    violations.extend(_check_conservation(result, photos))
    violations.extend(_check_page_numbering(result))
    violations.extend(_check_pages(result))

    return violations


def _check_containment(result: LayoutResult) -> List[LayoutViolation]:
    """Slots must lie inside [0, 1] x [0, 1]."""
    violations = []
    allow_cropping = result.metadata.options.allow_cropping

    for page in result.pages:
        for photo in page.photos:
            overflows = (
                photo.x < 0
                or photo.y < 0
                or photo.x + photo.width > 1 + EPSILON
                or photo.y + photo.height > 1 + EPSILON
            )
            if not overflows:
                continue

            # Cropped overflow is tolerated only when a warning names this photo
            flagged = _is_flagged(photo.photo_id, result.warnings)
            if allow_cropping and flagged:
                continue

            violations.append(LayoutViolation(
                rule="containment",
                message=(
                    f"Page {page.page_number}: photo {photo.photo_id} at "
                    f"({photo.x:.3f}, {photo.y:.3f}) size {photo.width:.3f}x{photo.height:.3f} "
                    f"extends beyond the page"
                ),
                page_number=page.page_number,
                photo_ids=[photo.photo_id],
            ))

    return violations


def _is_flagged(photo_id: str, warnings: Sequence[str]) -> bool:
    """True if a warning refers to "photo <photo_id>" with the id as a whole token."""
    pattern = re.compile(rf"\bphoto {re.escape(photo_id)}(?!\S)", re.IGNORECASE)
    return any(pattern.search(w) for w in warnings)


def _check_placements(
    result: LayoutResult,
    photos: Optional[Sequence[PhotoMetadata]],
) -> List[LayoutViolation]:
    """Each photo placed at most once, and only photos that were supplied."""
    violations = []
    placed = Counter(result.placed_photo_ids)

    for photo_id, count in placed.items():
        if count > 1:
            violations.append(LayoutViolation(
                rule="duplicate_placement",
                message=f"Photo {photo_id} is placed {count} times",
                photo_ids=[photo_id],
            ))

    if photos is not None:
        known = {p.id for p in photos}
        phantoms = [photo_id for photo_id in placed if photo_id not in known]
        for photo_id in phantoms:
            violations.append(LayoutViolation(
                rule="phantom_photo",
                message=f"Photo {photo_id} is placed but was not supplied",
                photo_ids=[photo_id],
            ))

    return violations


def _check_conservation(
    result: LayoutResult,
    photos: Optional[Sequence[PhotoMetadata]],
) -> List[LayoutViolation]:
    """Placed + unused must account for every supplied photo."""
    violations = []
    placements = len(result.placed_photo_ids)

    if result.photos_used != placements:
        violations.append(LayoutViolation(
            rule="conservation",
            message=f"photos_used is {result.photos_used} but {placements} photos are placed",
        ))

    if photos is not None:
        accounted = result.photos_used + len(result.photos_unused)
        if accounted != len(photos):
            violations.append(LayoutViolation(
                rule="conservation",
                message=(
                    f"Photo count mismatch: {result.photos_used} used + "
                    f"{len(result.photos_unused)} unused != {len(photos)} supplied"
                ),
            ))

    return violations


def _check_page_numbering(result: LayoutResult) -> List[LayoutViolation]:
    """Page numbers must be exactly 1..N."""
    violations = []
    numbers = sorted(page.page_number for page in result.pages)

    if numbers != list(range(1, len(numbers) + 1)):
        violations.append(LayoutViolation(
            rule="page_numbering",
            message=f"Page numbering is not sequential: {numbers}",
        ))
    if result.total_pages != len(result.pages):
        violations.append(LayoutViolation(
            rule="page_numbering",
            message=f"total_pages is {result.total_pages} but there are {len(result.pages)} pages",
        ))

    return violations


def _check_pages(result: LayoutResult) -> List[LayoutViolation]:
    """Per-page checks: non-empty content, slot capacity and style bounds."""
    violations = []
    options = result.metadata.options
    bounds = options.photos_per_page or get_style_rules(options.layout_style).photos_per_page_range

    for page in result.pages:
        if page.page_type != PageType.CONTENT:
            continue

        if not page.photos:
            violations.append(LayoutViolation(
                rule="empty_page",
                message=f"Page {page.page_number} has no photos",
                page_number=page.page_number,
            ))

        template = get_template(page.layout_template)
        if len(page.photos) > len(template.positions):
            violations.append(LayoutViolation(
                rule="template_slots",
                message=(
                    f"Page {page.page_number} places {len(page.photos)} photos on "
                    f"'{template.id.value}' which has {len(template.positions)} slots"
                ),
                page_number=page.page_number,
                photo_ids=page.photo_ids,
            ))

        if not bounds.contains(template.photos_per_page):
            violations.append(LayoutViolation(
                rule="bounds",
                message=(
                    f"Page {page.page_number} uses '{template.id.value}' "
                    f"({template.photos_per_page} photos) outside {bounds.min}-{bounds.max} per page"
                ),
                severity="warning",
                page_number=page.page_number,
            ))

    return violations
