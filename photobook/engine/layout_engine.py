"""
layout_engine.py — Layout orchestrator.

The LayoutEngine turns an ordered collection of photo metadata plus a style
choice into paginated page layouts:
1. Resolves effective photos-per-page bounds and eligible templates
2. Orders (and optionally groups) the photos
3. Builds an optional cover page
4. Paginates each group, choosing a template per page
5. Assigns photos to template slots and returns a LayoutResult

This is the main entry point for layout generation. The engine is pure:
no I/O, no shared mutable state, and every run is independent.

Problems with the photo data never raise. They are reported through
LayoutResult.warnings and LayoutResult.photos_unused so callers can show a
partial layout. Only configuration misuse (unknown page size, style or
template, invalid bounds) raises LayoutConfigurationError.
"""

import itertools
import logging
import math
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from .data_models import (
    LayoutOptions,
    LayoutTemplate,
    ObjectFit,
    Orientation,
    PhotoMetadata,
    PhotosPerPageRange,
)
from .positioned import (
    LayoutMetadata,
    LayoutResult,
    PageLayout,
    PageType,
    PhotoPosition,
    TextAlignment,
    TextElement,
)
from .style_rules import LayoutStyleRules, get_style_rules
from .template_catalog import (
    COVER_SLOT,
    LayoutTemplateDefinition,
    SlotDefinition,
    get_all_templates,
    get_template,
    get_templates_for_style,
)

logger = logging.getLogger(__name__)


ALGORITHM_NAME = "auto-layout-v1"
EMPTY_ALGORITHM_NAME = "empty"

# Degrees, cycled by slot index when rotation is enabled
ROTATION_PATTERN = (-3.0, 2.0, -2.0, 3.0, -1.0, 1.0)

# Cluster order used when preserve_order is off
ORIENTATION_CLUSTER_ORDER = (
    Orientation.LANDSCAPE,
    Orientation.PORTRAIT,
    Orientation.SQUARE,
    Orientation.UNKNOWN,
)

COVER_TITLE_FONT_SIZE_PT = 36
COVER_TITLE_COLOR = "#FFFFFF"


# =============================================================================
# LAYOUT ENGINE
# =============================================================================

class LayoutEngine:
    """
    Main layout orchestrator.

    Stateless: a single instance can be shared across threads. Callers that
    want parallel throughput should fan out whole generate_layout() calls.
    """

    def __init__(self, algorithm_name: str = ALGORITHM_NAME):
        self.algorithm_name = algorithm_name

    def generate_layout(
        self,
        photos: Sequence[PhotoMetadata],
        options: Optional[LayoutOptions] = None,
    ) -> LayoutResult:
        """
        Generate page layouts for a set of photos.

        Args:
            photos: Photo metadata, in any order (sort_order decides)
            options: Layout options (defaults to an 8x8 classic book)

        Returns:
            LayoutResult with pages, usage counts, warnings and metadata
        """
        start_time = time.perf_counter()
        options = options or LayoutOptions()
        rules = get_style_rules(options.layout_style)
        bounds = options.photos_per_page or rules.photos_per_page_range
        warnings: List[str] = []
        pages: List[PageLayout] = []

        if not photos:
            warnings.append("No photos provided")
            if options.cover_photo_id:
                warnings.append(f"Cover photo {options.cover_photo_id} not found; no cover page generated")
            if options.include_back_page:
                pages.append(self._create_back_page(1, options))
            return self._build_result(pages, [], warnings, options, start_time, EMPTY_ALGORITHM_NAME)

        eligible = self._eligible_templates(rules, bounds, warnings)
        unique_photos, duplicate_ids = self._deduplicate(photos, warnings)
        ordered = sorted(unique_photos, key=lambda p: p.sort_order)

        undimensioned = sum(1 for p in ordered if not self._can_crop(p))
        if undimensioned:
            warnings.append(
                f"{undimensioned} photos have unknown dimensions and will be fitted without cropping"
            )

        rotate = options.allow_rotation and rules.allows_rotation
        if options.allow_rotation and not rules.allows_rotation:
            warnings.append(f"Style '{rules.style.value}' does not allow rotation; rotation ignored")

        if options.cover_photo_id:
            cover_photo = next((p for p in ordered if p.id == options.cover_photo_id), None)
            if cover_photo is None:
                warnings.append(f"Cover photo {options.cover_photo_id} not found; no cover page generated")
            else:
                pages.append(self._create_cover_page(cover_photo, options))
                ordered = [p for p in ordered if p.id != cover_photo.id]

        unused: List[str] = []
        for run in self._group_runs(ordered, options.group_by_date):
            if not options.preserve_order:
                run = self._cluster_by_orientation(run)
            unused.extend(
                self._paginate_run(run, eligible, bounds, rules, options, rotate, pages, warnings)
            )
        unused.extend(duplicate_ids)

        if options.include_back_page:
            pages.append(self._create_back_page(len(pages) + 1, options))

        if unused:
            warnings.append(f"{len(unused)} photos could not fit in the layout")
            logger.warning(
                f"Layout left {len(unused)} of {len(photos)} photos unplaced "
                f"(style={rules.style.value})"
            )

        with_quality_warnings = sum(1 for p in unique_photos if p.quality_warnings)
        if with_quality_warnings:
            warnings.append(f"{with_quality_warnings} photos have quality warnings")

        return self._build_result(pages, unused, warnings, options, start_time, self.algorithm_name)

    # -------------------------------------------------------------------------
    # Template eligibility
    # -------------------------------------------------------------------------

    def _eligible_templates(
        self,
        rules: LayoutStyleRules,
        bounds: PhotosPerPageRange,
        warnings: List[str],
    ) -> List[LayoutTemplateDefinition]:
        """Templates the paginator may choose from, in declaration order."""
        eligible = [
            t for t in get_templates_for_style(rules.style)
            if bounds.contains(t.photos_per_page)
        ]
        if eligible:
            return eligible

        # Only reachable with an explicit photos_per_page override
        eligible = [
            t for t in get_all_templates()
            if t.id != LayoutTemplate.CUSTOM and bounds.contains(t.photos_per_page)
        ]
        if eligible:
            warnings.append(
                f"No '{rules.style.value}' template holds {bounds.min}-{bounds.max} photos per page; "
                f"using templates from outside the style"
            )
            return eligible

        warnings.append(
            f"No template holds {bounds.min}-{bounds.max} photos per page; "
            f"falling back to '{LayoutTemplate.SINGLE.value}'"
        )
        return [get_template(LayoutTemplate.SINGLE)]

    @staticmethod
    def select_template(
        count: int,
        eligible: Sequence[LayoutTemplateDefinition],
    ) -> Optional[LayoutTemplateDefinition]:
        """
        Pick the template for a page meant to hold `count` photos.

        Exact match first; otherwise the largest template not exceeding
        `count`. Ties go to the earliest declared template. Returns None if
        every eligible template needs more than `count` photos.
        """
        for template in eligible:
            if template.photos_per_page == count:
                return template

        fitting = [t for t in eligible if 0 < t.photos_per_page <= count]
        if not fitting:
            return None
        largest = max(t.photos_per_page for t in fitting)
        return next(t for t in fitting if t.photos_per_page == largest)

    # -------------------------------------------------------------------------
    # Photo ordering
    # -------------------------------------------------------------------------

    @staticmethod
    def _deduplicate(
        photos: Iterable[PhotoMetadata],
        warnings: List[str],
    ) -> Tuple[List[PhotoMetadata], List[str]]:
        """Keep the first photo per id; later duplicates are reported unused."""
        seen = set()
        unique = []
        duplicates = []
        for photo in photos:
            if photo.id in seen:
                duplicates.append(photo.id)
                warnings.append(f"Photo {photo.id} appears more than once; duplicate skipped")
                continue
            seen.add(photo.id)
            unique.append(photo)
        return unique, duplicates

    @staticmethod
    def _cluster_by_orientation(photos: List[PhotoMetadata]) -> List[PhotoMetadata]:
        """Stable re-sort of one run into orientation clusters."""
        return sorted(photos, key=lambda p: ORIENTATION_CLUSTER_ORDER.index(p.orientation))

    @staticmethod
    def _group_runs(photos: List[PhotoMetadata], group_by_date: bool) -> List[List[PhotoMetadata]]:
        """
        Split sort_order-ordered photos into contiguous runs of equal capture date.

        Never reorders; undated photos share one key. Orientation clustering
        happens afterwards, inside each run.
        """
        if not group_by_date:
            return [photos] if photos else []
        return [
            list(run)
            for _, run in itertools.groupby(
                photos, key=lambda p: p.taken_at.date() if p.taken_at else None
            )
        ]

    # -------------------------------------------------------------------------
    # Pagination
    # -------------------------------------------------------------------------

    def _paginate_run(
        self,
        run: List[PhotoMetadata],
        eligible: List[LayoutTemplateDefinition],
        bounds: PhotosPerPageRange,
        rules: LayoutStyleRules,
        options: LayoutOptions,
        rotate: bool,
        pages: List[PageLayout],
        warnings: List[str],
    ) -> List[str]:
        """Append content pages for one run; return the ids left unplaced."""
        capacity = min(bounds.max, max(t.photos_per_page for t in eligible))
        index = 0

        while index < len(run):
            remaining = len(run) - index
            template = self.select_template(min(remaining, capacity), eligible)

            if template is None:
                leftover = run[index:]
                for photo in leftover:
                    warnings.append(
                        f"Photo {photo.id} could not be placed: no '{rules.style.value}' template "
                        f"holds {remaining} photo(s)"
                    )
                return [p.id for p in leftover]

            page_photos = run[index:index + template.photos_per_page]
            page = self._create_content_page(
                page_photos, template, len(pages) + 1, options, rotate, warnings
            )
            logger.debug(
                f"Page {page.page_number}: template '{template.id.value}' "
                f"with {len(page.photos)} photos"
            )
            pages.append(page)
            index += template.photos_per_page

        return []

    # -------------------------------------------------------------------------
    # Page construction
    # -------------------------------------------------------------------------

    def _create_content_page(
        self,
        photos: List[PhotoMetadata],
        template: LayoutTemplateDefinition,
        page_number: int,
        options: LayoutOptions,
        rotate: bool,
        warnings: List[str],
    ) -> PageLayout:
        """Assign photos to the template's slots in declaration order."""
        positions = []
        for slot_index, (photo, slot) in enumerate(zip(photos, template.positions)):
            rotation = ROTATION_PATTERN[slot_index % len(ROTATION_PATTERN)] if rotate else None
            position = self._place(photo, slot, options, rotation)
            if rotation and not rotated_bounds_within_page(position):
                warnings.append(
                    f"Page {page_number}: rotated photo {photo.id} extends beyond the page edge"
                )
            positions.append(position)

        return PageLayout(
            page_number=page_number,
            page_type=PageType.CONTENT,
            layout_template=template.id,
            photos=positions,
            background_color=options.background_color,
        )

    def _create_cover_page(self, photo: PhotoMetadata, options: LayoutOptions) -> PageLayout:
        """Full-bleed cover with an optional title."""
        text_elements = []
        if options.cover_title:
            text_elements.append(TextElement(
                id="cover-title",
                content=options.cover_title,
                x=0.1,
                y=0.8,
                width=0.8,
                height=0.1,
                font_size=COVER_TITLE_FONT_SIZE_PT,
                font_weight="bold",
                text_align=TextAlignment.CENTER,
                color=COVER_TITLE_COLOR,
            ))

        return PageLayout(
            page_number=1,
            page_type=PageType.COVER,
            layout_template=LayoutTemplate.SINGLE,
            photos=[self._place(photo, COVER_SLOT, options)],
            text_elements=text_elements,
        )

    @staticmethod
    def _create_back_page(page_number: int, options: LayoutOptions) -> PageLayout:
        return PageLayout(
            page_number=page_number,
            page_type=PageType.BACK,
            layout_template=LayoutTemplate.CUSTOM,
            background_color=options.background_color,
        )

    def _place(
        self,
        photo: PhotoMetadata,
        slot: SlotDefinition,
        options: LayoutOptions,
        rotation: Optional[float] = None,
    ) -> PhotoPosition:
        fit = slot.object_fit
        if fit == ObjectFit.COVER and (not options.allow_cropping or not self._can_crop(photo)):
            fit = ObjectFit.CONTAIN

        return PhotoPosition(
            photo_id=photo.id,
            x=slot.x,
            y=slot.y,
            width=slot.width,
            height=slot.height,
            rotation=rotation,
            z_index=slot.z_index,
            object_fit=fit,
        )

    @staticmethod
    def _can_crop(photo: PhotoMetadata) -> bool:
        """Cropping needs known pixel dimensions."""
        return photo.has_dimensions and photo.orientation != Orientation.UNKNOWN

    # -------------------------------------------------------------------------
    # Result
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_result(
        pages: List[PageLayout],
        unused: List[str],
        warnings: List[str],
        options: LayoutOptions,
        start_time: float,
        algorithm: str,
    ) -> LayoutResult:
        return LayoutResult(
            pages=pages,
            total_pages=len(pages),
            photos_used=sum(len(page.photos) for page in pages),
            photos_unused=unused,
            warnings=warnings,
            metadata=LayoutMetadata(
                generated_at=datetime.now(timezone.utc),
                generation_time_ms=(time.perf_counter() - start_time) * 1000,
                algorithm=algorithm,
                options=options,
            ),
        )


# =============================================================================
# GEOMETRY HELPERS
# =============================================================================

def rotated_bounds_within_page(position: PhotoPosition, epsilon: float = 1e-6) -> bool:
    """
    Check the bounding box of a rotated slot stays on the page.

    Rotation is about the slot centre in normalized page space.
    """
    angle = math.radians(position.rotation or 0.0)
    cos_a = abs(math.cos(angle))
    sin_a = abs(math.sin(angle))
    half_w = (position.width * cos_a + position.height * sin_a) / 2
    half_h = (position.width * sin_a + position.height * cos_a) / 2
    center_x = position.x + position.width / 2
    center_y = position.y + position.height / 2

    return (
        center_x - half_w >= -epsilon
        and center_y - half_h >= -epsilon
        and center_x + half_w <= 1 + epsilon
        and center_y + half_h <= 1 + epsilon
    )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_engine = LayoutEngine()


def generate_layout(
    photos: Sequence[PhotoMetadata],
    options: Optional[LayoutOptions] = None,
) -> LayoutResult:
    """Generate a layout with the shared default engine."""
    return _default_engine.generate_layout(photos, options)
