# Photo Book Layout Engine

from .data_models import (
    LayoutConfigurationError,
    PageSize,
    LayoutStyle,
    LayoutTemplate,
    Orientation,
    ObjectFit,
    PhotoMetadata,
    PhotosPerPageRange,
    Spacing,
    LayoutOptions,
)

from .units import (
    PRINT_DPI,
    MIN_DPI,
    PageDimensions,
    PixelDimensions,
    get_dimensions,
    get_printable_area,
    get_content_area,
    get_dimensions_in_pixels,
    inches_to_pixels,
    pixels_to_inches,
    inches_to_points,
    points_to_inches,
)

from .grid_layout import (
    compute_grid,
    GridLayout,
    GridCell,
    GridSpec,
)

from .style_rules import (
    LayoutStyleRules,
    LAYOUT_STYLE_RULES,
    get_style_rules,
    get_all_styles,
    style_supports_photo_count,
    get_effective_spacing,
)

from .template_catalog import (
    SlotDefinition,
    LayoutTemplateDefinition,
    LAYOUT_TEMPLATES,
    get_template,
    get_all_templates,
    get_templates_for_photo_count,
    get_templates_for_style,
)

from .positioned import (
    PageType,
    TextAlignment,
    PhotoPosition,
    TextElement,
    BackgroundGradient,
    PageLayout,
    LayoutMetadata,
    LayoutResult,
)

from .layout_engine import (
    LayoutEngine,
    generate_layout,
)

from .recommendations import (
    PageCountEstimate,
    BookTemplate,
    BOOK_TEMPLATES,
    estimate_page_count,
    calculate_optimal_photos_per_page,
    group_photos_by_orientation,
    get_recommended_style,
    get_book_template,
    get_book_templates_for_photo_count,
    get_popular_book_templates,
    get_recommended_book_template,
)

from .validation import (
    LayoutViolation,
    validate_layout,
)

from .photo_analysis import (
    DPICalculation,
    calculate_dpi,
    derive_orientation,
    build_photo_metadata,
)

from .print_layout import (
    Rect,
    PrintAreas,
    PrintElement,
    PrintPage,
    PrintLayoutConverter,
    BindingType,
    calculate_print_areas,
    calculate_spine_width,
)

__all__ = [
    # Data models
    'LayoutConfigurationError',
    'PageSize',
    'LayoutStyle',
    'LayoutTemplate',
    'Orientation',
    'ObjectFit',
    'PhotoMetadata',
    'PhotosPerPageRange',
    'Spacing',
    'LayoutOptions',
    # Units
    'PRINT_DPI',
    'MIN_DPI',
    'PageDimensions',
    'PixelDimensions',
    'get_dimensions',
    'get_printable_area',
    'get_content_area',
    'get_dimensions_in_pixels',
    'inches_to_pixels',
    'pixels_to_inches',
    'inches_to_points',
    'points_to_inches',
    # Grid
    'compute_grid',
    'GridLayout',
    'GridCell',
    'GridSpec',
    # Styles
    'LayoutStyleRules',
    'LAYOUT_STYLE_RULES',
    'get_style_rules',
    'get_all_styles',
    'style_supports_photo_count',
    'get_effective_spacing',
    # Templates
    'SlotDefinition',
    'LayoutTemplateDefinition',
    'LAYOUT_TEMPLATES',
    'get_template',
    'get_all_templates',
    'get_templates_for_photo_count',
    'get_templates_for_style',
    # Output
    'PageType',
    'TextAlignment',
    'PhotoPosition',
    'TextElement',
    'BackgroundGradient',
    'PageLayout',
    'LayoutMetadata',
    'LayoutResult',
    # Engine
    'LayoutEngine',
    'generate_layout',
    # Recommendations
    'PageCountEstimate',
    'BookTemplate',
    'BOOK_TEMPLATES',
    'estimate_page_count',
    'calculate_optimal_photos_per_page',
    'group_photos_by_orientation',
    'get_recommended_style',
    'get_book_template',
    'get_book_templates_for_photo_count',
    'get_popular_book_templates',
    'get_recommended_book_template',
    # Validation
    'LayoutViolation',
    'validate_layout',
    # Photo analysis
    'DPICalculation',
    'calculate_dpi',
    'derive_orientation',
    'build_photo_metadata',
    # Print
    'Rect',
    'PrintAreas',
    'PrintElement',
    'PrintPage',
    'PrintLayoutConverter',
    'BindingType',
    'calculate_print_areas',
    'calculate_spine_width',
]
