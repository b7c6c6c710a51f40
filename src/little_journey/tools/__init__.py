"""Curation tools: photo books, year in review and milestone detection."""

from .photo_book import (
    BOOK_LAYOUTS,
    BOOK_PRICING_TIERS,
    COVER_COLOR_THEMES,
    PhotoBookEditor,
    build_full_book,
    build_monthly_book,
    calculate_discounted_price,
    curate_monthly_book,
    score_book_entry,
)
from .book_export import render_photo_book_html
from .year_in_review import (
    MUSIC_LIBRARY,
    TRANSITION_STYLES,
    VIDEO_QUALITIES,
    ReviewNotFoundError,
    YearInReviewService,
    curate_highlights,
    score_highlight,
)
from .image_analysis import (
    GeminiImageAnalyzer,
    ImageAnalyzer,
    MockImageAnalyzer,
    create_image_analyzer,
)
from .milestone_detection import (
    LABEL_TO_MILESTONE_MAP,
    detect_milestones_from_image,
    detect_milestones_from_images,
    is_high_confidence,
    match_labels,
)

__all__ = [
    # Photo book
    "BOOK_LAYOUTS",
    "BOOK_PRICING_TIERS",
    "COVER_COLOR_THEMES",
    "PhotoBookEditor",
    "build_full_book",
    "build_monthly_book",
    "calculate_discounted_price",
    "curate_monthly_book",
    "score_book_entry",
    "render_photo_book_html",
    # Year in review
    "MUSIC_LIBRARY",
    "TRANSITION_STYLES",
    "VIDEO_QUALITIES",
    "ReviewNotFoundError",
    "YearInReviewService",
    "curate_highlights",
    "score_highlight",
    # Image analysis
    "GeminiImageAnalyzer",
    "ImageAnalyzer",
    "MockImageAnalyzer",
    "create_image_analyzer",
    # Milestone detection
    "LABEL_TO_MILESTONE_MAP",
    "detect_milestones_from_image",
    "detect_milestones_from_images",
    "is_high_confidence",
    "match_labels",
]
