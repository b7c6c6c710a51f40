"""
Data models for Little Journey.

This module provides Pydantic models for type safety and validation
throughout the application.
"""

from .journal_entry import (
    JournalEntry,
    EntryType,
)
from .milestone import (
    MilestoneTemplate,
    Milestone,
    ChildProfile,
    CulturalTradition,
)
from .photo_book import (
    PhotoBookPage,
    PhotoBookPageType,
    BookCover,
    BookLayout,
    BookLayoutTemplate,
    BookPricingTier,
    CoverColorTheme,
    CoverTheme,
)
from .review import (
    ReviewClip,
    YearInReview,
    MonthlyRecap,
    ReviewStatus,
    TransitionStyle,
    VideoQuality,
    MusicTrack,
)
from .suggestion import (
    LabelWithConfidence,
    ImageAnalysisResult,
    MilestoneSuggestion,
    MilestoneDetectionResult,
)

__all__ = [
    # Journal
    "JournalEntry",
    "EntryType",
    # Milestones
    "MilestoneTemplate",
    "Milestone",
    "ChildProfile",
    "CulturalTradition",
    # Photo book
    "PhotoBookPage",
    "PhotoBookPageType",
    "BookCover",
    "BookLayout",
    "BookLayoutTemplate",
    "BookPricingTier",
    "CoverColorTheme",
    "CoverTheme",
    # Year in review
    "ReviewClip",
    "YearInReview",
    "MonthlyRecap",
    "ReviewStatus",
    "TransitionStyle",
    "VideoQuality",
    "MusicTrack",
    # Suggestions
    "LabelWithConfidence",
    "ImageAnalysisResult",
    "MilestoneSuggestion",
    "MilestoneDetectionResult",
]
