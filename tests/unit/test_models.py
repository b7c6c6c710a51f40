"""
Unit tests for data models.

Tests Pydantic model validation and computed properties.
"""

import pytest
from datetime import date
from pydantic import ValidationError

from little_journey.models import (
    # Journal
    JournalEntry,
    EntryType,
    # Milestones
    MilestoneTemplate,
    Milestone,
    CulturalTradition,
    # Photo book
    PhotoBookPage,
    PhotoBookPageType,
    BookCover,
    # Year in review
    ReviewClip,
    MonthlyRecap,
    # Suggestions
    LabelWithConfidence,
    ImageAnalysisResult,
)
from little_journey.catalog import MILESTONE_TEMPLATES, get_template


class TestJournalEntry:
    """Test JournalEntry model."""

    def test_create_photo_entry(self):
        entry = JournalEntry(
            id="e1",
            type=EntryType.PHOTO,
            media_uris=["file:///a.jpg", "file:///b.jpg"],
            caption="Beach day",
            date=date(2025, 3, 4),
        )

        assert entry.type == "photo"
        assert entry.has_media
        assert entry.has_caption
        assert entry.primary_media_uri == "file:///a.jpg"
        assert entry.month == 3
        assert entry.in_month(2025, 3)
        assert not entry.in_month(2024, 3)

    def test_blank_caption_is_not_a_caption(self):
        entry = JournalEntry(id="e1", type=EntryType.TEXT, caption="   ", date=date(2025, 1, 1))

        assert not entry.has_caption
        assert not entry.has_media
        assert entry.primary_media_uri is None

    def test_entries_are_immutable(self):
        entry = JournalEntry(id="e1", type=EntryType.PHOTO, date=date(2025, 1, 1))

        with pytest.raises(ValidationError):
            entry.caption = "changed"

    def test_invalid_type_rejected(self):
        with pytest.raises(ValidationError):
            JournalEntry(id="e1", type="hologram", date=date(2025, 1, 1))


class TestMilestones:
    """Test milestone templates and records."""

    def test_template_age_range_validated(self):
        with pytest.raises(ValidationError):
            MilestoneTemplate(
                id="bad",
                title="Bad",
                description="Inverted range",
                cultural_tradition=CulturalTradition.UNIVERSAL,
                typical_age_months_min=6,
                typical_age_months_max=2,
            )

    def test_effective_date_prefers_celebration(self):
        milestone = Milestone(
            id="m1",
            child_id="c1",
            template_id="full_month",
            milestone_date=date(2025, 2, 1),
            celebration_date=date(2025, 2, 3),
        )
        assert milestone.effective_date == date(2025, 2, 3)

        milestone = Milestone(id="m2", child_id="c1", milestone_date=date(2025, 2, 1))
        assert milestone.effective_date == date(2025, 2, 1)

    def test_catalog_ids_unique(self):
        ids = [t.id for t in MILESTONE_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_catalog_lookup(self):
        assert get_template("full_month").title_local == "满月"
        assert get_template("nope") is None


class TestBookAndReviewModels:
    """Test photo book and review models."""

    def test_page_type_stored_as_value(self):
        page = PhotoBookPage(id="p1", type=PhotoBookPageType.PHOTO, date=date(2025, 3, 9))
        assert page.type == "photo"
        assert page.title is None

    def test_cover_defaults_to_coral(self):
        assert BookCover(title="My First Year").color_theme == "coral"

    def test_clip_month_bounds(self):
        with pytest.raises(ValidationError):
            ReviewClip(
                id="clip_e1", entry_id="e1", photo_uri="file:///a.jpg",
                date=date(2025, 1, 1), score=1.0, month=13,
            )

    def test_recap_month_bounds(self):
        with pytest.raises(ValidationError):
            MonthlyRecap(id="mr", child_id="c1", year=2025, month=0, created_at="2025-01-01T00:00:00Z")


class TestSuggestionModels:
    """Test image analysis models."""

    def test_label_confidence_bounds(self):
        with pytest.raises(ValidationError):
            LabelWithConfidence(label="cake", confidence=1.5)

    def test_analysis_result_ok(self):
        assert ImageAnalysisResult(labels=["cake"]).ok
        assert not ImageAnalysisResult(error="boom").ok
