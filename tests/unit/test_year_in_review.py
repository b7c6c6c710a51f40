"""Unit tests for year in review and monthly recap curation."""

import logging
import pytest
from datetime import date, datetime, timedelta, timezone

from little_journey.models import ChildProfile, EntryType, Milestone, ReviewStatus
from little_journey.tools.year_in_review import (
    MUSIC_LIBRARY,
    TRANSITION_STYLES,
    VIDEO_QUALITIES,
    ReviewNotFoundError,
    YearInReviewService,
    curate_highlights,
    entries_for_month,
    entries_for_year,
    score_highlight,
)


FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service():
    return YearInReviewService(clock=lambda: FIXED_NOW)


@pytest.fixture
def year_entries(make_entry):
    """Ten photos on distinct days of every month of 2025."""
    entries = []
    for month in range(1, 13):
        for day in range(1, 11):
            entries.append(make_entry(
                date(2025, month, day),
                entry_id=f"e{month:02d}{day:02d}",
                caption="Captioned" if day % 3 == 0 else None,
            ))
    return entries


class TestScoring:
    """Test highlight scoring."""

    def test_score_components(self, make_entry):
        day = date(2025, 1, 1)
        assert score_highlight(make_entry(day)) == 1.0
        assert score_highlight(make_entry(day, ai_labels=["cake"])) == 2.0
        assert score_highlight(make_entry(day, caption="Hi", ai_labels=["cake"])) == 3.0
        assert score_highlight(make_entry(day, caption="Hi", milestone_id="m", ai_labels=["x"])) == 5.0

    def test_period_filters(self, make_entry):
        entries = [
            make_entry(date(2025, 2, 1), entry_id="in"),
            make_entry(date(2024, 2, 1), entry_id="last_year"),
            make_entry(date(2025, 3, 1), entry_id="march"),
            make_entry(date(2025, 2, 2), entry_id="voice", entry_type=EntryType.VOICE, media_uris=[]),
        ]

        assert [e.id for e in entries_for_year(entries, 2025)] == ["in", "march"]
        assert [e.id for e in entries_for_month(entries, 2025, 2)] == ["in"]


class TestCurateHighlights:
    """Test highlight selection."""

    def test_empty(self):
        assert curate_highlights([], 50, 5) == []

    def test_non_positive_caps(self, make_entry):
        entries = [make_entry(date(2025, 1, 1))]
        assert curate_highlights(entries, 0, 5) == []
        assert curate_highlights(entries, 5, 0) == []

    def test_caps_respected(self, year_entries):
        clips = curate_highlights(year_entries, 50, 5)

        per_month = {}
        for clip in clips:
            per_month[clip.month] = per_month.get(clip.month, 0) + 1
        assert len(clips) == 50
        assert max(per_month.values()) <= 5

    def test_chronological_with_clip_fields(self, make_entry):
        milestone = Milestone(id="m1", child_id="c1", milestone_date=date(2025, 4, 2))
        entries = [
            make_entry(date(2025, 4, 2), entry_id="b", milestone_id="m1"),
            make_entry(date(2025, 1, 9), entry_id="a", caption="Snow"),
        ]

        clips = curate_highlights(entries, 10, 5, [milestone])

        assert [c.id for c in clips] == ["clip_a", "clip_b"]
        assert clips[0].month == 1
        assert clips[0].photo_uri == "file:///photos/a.jpg"
        assert clips[0].score == 2.0
        assert not clips[0].is_milestone
        assert clips[1].is_milestone
        assert clips[1].milestone == milestone

    def test_month_bucket_includes_year(self, make_entry):
        entries = [make_entry(date(2024, 5, d)) for d in range(1, 4)]
        entries += [make_entry(date(2025, 5, d)) for d in range(1, 4)]

        clips = curate_highlights(entries, 10, 2)

        assert len(clips) == 4

    def test_milestones_and_captions_rank_higher(self, make_entry):
        plain = make_entry(date(2025, 1, 1), entry_id="plain")
        special = make_entry(date(2025, 1, 20), entry_id="special", milestone_id="m1")

        clips = curate_highlights([plain, special], 1, 1)

        assert [c.entry_id for c in clips] == ["special"]


class TestYearInReviewService:
    """Test review generation and customisation."""

    def test_generate_defaults(self, service, year_entries, make_entry):
        extra = make_entry(date(2024, 12, 31), entry_id="old")

        review = service.generate_year_in_review("c1", 2025, year_entries + [extra])

        assert review.status == ReviewStatus.READY
        assert review.selected_music_id == MUSIC_LIBRARY[0].id
        assert review.transition_style == "fade"
        assert review.export_quality == "1080p"
        assert review.created_at == FIXED_NOW
        assert len(review.clips) == 50
        assert all(c.date.year == 2025 for c in review.clips)

    def test_generate_logs_progress(self, service, year_entries, caplog):
        with caplog.at_level(logging.INFO, logger="little_journey.tools.year_in_review"):
            service.generate_year_in_review("c1", 2025, year_entries)

        progress = [getattr(r, "progress_type", None) for r in caplog.records]
        assert progress == ["start", "update", "complete"]
        assert "120 photos from 2025" in caplog.records[1].getMessage()

    def test_generate_is_idempotent(self, service, year_entries, make_entry):
        first = service.generate_year_in_review("c1", 2025, year_entries)
        second = service.generate_year_in_review("c1", 2025, [make_entry(date(2025, 1, 1))])

        assert second is first
        assert service.get_year_in_review_for_child("c1", 2025) is first
        assert service.get_year_in_review(first.id) is first
        assert service.get_year_in_review_for_child("c1", 2024) is None

    def test_remove_and_re_add(self, service, year_entries):
        review = service.generate_year_in_review("c1", 2025, year_entries)
        clip_id = review.clips[3].id

        removed = service.customize_year_in_review(review.id, remove_clip_ids=[clip_id])
        assert clip_id not in [c.id for c in removed.clips]
        assert removed.removed_clip_ids == [clip_id]
        assert [c.id for c in service.get_available_clips(review.id)] == [clip_id]

        restored = service.customize_year_in_review(review.id, add_clip_ids=[clip_id])
        assert [c.id for c in restored.clips] == [c.id for c in review.clips]
        assert restored.removed_clip_ids == []
        assert service.get_available_clips(review.id) == []

    def test_only_original_clips_can_be_added(self, service, year_entries):
        review = service.generate_year_in_review("c1", 2025, year_entries)

        updated = service.customize_year_in_review(review.id, add_clip_ids=["clip_unknown"])

        assert len(updated.clips) == len(review.clips)

    def test_presentation_preferences(self, service, year_entries):
        review = service.generate_year_in_review("c1", 2025, year_entries)

        updated = service.customize_year_in_review(
            review.id, music_id="happy_days", transition_style="zoom", export_quality="720p"
        )

        assert updated.selected_music_id == "happy_days"
        assert updated.transition_style == "zoom"
        assert updated.export_quality == "720p"

    def test_invalid_preferences(self, service, year_entries):
        review = service.generate_year_in_review("c1", 2025, year_entries)

        with pytest.raises(ValueError, match="Unknown music track"):
            service.customize_year_in_review(review.id, music_id="heavy_metal")
        with pytest.raises(ValueError):
            service.customize_year_in_review(review.id, transition_style="spin")

    def test_unknown_review(self, service):
        with pytest.raises(ReviewNotFoundError):
            service.customize_year_in_review("missing", music_id="happy_days")
        with pytest.raises(KeyError):
            service.reset_to_ai_suggestion("missing")
        with pytest.raises(ReviewNotFoundError):
            service.mark_as_exported("missing", "file:///out.mp4")
        assert service.get_available_clips("missing") == []

    def test_reset_to_ai_suggestion(self, service, year_entries):
        review = service.generate_year_in_review("c1", 2025, year_entries)
        ids = [c.id for c in review.clips[:5]]
        service.customize_year_in_review(review.id, remove_clip_ids=ids)

        reset = service.reset_to_ai_suggestion(review.id)

        assert len(reset.clips) == len(review.clips)
        assert [c.id for c in reset.clips] == [c.id for c in review.clips]
        assert reset.removed_clip_ids == []

    def test_mark_as_exported(self, service, year_entries):
        review = service.generate_year_in_review("c1", 2025, year_entries)

        exported = service.mark_as_exported(review.id, "file:///out.mp4")

        assert exported.is_exported
        assert exported.exported_uri == "file:///out.mp4"
        assert service.get_year_in_review(review.id).is_exported


class TestMonthlyRecap:
    """Test monthly recaps."""

    def test_recap(self, service, make_entry):
        entries = [make_entry(date(2025, 6, 1) + timedelta(days=i)) for i in range(20)]
        entries.append(make_entry(date(2025, 7, 1), entry_id="july"))

        recap = service.generate_monthly_recap("c1", 2025, 6, entries)

        assert recap.id == "mr_c1_2025_6"
        assert len(recap.clips) == 15
        assert all(c.date.month == 6 for c in recap.clips)
        assert service.get_monthly_recap("c1", 2025, 6) is recap

    def test_recap_is_idempotent(self, service, make_entry):
        first = service.generate_monthly_recap("c1", 2025, 6, [make_entry(date(2025, 6, 1))])
        second = service.generate_monthly_recap("c1", 2025, 6, [])

        assert second is first

    def test_empty_month(self, service):
        recap = service.generate_monthly_recap("c1", 2025, 2, [])
        assert recap.clips == []

    def test_invalid_month(self, service):
        with pytest.raises(ValueError):
            service.generate_monthly_recap("c1", 2025, 13, [])


class TestPrompt:
    """Test year in review prompt timing."""

    @pytest.fixture
    def child(self):
        return ChildProfile(id="c1", name="Mei", date_of_birth=date(2023, 4, 10))

    @pytest.mark.parametrize("today,expected", [
        (date(2025, 4, 10), True),   # birthday
        (date(2025, 12, 15), True),  # year end
        (date(2025, 12, 31), True),
        (date(2025, 12, 14), False),
        (date(2025, 6, 1), False),
    ])
    def test_prompt_window(self, service, child, today, expected):
        assert service.is_prompt_needed(child, today) is expected

    def test_no_prompt_when_review_exists(self, service, child, make_entry):
        service.generate_year_in_review("c1", 2025, [make_entry(date(2025, 1, 1))])

        assert not service.is_prompt_needed(child, date(2025, 12, 20))
        assert service.is_prompt_needed(child, date(2026, 12, 20))

    def test_no_birth_date(self, service):
        child = ChildProfile(id="c2", name="Ali")
        assert not service.is_prompt_needed(child, date(2025, 12, 20))

    def test_static_options(self):
        assert [t.id for t in MUSIC_LIBRARY][:2] == ["gentle_memories", "playful_moments"]
        assert len(MUSIC_LIBRARY) == 6
        assert [s.value for s in TRANSITION_STYLES] == ["fade", "slide", "zoom", "dissolve"]
        assert [q.value for q in VIDEO_QUALITIES] == ["720p", "1080p"]
