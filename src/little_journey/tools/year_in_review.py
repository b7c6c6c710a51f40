"""Year in review and monthly recap highlight curation."""

import datetime
import logging
import uuid
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import settings
from ..models.journal_entry import EntryType, JournalEntry
from ..models.milestone import ChildProfile, Milestone
from ..models.review import (
    MonthlyRecap,
    MusicTrack,
    ReviewClip,
    ReviewStatus,
    TransitionStyle,
    VideoQuality,
    YearInReview,
)
from ..utils.simple_logger import log_start, log_update, log_complete


logger = logging.getLogger(__name__)

# Scoring weights for highlight curation
SCORE_BASE = 1.0
SCORE_MILESTONE = 2.0
SCORE_CAPTION = 1.0
SCORE_AI_LABELS = 1.0

# Year-end prompt window opens on this day of December
YEAR_END_PROMPT_DAY = 15

MUSIC_LIBRARY: Tuple[MusicTrack, ...] = (
    MusicTrack(id="gentle_memories", name="Gentle Memories", duration=180, category="gentle"),
    MusicTrack(id="playful_moments", name="Playful Moments", duration=150, category="playful"),
    MusicTrack(id="nostalgic_journey", name="Nostalgic Journey", duration=200, category="nostalgic"),
    MusicTrack(id="celebration_time", name="Celebration Time", duration=120, category="celebratory"),
    MusicTrack(id="growing_up", name="Growing Up", duration=180, category="nostalgic"),
    MusicTrack(id="happy_days", name="Happy Days", duration=160, category="playful"),
)

TRANSITION_STYLES: Tuple[TransitionStyle, ...] = tuple(TransitionStyle)
VIDEO_QUALITIES: Tuple[VideoQuality, ...] = tuple(VideoQuality)


class ReviewNotFoundError(KeyError):
    """Raised when a year in review id is not known to the service."""

    def __init__(self, review_id: str):
        super().__init__(review_id)
        self.review_id = review_id

    def __str__(self):
        return f"Year in review not found: {self.review_id}"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def get_music_track(music_id: str) -> Optional[MusicTrack]:
    return next((t for t in MUSIC_LIBRARY if t.id == music_id), None)


def score_highlight(entry: JournalEntry) -> float:
    """Score an entry for highlight curation."""
    score = SCORE_BASE
    if entry.milestone_id:
        score += SCORE_MILESTONE
    if entry.has_caption:
        score += SCORE_CAPTION
    if entry.has_ai_labels:
        score += SCORE_AI_LABELS
    return score


def entries_for_year(entries: Iterable[JournalEntry], year: int) -> List[JournalEntry]:
    """Photo entries with media dated in the given year."""
    return [
        e for e in entries
        if e.type == EntryType.PHOTO and e.has_media and e.date.year == year
    ]


def entries_for_month(entries: Iterable[JournalEntry], year: int, month: int) -> List[JournalEntry]:
    """Photo entries with media dated in the given month."""
    return [e for e in entries_for_year(entries, year) if e.date.month == month]


def curate_highlights(
    entries: Iterable[JournalEntry],
    max_total: int,
    max_per_month: int,
    milestones: Sequence[Milestone] = (),
) -> List[ReviewClip]:
    """Pick the best entries as highlight clips.

    Entries are ranked by score (ties oldest first) and taken greedily,
    skipping any whose month already holds max_per_month clips, until
    max_total clips are selected. Entries without media are ignored.

    Args:
        entries: Candidate entries, already restricted to the period
        max_total: Overall clip cap
        max_per_month: Cap per (year, month) bucket
        milestones: Milestone records to attach to linked clips

    Returns:
        Clips in chronological order
    """
    if max_total <= 0 or max_per_month <= 0:
        return []

    candidates = [e for e in entries if e.has_media]
    ranked = sorted(candidates, key=lambda e: (-score_highlight(e), e.date))
    milestones_by_id = {m.id: m for m in milestones}

    selected: List[Tuple[JournalEntry, float]] = []
    clips_per_month: Dict[Tuple[int, int], int] = defaultdict(int)
    for entry in ranked:
        bucket = (entry.date.year, entry.date.month)
        if clips_per_month[bucket] >= max_per_month:
            continue
        selected.append((entry, score_highlight(entry)))
        clips_per_month[bucket] += 1
        if len(selected) >= max_total:
            break

    selected.sort(key=lambda pair: pair[0].date)
    return [
        ReviewClip(
            id=f"clip_{entry.id}",
            entry_id=entry.id,
            photo_uri=entry.primary_media_uri,
            caption=entry.caption,
            date=entry.date,
            score=score,
            month=entry.date.month,
            is_milestone=bool(entry.milestone_id),
            milestone=milestones_by_id.get(entry.milestone_id) if entry.milestone_id else None,
        )
        for entry, score in selected
    ]


class YearInReviewService:
    """
    Holds generated reviews and recaps for the caller.

    Generation is create-if-absent: asking twice for the same child and
    period returns the stored result. The algorithmic selection of each
    review is kept so customisations can be undone.
    """

    def __init__(self, clock: Optional[Callable[[], datetime.datetime]] = None):
        self._clock = clock or _utcnow
        self._reviews: Dict[str, YearInReview] = {}
        self._review_keys: Dict[Tuple[str, int], str] = {}
        self._original_clips: Dict[str, List[ReviewClip]] = {}
        self._recaps: Dict[Tuple[str, int, int], MonthlyRecap] = {}

    def generate_year_in_review(
        self,
        child_id: str,
        year: int,
        entries: Iterable[JournalEntry],
        milestones: Sequence[Milestone] = (),
    ) -> YearInReview:
        """Curate a year in review, or return the existing one for this child and year."""
        key = (child_id, year)
        existing_id = self._review_keys.get(key)
        if existing_id is not None:
            logger.debug(f"Year in review already exists for {child_id}/{year}")
            return self._reviews[existing_id]

        log_start(logger, f"Generating {year} year in review for {child_id}")
        candidates = entries_for_year(entries, year)
        log_update(logger, f"{len(candidates)} photos from {year} to choose from")
        clips = curate_highlights(
            candidates,
            settings.max_highlights_per_year,
            settings.max_highlights_per_month,
            milestones,
        )

        now = self._clock()
        review = YearInReview(
            id=uuid.uuid4().hex,
            child_id=child_id,
            year=year,
            created_at=now,
            updated_at=now,
            status=ReviewStatus.READY,
            clips=clips,
            selected_music_id=MUSIC_LIBRARY[0].id,
            transition_style=TransitionStyle.FADE,
            export_quality=VideoQuality.FULL_HD,
        )
        self._reviews[review.id] = review
        self._review_keys[key] = review.id
        self._original_clips[review.id] = list(clips)

        log_complete(logger, f"Selected {len(clips)} highlights")
        return review

    def generate_monthly_recap(
        self,
        child_id: str,
        year: int,
        month: int,
        entries: Iterable[JournalEntry],
        milestones: Sequence[Milestone] = (),
    ) -> MonthlyRecap:
        """Curate a monthly recap, or return the existing one for this child and month."""
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")

        key = (child_id, year, month)
        existing = self._recaps.get(key)
        if existing is not None:
            return existing

        limit = settings.monthly_recap_max_highlights
        clips = curate_highlights(entries_for_month(entries, year, month), limit, limit, milestones)
        recap = MonthlyRecap(
            id=f"mr_{child_id}_{year}_{month}",
            child_id=child_id,
            year=year,
            month=month,
            created_at=self._clock(),
            status=ReviewStatus.READY,
            clips=clips,
        )
        self._recaps[key] = recap
        logger.info(f"Monthly recap {recap.id} has {len(clips)} clips")
        return recap

    def _require(self, review_id: str) -> YearInReview:
        review = self._reviews.get(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    def customize_year_in_review(
        self,
        review_id: str,
        add_clip_ids: Sequence[str] = (),
        remove_clip_ids: Sequence[str] = (),
        music_id: Optional[str] = None,
        transition_style: Optional[TransitionStyle] = None,
        export_quality: Optional[VideoQuality] = None,
    ) -> YearInReview:
        """
        Apply parent edits to a review.

        Removals are applied first, then clips from the original selection
        are added back. Only clips the algorithm originally chose can be added.

        Raises:
            ReviewNotFoundError: Unknown review id
            ValueError: Unknown music id, transition style or export quality
        """
        review = self._require(review_id)

        if music_id is not None and get_music_track(music_id) is None:
            raise ValueError(f"Unknown music track: {music_id}")
        if transition_style is not None:
            transition_style = TransitionStyle(transition_style)
        if export_quality is not None:
            export_quality = VideoQuality(export_quality)

        clips = list(review.clips)
        removed = list(review.removed_clip_ids)

        if remove_clip_ids:
            to_remove = set(remove_clip_ids)
            clips = [c for c in clips if c.id not in to_remove]
            removed.extend(cid for cid in remove_clip_ids if cid not in removed)

        if add_clip_ids:
            to_add = set(add_clip_ids)
            present = {c.id for c in clips}
            clips.extend(
                c for c in self._original_clips.get(review_id, [])
                if c.id in to_add and c.id not in present
            )
            removed = [cid for cid in removed if cid not in to_add]
            clips.sort(key=lambda c: c.date)

        updates = {
            "clips": clips,
            "removed_clip_ids": removed,
            "updated_at": self._clock(),
        }
        if music_id is not None:
            updates["selected_music_id"] = music_id
        if transition_style is not None:
            updates["transition_style"] = transition_style.value
        if export_quality is not None:
            updates["export_quality"] = export_quality.value

        updated = review.model_copy(update=updates)
        self._reviews[review_id] = updated
        return updated

    def reset_to_ai_suggestion(self, review_id: str) -> YearInReview:
        """Restore the original algorithmic selection."""
        review = self._require(review_id)
        updated = review.model_copy(update={
            "clips": list(self._original_clips[review_id]),
            "removed_clip_ids": [],
            "updated_at": self._clock(),
        })
        self._reviews[review_id] = updated
        return updated

    def get_year_in_review(self, review_id: str) -> Optional[YearInReview]:
        return self._reviews.get(review_id)

    def get_year_in_review_for_child(self, child_id: str, year: int) -> Optional[YearInReview]:
        review_id = self._review_keys.get((child_id, year))
        return self._reviews.get(review_id) if review_id else None

    def get_monthly_recap(self, child_id: str, year: int, month: int) -> Optional[MonthlyRecap]:
        return self._recaps.get((child_id, year, month))

    def get_available_clips(self, review_id: str) -> List[ReviewClip]:
        """Original clips that are not currently in the review."""
        review = self._reviews.get(review_id)
        if review is None:
            return []
        current = {c.id for c in review.clips}
        return [c for c in self._original_clips.get(review_id, []) if c.id not in current]

    def mark_as_exported(self, review_id: str, exported_uri: str) -> YearInReview:
        review = self._require(review_id)
        updated = review.model_copy(update={
            "status": ReviewStatus.EXPORTED.value,
            "exported_uri": exported_uri,
            "updated_at": self._clock(),
        })
        self._reviews[review_id] = updated
        logger.info(f"Year in review {review_id} exported to {exported_uri}")
        return updated

    def is_prompt_needed(self, child: ChildProfile, today: Optional[datetime.date] = None) -> bool:
        """Whether to prompt the parent to create this year's review.

        True on the child's birthday or from mid December, unless a review
        for the current year already exists. Children without a known date
        of birth are never prompted.
        """
        if child.date_of_birth is None:
            return False
        if today is None:
            today = self._clock().date()

        dob = child.date_of_birth
        is_birthday = (today.month, today.day) == (dob.month, dob.day)
        is_year_end = today.month == 12 and today.day >= YEAR_END_PROMPT_DAY

        has_review = (child.id, today.year) in self._review_keys
        return (is_birthday or is_year_end) and not has_review
