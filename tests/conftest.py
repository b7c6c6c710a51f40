"""Shared fixtures for Little Journey tests."""

from datetime import date

import pytest

from little_journey.models import EntryType, JournalEntry


@pytest.fixture
def make_entry():
    """Factory for journal entries with sensible defaults."""
    counter = {"n": 0}

    def _make(
        day: date,
        caption=None,
        milestone_id=None,
        ai_labels=None,
        entry_type=EntryType.PHOTO,
        media_uris=None,
        entry_id=None,
    ) -> JournalEntry:
        counter["n"] += 1
        entry_id = entry_id or f"e{counter['n']}"
        if media_uris is None:
            media_uris = [f"file:///photos/{entry_id}.jpg"]
        return JournalEntry(
            id=entry_id,
            type=entry_type,
            media_uris=media_uris,
            caption=caption,
            date=day,
            ai_labels=ai_labels or [],
            milestone_id=milestone_id,
        )

    return _make
