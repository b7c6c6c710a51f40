"""
Sample journal data for Little Journey.

Builds a plausible first year of journal entries and milestones for a
child so the curation tools can be tried without real data.
"""

import random
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Tuple

from .catalog import get_template
from .models.journal_entry import EntryType, JournalEntry
from .models.milestone import ChildProfile, Milestone


SAMPLE_CAPTIONS = [
    "Tummy time champion",
    "Morning cuddles with Grandma",
    "First trip to the park",
    "So many giggles today",
    "Bath time splash",
    "Trying on the new hat",
    "Nap on Daddy's chest",
    "Playing with blocks",
]

# (template id, filename hint, days after birth)
SAMPLE_MILESTONES = [
    ("full_month", "celebration", 30),
    ("first_smile", "smile", 50),
    ("hundred_days", "family", 100),
    ("first_laugh", "smile", 120),
    ("first_solid_food", "eating", 185),
    ("first_swim", "swimming", 240),
    ("first_steps", "walking", 330),
    ("first_birthday", "birthday", 365),
]

PHOTO_HINTS = ["baby", "park", "family", "playing", "sleeping", "book", "toy", "outdoor", "IMG"]


def _evening_of(day: date) -> datetime:
    return datetime.combine(day, time(20, 0), tzinfo=timezone.utc)


def generate_sample_journal(
    child_id: str = "sample-child",
    name: str = "Mei",
    date_of_birth: date = date(2024, 3, 1),
    seed: Optional[int] = None,
) -> Tuple[ChildProfile, List[JournalEntry], List[Milestone]]:
    """Generate a child profile with a year of entries and milestones.

    Args:
        child_id: Identifier for the sample child
        name: Child's name
        date_of_birth: Birth date; entries cover the following year
        seed: RNG seed for reproducible output

    Returns:
        (child, entries, milestones)
    """
    rng = random.Random(seed)
    child = ChildProfile(id=child_id, name=name, date_of_birth=date_of_birth)

    entries: List[JournalEntry] = []
    milestones: List[Milestone] = []

    for template_id, hint, offset in SAMPLE_MILESTONES:
        day = date_of_birth + timedelta(days=offset)
        milestone = Milestone(
            id=f"ms-{template_id}",
            child_id=child_id,
            template_id=template_id,
            milestone_date=day,
            is_completed=True,
        )
        milestones.append(milestone)
        template = get_template(template_id)
        entries.append(JournalEntry(
            id=f"entry-{template_id}",
            type=EntryType.PHOTO,
            media_uris=[f"file:///sample/{hint}_{template_id}.jpg"],
            caption=template.title if template else None,
            date=day,
            milestone_id=milestone.id,
            created_at=_evening_of(day),
            updated_at=_evening_of(day),
        ))

    for i in range(200):
        day = date_of_birth + timedelta(days=rng.randint(0, 364))
        roll = rng.random()
        if roll < 0.8:
            hint = rng.choice(PHOTO_HINTS)
            entries.append(JournalEntry(
                id=f"entry-{i:03d}",
                type=EntryType.PHOTO,
                media_uris=[f"file:///sample/{hint}_{i:03d}.jpg"],
                caption=rng.choice(SAMPLE_CAPTIONS) if rng.random() < 0.4 else None,
                date=day,
                ai_labels=[hint.lower()] if rng.random() < 0.3 else [],
                created_at=_evening_of(day),
                updated_at=_evening_of(day),
            ))
        elif roll < 0.9:
            entries.append(JournalEntry(
                id=f"entry-{i:03d}",
                type=EntryType.TEXT,
                caption=rng.choice(SAMPLE_CAPTIONS),
                date=day,
                created_at=_evening_of(day),
                updated_at=_evening_of(day),
            ))
        else:
            entries.append(JournalEntry(
                id=f"entry-{i:03d}",
                type=EntryType.VIDEO,
                media_uris=[f"file:///sample/clip_{i:03d}.mp4"],
                date=day,
                created_at=_evening_of(day),
                updated_at=_evening_of(day),
            ))

    entries.sort(key=lambda e: e.date)
    return child, entries, milestones
