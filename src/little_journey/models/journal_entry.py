"""
Journal entry data models.

Defines the read-only records a parent creates in the journal
(photos, videos, text notes, voice notes) that curation works over.
"""

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class EntryType(str, Enum):
    """Kinds of journal entries."""
    PHOTO = "photo"
    VIDEO = "video"
    TEXT = "text"
    VOICE = "voice"


class JournalEntry(BaseModel):
    """A single journal entry for a child."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(..., description="Unique identifier")
    type: EntryType = Field(..., description="Entry type")
    media_uris: List[str] = Field(default_factory=list, description="Photo or video URIs (carousel for photos)")
    caption: Optional[str] = Field(None, description="Parent-written caption")
    date: datetime.date = Field(..., description="Calendar day the moment happened")

    # Enrichment
    ai_labels: List[str] = Field(default_factory=list, description="Labels from image analysis")
    tags: List[str] = Field(default_factory=list, description="User tags")
    milestone_id: Optional[str] = Field(None, description="Linked milestone record")
    audio_uri: Optional[str] = Field(None, description="Voice recording for voice entries")

    created_at: datetime.datetime = Field(default_factory=_utcnow, description="When the entry was created")
    updated_at: datetime.datetime = Field(default_factory=_utcnow, description="Last edit time")

    @property
    def has_caption(self) -> bool:
        """Whether the entry carries a non-blank caption."""
        return bool(self.caption and self.caption.strip())

    @property
    def has_media(self) -> bool:
        return len(self.media_uris) > 0

    @property
    def has_ai_labels(self) -> bool:
        return len(self.ai_labels) > 0

    @property
    def primary_media_uri(self) -> Optional[str]:
        """First media URI, used as the cover image for pages and clips."""
        return self.media_uris[0] if self.media_uris else None

    @property
    def month(self) -> int:
        """Calendar month (1-12) of the entry."""
        return self.date.month

    def in_month(self, year: int, month: int) -> bool:
        return self.date.year == year and self.date.month == month
