"""
Year in review data models.

Highlight clips, yearly reviews with their presentation preferences,
and shorter monthly recaps.
"""

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .milestone import Milestone


class ReviewStatus(str, Enum):
    """Lifecycle of a review."""
    PENDING = "pending"
    GENERATING = "generating"
    READY = "ready"
    EXPORTED = "exported"


class TransitionStyle(str, Enum):
    """Slideshow transition between clips."""
    FADE = "fade"
    SLIDE = "slide"
    ZOOM = "zoom"
    DISSOLVE = "dissolve"


class VideoQuality(str, Enum):
    """Export resolution."""
    HD = "720p"
    FULL_HD = "1080p"


class MusicTrack(BaseModel):
    """Background music option."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    duration: int = Field(..., gt=0, description="Length in seconds")
    uri: Optional[str] = Field(None, description="None means a bundled asset")
    category: str = Field(..., description="gentle / playful / nostalgic / celebratory")


class ReviewClip(BaseModel):
    """A highlight derived from one journal entry."""
    id: str = Field(..., description="Clip identifier ('clip_<entry id>')")
    entry_id: str = Field(..., description="Source journal entry")
    photo_uri: str = Field(..., description="Primary photo for the clip")
    caption: Optional[str] = Field(None)
    date: datetime.date = Field(..., description="Date of the source entry")
    score: float = Field(..., ge=0, description="Curation score at selection time")
    month: int = Field(..., ge=1, le=12, description="Month bucket (1-12)")
    is_milestone: bool = Field(False)
    milestone: Optional[Milestone] = Field(None, description="Linked milestone when known")


class YearInReview(BaseModel):
    """Highlight compilation of a child's year."""
    model_config = ConfigDict(use_enum_values=True)

    id: str
    child_id: str
    year: int
    created_at: datetime.datetime
    updated_at: datetime.datetime
    status: ReviewStatus = Field(ReviewStatus.READY)

    # Curated clips, customisable by the parent
    clips: List[ReviewClip] = Field(default_factory=list)
    removed_clip_ids: List[str] = Field(default_factory=list)

    # Presentation preferences
    selected_music_id: str
    transition_style: TransitionStyle = Field(TransitionStyle.FADE)
    export_quality: VideoQuality = Field(VideoQuality.FULL_HD)
    exported_uri: Optional[str] = Field(None)

    @property
    def is_exported(self) -> bool:
        return self.status == ReviewStatus.EXPORTED


class MonthlyRecap(BaseModel):
    """Shorter highlight compilation for a single month."""
    model_config = ConfigDict(use_enum_values=True)

    id: str
    child_id: str
    year: int
    month: int = Field(..., ge=1, le=12)
    created_at: datetime.datetime
    status: ReviewStatus = Field(ReviewStatus.READY)
    clips: List[ReviewClip] = Field(default_factory=list)
