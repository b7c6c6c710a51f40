"""
Milestone data models.

Static milestone templates (the catalog of developmental and cultural
events), milestone records for a child, and the child profile.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CulturalTradition(str, Enum):
    """Tradition a milestone template belongs to."""
    CHINESE = "chinese"
    MALAY = "malay"
    INDIAN = "indian"
    UNIVERSAL = "universal"


class MilestoneTemplate(BaseModel):
    """Catalog entry describing a named milestone."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(..., description="Template identifier (e.g. 'first_steps')")
    title: str = Field(..., description="Display title")
    title_local: Optional[str] = Field(None, description="Title in the local language (e.g. '满月')")
    description: str = Field(..., description="Short description")
    cultural_tradition: CulturalTradition = Field(..., description="Tradition the milestone belongs to")
    days_from_birth: Optional[int] = Field(None, ge=0, description="Traditional date offset from birth")
    typical_age_months_min: Optional[float] = Field(None, ge=0, description="Earliest typical age in months")
    typical_age_months_max: Optional[float] = Field(None, ge=0, description="Latest typical age in months")

    @model_validator(mode="after")
    def validate_age_range(self):
        low, high = self.typical_age_months_min, self.typical_age_months_max
        if low is not None and high is not None and high < low:
            raise ValueError("typical_age_months_max must not be before typical_age_months_min")
        return self


class Milestone(BaseModel):
    """A milestone recorded for a child, optionally based on a template."""
    id: str = Field(..., description="Unique identifier")
    child_id: str = Field(..., description="Owning child")
    template_id: Optional[str] = Field(None, description="Template reference, None for custom milestones")
    milestone_date: datetime.date = Field(..., description="Calculated or traditional date")
    celebration_date: Optional[datetime.date] = Field(None, description="When it was actually celebrated")
    custom_title: Optional[str] = Field(None, description="Title for custom milestones")
    custom_description: Optional[str] = Field(None)
    is_completed: bool = Field(False, description="Whether the milestone has happened")
    photo_uri: Optional[str] = Field(None)
    notes: Optional[str] = Field(None)

    @property
    def effective_date(self) -> datetime.date:
        """Celebration date when known, otherwise the milestone date."""
        return self.celebration_date or self.milestone_date


class ChildProfile(BaseModel):
    """Child identity, used for display and report formatting only."""
    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Child's name")
    date_of_birth: Optional[datetime.date] = Field(None)
    sex: Optional[str] = Field(None, description="'male' or 'female' if provided")
