"""
Photo book data models.

Defines pages, covers, layouts and pricing tiers for printable
photo books built from journal entries.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PhotoBookPageType(str, Enum):
    """Kinds of photo book pages."""
    TITLE = "title"
    PHOTO = "photo"
    MILESTONE = "milestone"
    BLANK = "blank"


class BookLayoutTemplate(str, Enum):
    """Visual layout of the exported book."""
    CLASSIC = "classic"
    MODERN = "modern"
    PLAYFUL = "playful"


class CoverColorTheme(str, Enum):
    """Cover color themes."""
    CORAL = "coral"
    SAGE = "sage"
    NAVY = "navy"
    BLUSH = "blush"
    GOLD = "gold"
    CHARCOAL = "charcoal"


class PhotoBookPage(BaseModel):
    """A display-ready page derived from (at most) one journal entry."""
    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="Page identifier")
    type: PhotoBookPageType = Field(..., description="Page kind")
    entry_id: Optional[str] = Field(None, description="Source journal entry")
    milestone_id: Optional[str] = Field(None, description="Linked milestone")
    image_uri: Optional[str] = Field(None, description="Image shown on the page")
    caption: Optional[str] = Field(None)
    date: Optional[datetime.date] = Field(None)
    title: Optional[str] = Field(None)


class BookCover(BaseModel):
    """Cover of a photo book."""
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., description="Cover title")
    photo_uri: Optional[str] = Field(None)
    child_name: Optional[str] = Field(None)
    date_range: Optional[str] = Field(None, description="Human-readable period, e.g. 'March 2025'")
    color_theme: CoverColorTheme = Field(CoverColorTheme.CORAL)


class CoverTheme(BaseModel):
    """Colors for a cover theme."""
    model_config = ConfigDict(frozen=True)

    id: CoverColorTheme
    name: str
    background: str
    text: str


class BookLayout(BaseModel):
    """Description of a layout template for the picker."""
    model_config = ConfigDict(frozen=True)

    id: BookLayoutTemplate
    name: str
    description: str
    icon: str


class BookPricingTier(BaseModel):
    """Print pricing tier (SGD)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="mini / standard / premium")
    name: str
    pages: int = Field(..., gt=0)
    price_min: float = Field(..., ge=0)
    price_max: float = Field(..., ge=0)
    description: str
    icon: str
