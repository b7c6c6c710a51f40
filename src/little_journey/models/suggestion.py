"""
Image analysis and milestone suggestion data models.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .milestone import MilestoneTemplate


class LabelWithConfidence(BaseModel):
    """A label detected in an image."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Lower-case label text")
    confidence: float = Field(..., ge=0, le=1, description="Detector confidence")


class ImageAnalysisResult(BaseModel):
    """Output of the image analysis collaborator."""
    labels: List[str] = Field(default_factory=list, description="Detected labels, highest confidence first")
    labels_with_confidence: List[LabelWithConfidence] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Failure reason; labels are empty when set")

    @property
    def ok(self) -> bool:
        return self.error is None


class MilestoneSuggestion(BaseModel):
    """A milestone template suggested from image labels."""
    template_id: str
    template: MilestoneTemplate
    confidence: float = Field(..., ge=0, le=1)
    matched_labels: List[str] = Field(default_factory=list)


class MilestoneDetectionResult(BaseModel):
    """Suggestions for one or more images."""
    suggestions: List[MilestoneSuggestion] = Field(default_factory=list)
    image_labels: List[str] = Field(default_factory=list)
    error: Optional[str] = Field(None)
