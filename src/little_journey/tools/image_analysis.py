"""Image labelling for milestone detection.

Two analyzers are provided: a deterministic-when-seeded mock that derives
labels from filename hints, and a Gemini-backed analyzer for real photos.
Analyzer failures are reported through ``ImageAnalysisResult.error``.
"""

import asyncio
import json
import logging
import mimetypes
import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import aiofiles
from google import genai
from google.genai import types

from ..config import Settings, settings as default_settings
from ..models.suggestion import ImageAnalysisResult, LabelWithConfidence

logger = logging.getLogger(__name__)

EMPTY_URI_ERROR = "Invalid image URI: empty string"

# Filename keyword -> labels it suggests, most representative first
MOCK_LABEL_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    # People
    "person": ("person", "face", "portrait", "people", "human"),
    "baby": ("baby", "infant", "child", "toddler", "kid", "newborn"),
    "family": ("family", "group", "together", "gathering"),
    "smile": ("smile", "happy", "joy", "laughing", "expression"),
    # Places
    "outdoor": ("outdoor", "outside", "nature", "scenery"),
    "beach": ("beach", "ocean", "sea", "sand", "water", "waves", "coast"),
    "park": ("park", "grass", "tree", "garden", "greenery", "lawn"),
    "sunset": ("sunset", "sunrise", "sky", "golden hour", "dusk"),
    "mountain": ("mountain", "hill", "hiking", "trail", "peak"),
    "indoor": ("indoor", "inside", "room", "home", "house"),
    "kitchen": ("kitchen", "cooking", "food", "meal"),
    "bedroom": ("bedroom", "bed", "sleep", "nursery"),
    # Activities
    "birthday": ("birthday", "cake", "celebration", "party", "candles"),
    "playing": ("playing", "play", "toy", "fun", "game"),
    "eating": ("eating", "food", "meal", "feeding", "snack"),
    "sleeping": ("sleeping", "asleep", "nap", "rest"),
    "walking": ("walking", "first steps", "standing", "milestone"),
    "swimming": ("swimming", "pool", "water", "splash"),
    "picnic": ("picnic", "blanket", "outdoor eating", "basket"),
    # Objects
    "toy": ("toy", "stuffed animal", "teddy bear", "doll", "blocks"),
    "book": ("book", "reading", "story", "storytime"),
    "food": ("food", "fruit", "vegetable", "snack", "meal"),
    "animal": ("animal", "pet", "dog", "cat", "bird"),
}

GEMINI_LABEL_PROMPT = """You are labelling a family photo of a young child for a baby journal.
List the objects, activities, settings and occasions visible in the photo.

Return ONLY a JSON object of the form:
{{"labels": [{{"label": "<lower-case label>", "confidence": <0.0-1.0>}}]}}

Return at most {max_labels} labels, most confident first. Prefer everyday words
such as "baby", "cake", "pool", "walking", "birthday", "school", "zoo"."""


def _filename(uri: str) -> str:
    return uri.rstrip("/").split("/")[-1].lower()


def _finalize_labels(
    labels: List[LabelWithConfidence], max_labels: int
) -> List[LabelWithConfidence]:
    """Lower-case, keep the best confidence per label, sort and truncate."""
    best: Dict[str, float] = {}
    for item in labels:
        key = item.label.strip().lower()
        if key and item.confidence > best.get(key, -1.0):
            best[key] = item.confidence
    ordered = sorted(best.items(), key=lambda kv: kv[1], reverse=True)
    return [LabelWithConfidence(label=k, confidence=c) for k, c in ordered[:max_labels]]


def _result(labels: List[LabelWithConfidence]) -> ImageAnalysisResult:
    return ImageAnalysisResult(
        labels=[item.label for item in labels],
        labels_with_confidence=labels,
    )


class ImageAnalyzer(ABC):
    """Labels images. Implementations return errors instead of raising."""

    @abstractmethod
    async def analyze_image(self, uri: str) -> ImageAnalysisResult:
        pass

    async def analyze_batch(self, uris: Sequence[str]) -> List[ImageAnalysisResult]:
        """Analyze several images concurrently, results in input order."""
        if not uris:
            return []
        return list(await asyncio.gather(*(self.analyze_image(uri) for uri in uris)))

    async def get_labels_from_images(self, uris: Sequence[str]) -> List[str]:
        """Union of labels across images, first-seen order, failures ignored."""
        seen: Dict[str, None] = {}
        for result in await self.analyze_batch(uris):
            for label in result.labels:
                seen.setdefault(label, None)
        return list(seen)


class MockImageAnalyzer(ImageAnalyzer):
    """Offline analyzer that derives labels from keywords in the filename."""

    def __init__(
        self,
        max_labels: int = 10,
        rng: Optional[random.Random] = None,
        delay: float = 0.0,
    ):
        self.max_labels = max_labels
        self.rng = rng or random.Random()
        self.delay = delay

    def generate_labels(self, uri: str) -> List[LabelWithConfidence]:
        filename = _filename(uri)
        labels: List[LabelWithConfidence] = []

        for category, category_labels in MOCK_LABEL_CATEGORIES.items():
            if category not in filename:
                continue
            count = min(len(category_labels), 2 + self.rng.randint(0, 2))
            for label in category_labels[:count]:
                labels.append(LabelWithConfidence(
                    label=label, confidence=0.7 + self.rng.random() * 0.3
                ))

        if not labels:
            labels = [
                LabelWithConfidence(label="photo", confidence=0.95),
                LabelWithConfidence(label="image", confidence=0.9),
                LabelWithConfidence(label="moment", confidence=0.85),
            ]
            setting = "indoor" if self.rng.random() > 0.5 else "outdoor"
            labels.append(LabelWithConfidence(
                label=setting, confidence=0.6 + self.rng.random() * 0.3
            ))
            if self.rng.random() > 0.5:
                labels.append(LabelWithConfidence(
                    label="person", confidence=0.7 + self.rng.random() * 0.2
                ))

        return _finalize_labels(labels, self.max_labels)

    async def analyze_image(self, uri: str) -> ImageAnalysisResult:
        if not uri or not uri.strip():
            return ImageAnalysisResult(error=EMPTY_URI_ERROR)
        if self.delay:
            await asyncio.sleep(self.delay)
        return _result(self.generate_labels(uri))


class GeminiImageAnalyzer(ImageAnalyzer):
    """Labels images with a Gemini vision model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "gemini-2.0-flash",
        max_labels: int = 10,
        min_confidence: float = 0.5,
        client=None,
    ):
        if client is None:
            if not api_key:
                raise ValueError("GEMINI_API_KEY is required for Gemini image analysis")
            client = genai.Client(api_key=api_key)
        self._client = client
        self._model_name = model_name
        self.max_labels = max_labels
        self.min_confidence = min_confidence

    async def _image_part(self, uri: str):
        mime_type = mimetypes.guess_type(uri)[0] or "image/jpeg"
        if uri.startswith(("http://", "https://", "gs://")):
            return types.Part.from_uri(file_uri=uri, mime_type=mime_type)

        path = uri[len("file://"):] if uri.startswith("file://") else uri
        async with aiofiles.open(path, "rb") as f:
            data = await f.read()
        return types.Part.from_bytes(data=data, mime_type=mime_type)

    def _parse_response(self, response_text: str) -> List[LabelWithConfidence]:
        # The model sometimes wraps the JSON in prose or code fences
        json_start = response_text.find("{")
        json_end = response_text.rfind("}") + 1
        if json_start == -1 or json_end == 0:
            raise ValueError("No JSON found in response")

        data = json.loads(response_text[json_start:json_end])
        labels = []
        for item in data.get("labels", []):
            if isinstance(item, str):
                item = {"label": item, "confidence": 0.5}
            confidence = min(max(float(item.get("confidence", 0.5)), 0.0), 1.0)
            if confidence < self.min_confidence:
                continue
            labels.append(LabelWithConfidence(label=str(item["label"]), confidence=confidence))
        return labels

    async def analyze_image(self, uri: str) -> ImageAnalysisResult:
        if not uri or not uri.strip():
            return ImageAnalysisResult(error=EMPTY_URI_ERROR)

        try:
            image_part = await self._image_part(uri)
            prompt = GEMINI_LABEL_PROMPT.format(max_labels=self.max_labels)
            response = await asyncio.get_running_loop().run_in_executor(
                None,
                lambda: self._client.models.generate_content(
                    model=self._model_name,
                    contents=[prompt, image_part],
                ),
            )
            labels = self._parse_response(response.text or "")
        except Exception as e:
            logger.error(f"Image analysis failed for {uri}: {e}")
            return ImageAnalysisResult(error=str(e) or "Unknown error during analysis")

        return _result(_finalize_labels(labels, self.max_labels))


def create_image_analyzer(config: Optional[Settings] = None) -> ImageAnalyzer:
    """Build the analyzer selected by configuration."""
    config = config or default_settings
    if config.use_mock_image_analysis:
        return MockImageAnalyzer(max_labels=config.max_labels, delay=config.mock_analysis_delay)

    logger.info(f"Using Gemini image analysis ({config.gemini_model_name})")
    return GeminiImageAnalyzer(
        api_key=config.gemini_api_key,
        model_name=config.gemini_model_name,
        max_labels=config.max_labels,
        min_confidence=config.min_label_confidence,
    )
