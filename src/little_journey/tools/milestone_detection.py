"""
Milestone detection from image labels.

Maps labels produced by image analysis to milestone templates and scores
each candidate template by how many labels support it and how confident
the analyzer was about them.
"""

import logging
from collections.abc import Mapping
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from ..catalog import TEMPLATES_BY_ID, get_template
from ..config import settings
from ..models.suggestion import (
    ImageAnalysisResult,
    LabelWithConfidence,
    MilestoneDetectionResult,
    MilestoneSuggestion,
)
from .image_analysis import ImageAnalyzer, create_image_analyzer


logger = logging.getLogger(__name__)

INVALID_URI_ERROR = "Invalid image URI"

# Labels needed for the full label-count contribution
LABELS_FOR_FULL_SUPPORT = 3
LABEL_COUNT_WEIGHT = 0.4
LABEL_CONFIDENCE_WEIGHT = 0.6
DEFAULT_LABEL_CONFIDENCE = 0.5


def _ids(*template_ids: str) -> FrozenSet[str]:
    return frozenset(template_ids)


# Lower-case label -> milestone templates it is evidence for.
# Labels mapped to an empty set are known but too generic to suggest anything.
LABEL_TO_MILESTONE_MAP: Dict[str, FrozenSet[str]] = {
    # First steps
    "walking": _ids("first_steps"),
    "first steps": _ids("first_steps"),
    "standing": _ids("first_steps"),
    "toddler": _ids("first_steps"),
    # Food
    "eating": _ids("first_solid_food", "annaprashan", "first_hawker_food"),
    "food": _ids("first_solid_food", "annaprashan", "first_hawker_food"),
    "feeding": _ids("first_solid_food", "annaprashan"),
    "solid food": _ids("first_solid_food", "annaprashan"),
    "high chair": _ids("first_solid_food", "annaprashan"),
    "spoon": _ids("first_solid_food", "annaprashan"),
    "puree": _ids("first_solid_food"),
    "mashed": _ids("first_solid_food"),
    "cereal": _ids("first_solid_food"),
    "baby food": _ids("first_solid_food"),
    "hawker": _ids("first_hawker_food"),
    # Birthdays and celebrations
    "birthday": _ids("first_birthday", "zhua_zhou"),
    "cake": _ids("first_birthday", "zhua_zhou"),
    "candles": _ids("first_birthday", "zhua_zhou"),
    "party": _ids("first_birthday", "zhua_zhou"),
    "celebration": _ids("full_month", "hundred_days", "first_birthday", "zhua_zhou"),
    "one year": _ids("first_birthday"),
    "1 year": _ids("first_birthday"),
    "first birthday": _ids("first_birthday"),
    # Swimming
    "swimming": _ids("first_swim"),
    "pool": _ids("first_swim"),
    "swim": _ids("first_swim"),
    "first swim": _ids("first_swim"),
    "swimsuit": _ids("first_swim"),
    "floatie": _ids("first_swim"),
    "swimming pool": _ids("first_swim"),
    "splash": _ids("first_swim"),
    "water": _ids(),
    # Smiles and laughter
    "smile": _ids("first_smile"),
    "smiling": _ids("first_smile"),
    "happy": _ids("first_smile", "first_laugh"),
    "joy": _ids("first_smile", "first_laugh"),
    "laughing": _ids("first_laugh"),
    "giggling": _ids("first_laugh"),
    # Teeth
    "tooth": _ids("first_tooth"),
    "teeth": _ids("first_tooth"),
    "dental": _ids("first_tooth"),
    # Haircut
    "haircut": _ids("first_haircut"),
    "scissors": _ids("first_haircut"),
    "hair cut": _ids("first_haircut"),
    "barber": _ids("first_haircut"),
    # School
    "school": _ids("first_day_school"),
    "classroom": _ids("first_day_school"),
    "uniform": _ids("first_day_school"),
    "preschool": _ids("first_day_school"),
    "childcare": _ids("first_day_school"),
    "nursery": _ids("first_day_school"),
    # Singapore
    "mrt": _ids("first_mrt_ride"),
    "train": _ids("first_mrt_ride"),
    "station": _ids("first_mrt_ride"),
    "zoo": _ids("first_zoo_visit"),
    "animal": _ids("first_zoo_visit"),
    "singapore": _ids(),
    # Cultural festivals
    "red packet": _ids("first_lunar_new_year"),
    "ang bao": _ids("first_lunar_new_year"),
    "chinese new year": _ids("first_lunar_new_year"),
    "deepavali": _ids("first_deepavali"),
    "diwali": _ids("first_deepavali"),
    "hari raya": _ids("first_hari_raya"),
    "eid": _ids("first_hari_raya"),
    # Generic
    "baby": _ids(),
    "infant": _ids(),
    "newborn": _ids("full_month"),
}


def validate_label_map(
    label_map: Mapping,
    known_template_ids: Iterable[str],
) -> None:
    """Check every mapped template id exists in the catalog.

    Raises:
        ValueError: Listing the unknown ids and the labels referencing them
    """
    known = set(known_template_ids)
    unknown: Dict[str, List[str]] = {}
    for label, template_ids in label_map.items():
        if label != label.lower():
            raise ValueError(f"Label map keys must be lower-case: {label!r}")
        for template_id in template_ids:
            if template_id not in known:
                unknown.setdefault(template_id, []).append(label)

    if unknown:
        details = ", ".join(f"{tid} (from {', '.join(labels)})" for tid, labels in sorted(unknown.items()))
        raise ValueError(f"Label map references unknown milestone templates: {details}")


validate_label_map(LABEL_TO_MILESTONE_MAP, TEMPLATES_BY_ID)


def calculate_confidence(confidences: Sequence[float]) -> float:
    """Combine label count and mean label confidence into a 0-1 score."""
    count_factor = min(len(confidences) / LABELS_FOR_FULL_SUPPORT, 1.0)
    mean_confidence = (
        sum(confidences) / len(confidences) if confidences else DEFAULT_LABEL_CONFIDENCE
    )
    return min(count_factor * LABEL_COUNT_WEIGHT + mean_confidence * LABEL_CONFIDENCE_WEIGHT, 1.0)


def match_labels(
    labels: Sequence[LabelWithConfidence],
    min_confidence: Optional[float] = None,
    max_suggestions: Optional[int] = None,
) -> List[MilestoneSuggestion]:
    """
    Suggest milestone templates for a set of image labels.

    Args:
        labels: Labels with analyzer confidence; matching is case-insensitive
        min_confidence: Drop suggestions below this, defaults to settings
        max_suggestions: Number of suggestions kept, defaults to settings

    Returns:
        Suggestions sorted by confidence, highest first
    """
    if min_confidence is None:
        min_confidence = settings.min_suggestion_confidence
    if max_suggestions is None:
        max_suggestions = settings.max_milestone_suggestions

    matched: Dict[str, Dict[str, float]] = {}
    for item in labels:
        label = item.label.strip().lower()
        for template_id in LABEL_TO_MILESTONE_MAP.get(label, ()):
            per_label = matched.setdefault(template_id, {})
            # Duplicate labels count once, at their best confidence
            per_label[label] = max(per_label.get(label, 0.0), item.confidence)

    suggestions = []
    for template_id, per_label in matched.items():
        confidence = calculate_confidence(list(per_label.values()))
        if confidence < min_confidence:
            continue
        suggestions.append(MilestoneSuggestion(
            template_id=template_id,
            template=get_template(template_id),
            confidence=confidence,
            matched_labels=sorted(per_label),
        ))

    suggestions.sort(key=lambda s: (-s.confidence, s.template_id))
    return suggestions[:max_suggestions]


def is_high_confidence(suggestion: MilestoneSuggestion) -> bool:
    return suggestion.confidence >= settings.high_confidence_threshold


def _labels_of(result: ImageAnalysisResult) -> List[LabelWithConfidence]:
    # Labels without a confidence entry fall back to the default; labels
    # only present with a confidence are kept as well.
    known: Dict[str, float] = {}
    for item in result.labels_with_confidence:
        key = item.label.strip().lower()
        known[key] = max(known.get(key, 0.0), item.confidence)

    labels = [
        LabelWithConfidence(
            label=label,
            confidence=known.get(label.strip().lower(), DEFAULT_LABEL_CONFIDENCE),
        )
        for label in result.labels
    ]
    return labels + list(result.labels_with_confidence)


async def detect_milestones_from_image(
    uri: str,
    analyzer: Optional[ImageAnalyzer] = None,
) -> MilestoneDetectionResult:
    """Analyze one image and suggest milestones for it.

    Invalid input and analyzer failures are reported in ``error``.
    """
    if not uri or not uri.strip():
        return MilestoneDetectionResult(error=INVALID_URI_ERROR)

    analyzer = analyzer or create_image_analyzer()
    result = await analyzer.analyze_image(uri)
    if not result.ok:
        logger.error(f"Milestone detection failed for {uri}: {result.error}")
        return MilestoneDetectionResult(error=result.error)

    suggestions = match_labels(_labels_of(result))
    logger.debug(f"{uri}: {len(suggestions)} suggestions from {len(result.labels)} labels")
    return MilestoneDetectionResult(suggestions=suggestions, image_labels=list(result.labels))


async def detect_milestones_from_images(
    uris: Sequence[str],
    analyzer: Optional[ImageAnalyzer] = None,
) -> MilestoneDetectionResult:
    """
    Analyze several images (e.g. a photo carousel) and combine suggestions.

    Images are analyzed concurrently. Each image contributes its top
    suggestions; for each template the highest confidence across images
    is kept and the matched labels are merged.
    Errors from individual images are joined with "; ".
    """
    if not uris:
        return MilestoneDetectionResult()

    analyzer = analyzer or create_image_analyzer()
    valid_uris = [uri for uri in uris if uri and uri.strip()]
    errors = [INVALID_URI_ERROR] * (len(uris) - len(valid_uris))

    results = await analyzer.analyze_batch(valid_uris)

    all_labels: Dict[str, None] = {}
    best: Dict[str, MilestoneSuggestion] = {}
    merged_labels: Dict[str, set] = {}

    for uri, result in zip(valid_uris, results):
        if not result.ok:
            logger.error(f"Milestone detection failed for {uri}: {result.error}")
            errors.append(result.error)
            continue
        for label in result.labels:
            all_labels.setdefault(label, None)
        # Each image contributes only its own top suggestions
        for suggestion in match_labels(_labels_of(result)):
            merged_labels.setdefault(suggestion.template_id, set()).update(suggestion.matched_labels)
            current = best.get(suggestion.template_id)
            if current is None or suggestion.confidence > current.confidence:
                best[suggestion.template_id] = suggestion

    combined = [
        s.model_copy(update={"matched_labels": sorted(merged_labels[s.template_id])})
        for s in best.values()
    ]
    combined.sort(key=lambda s: (-s.confidence, s.template_id))

    return MilestoneDetectionResult(
        suggestions=combined[:settings.max_milestone_suggestions],
        image_labels=list(all_labels),
        error="; ".join(errors) if errors else None,
    )
