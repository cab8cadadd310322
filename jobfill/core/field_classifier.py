"""
Form-field classification against the pattern catalog.

Each (category, subcategory) is scored by how many of its trigger phrases show
up in which metadata channel. The best pair wins; when the evidence is too weak
we fall back to what the browser already knows about the control (input type,
autocomplete token). Confidence is computed afterwards by ConfidenceCalculator.
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

from jobfill.core.confidence_calculator import ConfidenceCalculator
from jobfill.core.pattern_catalog import PATTERN_CATALOG, Catalog, iter_catalog
from jobfill.core.schemas import ClassificationResult, FieldMetadata

logger = logging.getLogger(__name__)


MIN_MATCH_SCORE = 3

LABEL_WEIGHT = 5
LABEL_FOR_BONUS = 2
ID_WEIGHT = 3
NAME_WEIGHT = 3
ARIA_LABEL_WEIGHT = 3
PLACEHOLDER_WEIGHT = 2
TITLE_WEIGHT = 1
DATA_ATTRIBUTE_WEIGHT = 1

# Only consulted when pattern matching was inconclusive
TYPE_FALLBACKS: Dict[str, Tuple[str, str]] = {
    "email": ("personal", "email"),
    "tel": ("personal", "phone"),
}

AUTOCOMPLETE_FALLBACKS: Dict[str, Tuple[str, str]] = {
    "address-line1": ("personal", "address"),
    "address-level2": ("personal", "city"),
    "address-level1": ("personal", "state"),
    "postal-code": ("personal", "zipCode"),
    "country": ("personal", "country"),
    "country-name": ("personal", "country"),
}


class FieldClassifier:
    """Scores field metadata against a pattern catalog."""

    def __init__(self, catalog: Catalog = PATTERN_CATALOG):
        self.catalog = catalog

    def match_score(self, metadata: FieldMetadata, phrases: Sequence[str]) -> int:
        score = 0
        for phrase in phrases:
            if phrase in metadata.id:
                score += ID_WEIGHT
            if phrase in metadata.name:
                score += NAME_WEIGHT
            if phrase in metadata.label_text:
                score += LABEL_WEIGHT
                if metadata.label_for_field:
                    score += LABEL_FOR_BONUS
            if phrase in metadata.placeholder:
                score += PLACEHOLDER_WEIGHT
            if phrase in metadata.aria_label:
                score += ARIA_LABEL_WEIGHT
            if phrase in metadata.title:
                score += TITLE_WEIGHT
            for key, value in metadata.data_attributes.items():
                if phrase in key or phrase in value:
                    score += DATA_ATTRIBUTE_WEIGHT
        return score

    def categorize(self, metadata: FieldMetadata) -> Tuple[str, str]:
        """Pick the best (category, subcategory) for the metadata."""
        category, subcategory = "unknown", "unknown"
        best = 0

        for cat, sub, phrases in iter_catalog(self.catalog):
            score = self.match_score(metadata, phrases)
            # strictly greater: earlier pairs win ties
            if score > best:
                best = score
                category, subcategory = cat, sub

        if category == "unknown" or best < MIN_MATCH_SCORE:
            fallback = _structural_fallback(metadata)
            if fallback:
                logger.debug(f"Structural fallback {fallback} (pattern score {best} for {category}/{subcategory})")
                category, subcategory = fallback

        return category, subcategory

    def confidence(self, metadata: FieldMetadata, category: str, subcategory: str) -> float:
        confidence, reasons = ConfidenceCalculator.field_classification(metadata, category, subcategory)
        logger.debug(f"Confidence {confidence} for {category}/{subcategory}: {', '.join(reasons)}")
        return confidence

    def classify(self, metadata: FieldMetadata) -> ClassificationResult:
        """
        Classify one field. Never raises: an internal fault is logged and
        reported as the unknown/unknown decision with confidence 0.
        """
        try:
            category, subcategory = self.categorize(metadata)
            if category == "unknown":
                return ClassificationResult()
            return ClassificationResult(
                category=category,
                subcategory=subcategory,
                confidence=self.confidence(metadata, category, subcategory),
            )
        except Exception:
            logger.exception("Field classification failed; reporting unknown")
            return ClassificationResult()


def _structural_fallback(metadata: FieldMetadata) -> Optional[Tuple[str, str]]:
    if metadata.type in TYPE_FALLBACKS:
        return TYPE_FALLBACKS[metadata.type]
    return AUTOCOMPLETE_FALLBACKS.get(metadata.autocomplete)


default_classifier = FieldClassifier()


def classify(metadata: FieldMetadata) -> ClassificationResult:
    return default_classifier.classify(metadata)
