"""
Site adapter base.

An adapter runs the generic detector, then overlays its own knowledge of a
platform's markup on each field. The overlay replaces the generic decision
entirely and rescored confidence comes from the same calculator plus
platform boosts.
"""

import logging
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from bs4.element import Tag

from jobfill.core.confidence_calculator import ConfidenceCalculator
from jobfill.core.field_classifier import FieldClassifier, default_classifier
from jobfill.core.form_detector import Document, as_document, detect_fields
from jobfill.core.schemas import ClassificationResult, DetectedField, FieldMetadata

logger = logging.getLogger(__name__)


_STOP_ANCESTORS = {"body", "html", "[document]"}


def find_wrapper(tag: Tag, classes: Iterable[str]) -> Optional[Tag]:
    """Closest ancestor below <body> carrying one of the given classes."""
    wanted = set(classes)
    for parent in tag.parents:
        if parent.name in _STOP_ANCESTORS:
            return None
        if wanted & set(parent.get("class") or []):
            return parent
    return None


def url_host(url: str) -> str:
    url = (url or "").strip().lower()
    return urlparse(url).netloc or url


class SiteAdapter:
    """
    Generic behavior: detect and classify with the injected classifier.

    Subclasses set `platform`, the `hosts` and CSS `markers` that identify the
    platform, and override `enhance`.
    """

    platform = "generic"
    hosts: tuple = ()
    markers: tuple = ()

    def __init__(self, classifier: Optional[FieldClassifier] = None):
        self.classifier = classifier or default_classifier

    @classmethod
    def matches(cls, document: Optional[Document], url: str = "") -> bool:
        host = url_host(url)
        if host and any(h in host for h in cls.hosts):
            return True
        if document is None or not cls.markers:
            return False
        root = as_document(document)
        return any(root.select_one(marker) is not None for marker in cls.markers)

    def detect_fields(self, document: Optional[Document]) -> List[DetectedField]:
        fields = detect_fields(document, self.classifier)
        return [self.enhance(field) for field in fields]

    def enhance(self, field: DetectedField) -> DetectedField:
        return field

    def rescore(self, metadata: FieldMetadata, category: str, subcategory: str, *boosts: float) -> float:
        """Generic confidence for the decision plus platform boosts; unknown stays at 0."""
        if category == "unknown":
            return 0.0
        base = self.classifier.confidence(metadata, category, subcategory)
        return ConfidenceCalculator.boost(base, *boosts)

    def overlay(
        self,
        field: DetectedField,
        metadata: FieldMetadata,
        category: str,
        subcategory: str,
        confidence: float,
    ) -> DetectedField:
        """New DetectedField for the same control; the input field is left as it was."""
        logger.debug(
            f"{self.platform}: {field.category}/{field.subcategory} -> {category}/{subcategory} ({confidence})"
        )
        return DetectedField(
            field_handle=field.field_handle,
            metadata=metadata,
            classification=ClassificationResult(
                category=category,
                subcategory=subcategory,
                confidence=confidence,
            ),
        )
