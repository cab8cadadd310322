"""
Generic form-field detection.

Walks every input/select/textarea of a parsed page, drops the ones autofill
must not touch, and classifies the rest. Each call is a fresh pass: pages
change under us, so nothing is cached between calls.
"""

import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from jobfill.core.errors import NoDocumentError
from jobfill.core.field_classifier import FieldClassifier, default_classifier
from jobfill.core.field_metadata import CONTROL_TAGS, extract_metadata, is_relevant_field
from jobfill.core.schemas import DetectedField

logger = logging.getLogger(__name__)


Document = Union[str, bytes, BeautifulSoup, Tag]

APPLICATION_URL_PATTERNS = (
    "workday.com",
    "lever.co",
    "greenhouse.io",
    "applytojob",
    "applicant",
    "careers",
    "jobs",
    "application",
    "apply",
)
APPLICATION_TITLE_PATTERNS = ("apply", "application", "job", "career", "employment")


def as_document(document: Optional[Document]) -> Tag:
    """Accept raw HTML or an already parsed tree."""
    if document is None:
        raise NoDocumentError("No document to detect fields in")
    if isinstance(document, Tag):
        return document
    if isinstance(document, (str, bytes)):
        return BeautifulSoup(document, "html.parser")
    raise NoDocumentError(f"Expected HTML text or a parsed document, got {type(document).__name__}")


def analyze_field(tag: Tag, classifier: FieldClassifier = default_classifier) -> DetectedField:
    metadata = extract_metadata(tag)
    return DetectedField(
        field_handle=tag,
        metadata=metadata,
        classification=classifier.classify(metadata),
    )


def detect_fields(
    document: Optional[Document],
    classifier: Optional[FieldClassifier] = None,
) -> List[DetectedField]:
    """Detect and classify the autofill candidates of a page, in document order."""
    root = as_document(document)
    classifier = classifier or default_classifier

    fields = [
        analyze_field(tag, classifier)
        for tag in root.find_all(list(CONTROL_TAGS))
        if is_relevant_field(tag)
    ]
    logger.debug(f"Detected {len(fields)} candidate fields")
    return fields


def is_job_application_page(url: str, document: Optional[Document]) -> bool:
    """Heuristic check for an application page: URL, page title, or form shape."""
    url = (url or "").lower()
    if any(pattern in url for pattern in APPLICATION_URL_PATTERNS):
        return True

    if document is None:
        return False
    root = as_document(document)

    title_tag = root.find("title")
    title = title_tag.get_text(strip=True).lower() if title_tag else ""
    if any(pattern in title for pattern in APPLICATION_TITLE_PATTERNS):
        return True

    text_inputs = [
        tag for form in root.find_all("form")
        for tag in form.find_all("input")
        if (tag.get("type") or "text").lower() == "text"
    ]
    has_contact_inputs = bool(root.find("input", attrs={"type": ["email", "tel"]}))
    return len(text_inputs) > 3 and has_contact_inputs
