"""
Workday adapter.

Workday marks its widgets with data-automation-id, and those ids say more
about a field than its label does. Controls carrying one (or nested in an
element carrying one) are classified from it; every other control goes
through the generic detector unchanged.
"""

import logging
from typing import List, Optional, Tuple

from bs4.element import Tag

from jobfill.adapters.base import SiteAdapter
from jobfill.core.field_metadata import CONTROL_TAGS, is_relevant_field, visible_text
from jobfill.core.form_detector import Document, analyze_field, as_document
from jobfill.core.form_detector import detect_fields as detect_generic_fields
from jobfill.core.schemas import DetectedField, FieldMetadata

logger = logging.getLogger(__name__)


AUTOMATION_ID = "data-automation-id"
AUTOMATION_LABEL_SELECTOR = '[data-automation-label], [data-automation-id*="label" i]'
AUTOMATION_BOOST = 0.2


def automation_container(tag: Tag) -> Optional[Tag]:
    """The control itself when it has an automation id, else its nearest ancestor with one."""
    if tag.has_attr(AUTOMATION_ID):
        return tag
    return tag.find_parent(attrs={AUTOMATION_ID: True})


def automation_label(tag: Tag, container: Tag) -> str:
    """
    The automation label nearest before the control inside its container.

    Walking back stops at the container or at another control, so a label
    that belongs to an earlier field is never borrowed.
    """
    scope = container if container is not tag else tag.parent
    if scope is None:
        return ""
    labels = {id(label) for label in scope.select(AUTOMATION_LABEL_SELECTOR)}
    if not labels:
        return ""

    for node in tag.previous_elements:
        if node is scope:
            break
        if not isinstance(node, Tag):
            continue
        if id(node) in labels:
            return visible_text(node) or (node.get("data-automation-label") or "")
        if node.name in CONTROL_TAGS:
            break
    return ""


class WorkdayAdapter(SiteAdapter):
    platform = "workday"
    hosts = ("workday.com", "myworkdayjobs.com")
    markers = ("div[data-automation-id]",)

    def detect_fields(self, document: Optional[Document]) -> List[DetectedField]:
        """Automation-id controls first, then the remaining generic fields, each control once."""
        root = as_document(document)

        fields = []
        seen = set()
        for tag in root.find_all(list(CONTROL_TAGS)):
            container = automation_container(tag)
            if container is None or not is_relevant_field(tag):
                continue
            seen.add(id(tag))
            fields.append(self.analyze(tag, container))

        for field in detect_generic_fields(root, self.classifier):
            if id(field.field_handle) not in seen:
                seen.add(id(field.field_handle))
                fields.append(field)

        logger.debug(f"Workday: detected {len(fields)} fields")
        return fields

    def analyze(self, tag: Tag, container: Tag) -> DetectedField:
        return self.enhance(analyze_field(tag, self.classifier), container)

    def enhance(self, field: DetectedField, container: Optional[Tag] = None) -> DetectedField:
        if container is None:
            container = automation_container(field.field_handle)
        if container is None:
            return field

        automation_id = container.get(AUTOMATION_ID) or ""
        id_parts = automation_id.split("-")
        updates = {
            "extensions": {
                **field.metadata.extensions,
                "workday_automation_id": automation_id,
                "workday_field_type": " ".join(id_parts) if len(id_parts) > 1 else "",
            },
        }
        # An explicit label[for] binding outranks any automation label
        label = "" if field.metadata.label_for_field else automation_label(field.field_handle, container)
        if label:
            updates["label_text"] = label
        metadata = field.metadata.with_signals(**updates)

        category, subcategory = self.categorize(metadata)
        boosts = [AUTOMATION_BOOST] if automation_id else []
        confidence = self.rescore(metadata, category, subcategory, *boosts)
        return self.overlay(field, metadata, category, subcategory, confidence)

    def categorize(self, metadata: FieldMetadata) -> Tuple[str, str]:
        aid = metadata.extensions.get("workday_automation_id", "")
        rule = categorize_automation_id(aid) if aid else None
        return rule or self.classifier.categorize(metadata)


def categorize_automation_id(aid: str) -> Optional[Tuple[str, str]]:
    """Decision from a (lower-cased) automation id alone, or None."""
    if "email" in aid:
        return "personal", "email"
    if "phone" in aid:
        return "personal", "phone"
    if "name" in aid:
        if "first" in aid:
            return "personal", "firstName"
        if "last" in aid:
            return "personal", "lastName"
        return "personal", "name"

    if "address" in aid:
        if "line1" in aid or "street" in aid:
            return "personal", "address"
        if "city" in aid:
            return "personal", "city"
        if "state" in aid or "province" in aid:
            return "personal", "state"
        if "zip" in aid or "postal" in aid:
            return "personal", "zipCode"
        if "country" in aid:
            return "personal", "country"
        return "personal", "address"

    if any(token in aid for token in ("education", "school", "degree")):
        if "school" in aid or "institution" in aid:
            return "education", "school"
        if "degree" in aid:
            return "education", "degree"
        if "major" in aid or "field" in aid:
            return "education", "fieldOfStudy"
        if "gpa" in aid:
            return "education", "gpa"
        if "graduated" in aid or "completion" in aid:
            return "education", "graduationDate"
        return "education", "school"

    if any(token in aid for token in ("experience", "employment", "job")):
        if "company" in aid or "employer" in aid:
            return "experience", "company"
        if "title" in aid or "position" in aid:
            return "experience", "title"
        if "start" in aid:
            return "experience", "startDate"
        if "end" in aid:
            return "experience", "endDate"
        if "description" in aid or "duties" in aid:
            return "experience", "description"
        return "experience", "company"

    if "skill" in aid:
        return "skills", "skills"
    if "veteran" in aid or "military" in aid:
        return "other", "veteranStatus"
    return None
