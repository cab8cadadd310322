from typing import Tuple

from jobfill.adapters.base import SiteAdapter, find_wrapper
from jobfill.core.confidence_calculator import SITE_STRUCTURE_BOOST, STANDARD_FIELD_BOOST
from jobfill.core.schemas import DetectedField, FieldMetadata


WRAPPER_CLASSES = ("field", "form-field", "question")

STANDARD_FIELDS = {
    ("personal", "firstName"),
    ("personal", "lastName"),
    ("personal", "email"),
    ("personal", "phone"),
    ("other", "resume"),
    ("other", "coverLetter"),
}


class GreenhouseAdapter(SiteAdapter):
    """Greenhouse boards: fields sit in .field / .form-field / .question wrappers."""

    platform = "greenhouse"
    hosts = ("greenhouse.io",)
    markers = ("form#application_form", 'div[data-source="greenhouse"]')

    def enhance(self, field: DetectedField) -> DetectedField:
        wrapper = find_wrapper(field.field_handle, WRAPPER_CLASSES)
        if wrapper is None:
            return field

        wrapper_required = (
            "required" in (wrapper.get("class") or [])
            or wrapper.select_one(".field-label.required, .asterisk") is not None
        )
        is_required = wrapper_required or field.metadata.required

        metadata = field.metadata.with_signals(
            required=is_required,
            extensions={
                **field.metadata.extensions,
                "greenhouse_field_id": wrapper.get("id") or "",
                "greenhouse_field_type": " ".join(wrapper.get("class") or []),
                "is_required": "true" if is_required else "false",
            },
        )

        category, subcategory = self.categorize(metadata)
        boosts = []
        if metadata.extensions["greenhouse_field_id"] or metadata.extensions["greenhouse_field_type"]:
            boosts.append(SITE_STRUCTURE_BOOST)
        if (category, subcategory) in STANDARD_FIELDS:
            boosts.append(STANDARD_FIELD_BOOST)

        confidence = self.rescore(metadata, category, subcategory, *boosts)
        return self.overlay(field, metadata, category, subcategory, confidence)

    def categorize(self, metadata: FieldMetadata) -> Tuple[str, str]:
        """Greenhouse's standard ids first, then the generic classifier."""
        id_, name, label = metadata.id, metadata.name, metadata.label_text
        gh_id = metadata.extensions.get("greenhouse_field_id", "")

        if "first_name" in (id_, name) or gh_id == "first_name_field":
            return "personal", "firstName"
        if "last_name" in (id_, name) or gh_id == "last_name_field":
            return "personal", "lastName"
        if "email" in (id_, name) or gh_id == "email_field":
            return "personal", "email"
        if "phone" in (id_, name) or gh_id == "phone_field":
            return "personal", "phone"

        if id_ == "linkedin_url" or name == "urls[linkedin]" or "linkedin" in id_ or "linkedin" in gh_id:
            return "other", "linkedin"
        if name == "website" or "website" in id_ or "website" in gh_id:
            return "other", "website"

        if "address" in id_ or "address" in name or "address" in gh_id:
            if "city" in id_ or "city" in name:
                return "personal", "city"
            if "state" in id_ or "state" in name:
                return "personal", "state"
            if any(token in id_ or token in name for token in ("zip", "postal")):
                return "personal", "zipCode"
            return "personal", "address"

        if any(token in gh_id for token in ("education", "degree", "school")):
            if "school" in gh_id or "school" in label or "university" in label:
                return "education", "school"
            if "degree" in gh_id or "degree" in label:
                return "education", "degree"
            return "education", "school"

        if any(token in gh_id for token in ("experience", "employment", "job")):
            if "company" in gh_id or "company" in label:
                return "experience", "company"
            if "title" in gh_id or "title" in label:
                return "experience", "title"
            return "experience", "company"

        if any(token in text for token in ("resume", "cv") for text in (id_, name, label)):
            return "other", "resume"
        if "cover_letter" in id_ or "cover_letter" in name or "cover letter" in label:
            return "other", "coverLetter"

        return self.classifier.categorize(metadata)
