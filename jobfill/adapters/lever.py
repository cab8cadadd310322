from typing import Tuple

from jobfill.adapters.base import SiteAdapter, find_wrapper
from jobfill.core.confidence_calculator import SITE_STRUCTURE_BOOST, STANDARD_FIELD_BOOST
from jobfill.core.schemas import DetectedField, FieldMetadata


WRAPPER_CLASSES = ("application-field", "input-field", "field-group")
TYPE_CLASS_TOKENS = ("field-", "application-", "question-")


class LeverAdapter(SiteAdapter):
    """Lever postings: one full-name field, urls[...] link fields."""

    platform = "lever"
    hosts = ("lever.co",)
    markers = ('form[data-form-type="application"]', ".application-form")

    def enhance(self, field: DetectedField) -> DetectedField:
        wrapper = find_wrapper(field.field_handle, WRAPPER_CLASSES)
        if wrapper is None:
            return field

        classes = wrapper.get("class") or []
        lever_type = " ".join(c for c in classes if any(token in c for token in TYPE_CLASS_TOKENS))
        is_required = (
            "required" in classes
            or wrapper.select_one(".required-marker") is not None
            or field.metadata.required
        )

        metadata = field.metadata.with_signals(
            required=is_required,
            extensions={**field.metadata.extensions, "lever_field_type": lever_type},
        )

        category, subcategory = self.categorize(metadata)
        boosts = []
        if lever_type:
            boosts.append(SITE_STRUCTURE_BOOST)
        if (category, subcategory) == ("personal", "name"):
            boosts.append(STANDARD_FIELD_BOOST)

        confidence = self.rescore(metadata, category, subcategory, *boosts)
        return self.overlay(field, metadata, category, subcategory, confidence)

    def categorize(self, metadata: FieldMetadata) -> Tuple[str, str]:
        id_, name, label = metadata.id, metadata.name, metadata.label_text

        if name == "resume" or "resume" in id_ or "resume" in label or "cv" in label:
            return "other", "resume"
        if name == "coverletter" or "cover" in id_ or "cover letter" in label:
            return "other", "coverLetter"
        if name == "name" or id_ == "name" or "full name" in label:
            return "personal", "name"
        if name == "email" or id_ == "email" or "email" in label:
            return "personal", "email"
        if name == "phone" or id_ == "phone" or "phone" in label:
            return "personal", "phone"
        if name == "org" or "company" in label:
            return "experience", "company"
        if name == "urls[linkedin]" or "linkedin" in id_ or "linkedin" in label:
            return "other", "linkedin"
        if name == "urls[github]" or "github" in id_ or "github" in label:
            return "other", "github"
        if name == "urls[portfolio]" or any(
            token in text for token in ("website", "portfolio") for text in (id_, label)
        ):
            return "other", "website"

        return self.classifier.categorize(metadata)
