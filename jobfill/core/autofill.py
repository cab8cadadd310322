"""
Autofill planning.

Maps a parsed résumé onto detected fields and says what the shell would write
where. Nothing here touches the page.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from jobfill.config import settings
from jobfill.core.schemas import DetectedField, FillInstruction, ResumeRecord, SessionContext

logger = logging.getLogger(__name__)


def _name_parts(resume: ResumeRecord) -> List[str]:
    return resume.personal_info.full_name.split()


def _first_name(resume: ResumeRecord) -> str:
    parts = _name_parts(resume)
    return parts[0] if parts else ""


def _last_name(resume: ResumeRecord) -> str:
    parts = _name_parts(resume)
    return parts[-1] if len(parts) > 1 else ""


def _middle_name(resume: ResumeRecord) -> str:
    return " ".join(_name_parts(resume)[1:-1])


def _first_education(attr: str) -> Callable[[ResumeRecord], str]:
    def resolve(resume: ResumeRecord) -> str:
        return getattr(resume.education[0], attr) if resume.education else ""
    return resolve


def _first_experience(attr: str) -> Callable[[ResumeRecord], str]:
    def resolve(resume: ResumeRecord) -> str:
        return getattr(resume.experience[0], attr) if resume.experience else ""
    return resolve


# (category, subcategory) -> value out of the résumé
VALUE_RESOLVERS: Dict[Tuple[str, str], Callable[[ResumeRecord], str]] = {
    ("personal", "name"): lambda r: r.personal_info.full_name,
    ("personal", "firstName"): _first_name,
    ("personal", "lastName"): _last_name,
    ("personal", "middleName"): _middle_name,
    ("personal", "email"): lambda r: r.personal_info.email,
    ("personal", "phone"): lambda r: r.personal_info.phone,
    ("personal", "address"): lambda r: r.personal_info.address,
    ("education", "school"): _first_education("school"),
    ("education", "degree"): _first_education("degree"),
    ("education", "fieldOfStudy"): _first_education("field_of_study"),
    ("education", "gpa"): _first_education("gpa"),
    ("education", "graduationDate"): _first_education("end_date"),
    ("experience", "currentJob"): _first_experience("company"),
    ("experience", "company"): _first_experience("company"),
    ("experience", "title"): _first_experience("title"),
    ("experience", "startDate"): _first_experience("start_date"),
    ("experience", "endDate"): _first_experience("end_date"),
    ("experience", "description"): _first_experience("description"),
    ("skills", "skills"): lambda r: ", ".join(r.skills),
    ("other", "linkedin"): lambda r: r.personal_info.linkedin,
    ("other", "website"): lambda r: r.personal_info.website,
}


def resolve_value(resume: ResumeRecord, category: str, subcategory: str) -> str:
    """Résumé value for a field class, or "" when the résumé has none."""
    resolver = VALUE_RESOLVERS.get((category, subcategory))
    if resolver is None:
        return ""
    return (resolver(resume) or "").strip()


def plan_autofill(
    fields: List[DetectedField],
    session: SessionContext,
    threshold: Optional[float] = None,
) -> List[FillInstruction]:
    """
    Build fill instructions for the fields the résumé has a value for.

    Returns nothing when autofill is off or no résumé is loaded. A field is
    flagged uncertain when highlighting is on and its confidence is below the
    threshold (settings.uncertain_confidence_threshold by default).
    """
    if not session.autofill_enabled or session.resume is None:
        return []

    if threshold is None:
        threshold = settings.uncertain_confidence_threshold

    plan = []
    for field in fields:
        if field.classification.is_unknown:
            continue
        value = resolve_value(session.resume, field.category, field.subcategory)
        if not value:
            continue
        plan.append(FillInstruction(
            field_handle=field.field_handle,
            category=field.category,
            subcategory=field.subcategory,
            value=value,
            confidence=field.confidence,
            uncertain=session.highlight_uncertain and field.confidence < threshold,
        ))

    logger.debug(f"Planned {len(plan)} of {len(fields)} fields")
    return plan
