import logging

from jobfill.core.education_parser import parse_education
from jobfill.core.errors import ResumeParseError
from jobfill.core.line_parser import (
    normalize_text,
    parse_experience,
    parse_personal_info,
    parse_skills,
    split_sections,
)
from jobfill.core.schemas import ResumeRecord

logger = logging.getLogger(__name__)


def parse(text) -> ResumeRecord:
    """
    Parse plain résumé text into a ResumeRecord.

    Anything that is not a string yields an empty record. Sections that are
    missing simply leave their part of the record empty. An unexpected
    failure is raised as ResumeParseError carrying the original text.
    """
    if not isinstance(text, str):
        logger.warning(f"Expected résumé text, got {type(text).__name__}; returning an empty record")
        return ResumeRecord()

    try:
        normalized = normalize_text(text)
        sections = split_sections(normalized)
        logger.debug(f"Sections found: {', '.join(sections)}")

        return ResumeRecord(
            personal_info=parse_personal_info(normalized, sections.get("header", "")),
            experience=parse_experience(sections.get("experience", "")),
            education=parse_education(sections.get("education", "")),
            skills=parse_skills(sections.get("skills", "")),
            raw_text=text,
        )
    except Exception as e:
        logger.exception("Résumé parsing failed")
        raise ResumeParseError(f"Failed to parse résumé text: {e}", original_text=text) from e
