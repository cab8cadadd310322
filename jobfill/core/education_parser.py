"""
Education section parsing.

Education blocks are less regular than experience blocks: the date can sit on
any line, and a lone first line may be either the degree or the school. A
small degree lexicon settles the second case; nothing else is guessed.
"""

import logging
import re
from typing import List, Optional, Tuple

from jobfill.core.line_parser import DATE_SEPARATOR, MONTH, split_blocks
from jobfill.core.schemas import EducationEntry

logger = logging.getLogger(__name__)


# ===== DEGREE KEYWORDS =====
# Whole-word matches only: "ma" alone is more often Massachusetts than a degree
DEGREE_KEYWORD_RE = re.compile(
    r"\b(?:bachelor\w*|master\w*|associate\w*|doctor\w*|diploma|mba|m\.b\.a"
    r"|ph\.?\s?d|b\.s|b\.a|m\.s|m\.a|b\.sc|m\.sc|bsc|msc|bs|ba|ms)\b",
    re.IGNORECASE,
)

# "B.S. Computer Science, Stanford", "M.S. at MIT", "BA | Yale", "PhD from Oxford"
DEGREE_SCHOOL_RE = re.compile(r"^(.+?)(?:\s+at\s+|\s+from\s+|\s*[,|]\s*)(.+)$", re.IGNORECASE)

# Months optional; the end may be a year or Present/Current
EDUCATION_DATE_RE = re.compile(
    rf"(?:{MONTH}\s+)?(\d{{4}}){DATE_SEPARATOR}(?:(?:{MONTH}\s+)?(\d{{4}})|(Present|Current))\b",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
# A line that is just a graduation date: "May 2019", "Expected 2026", "Graduated: 2018"
GRADUATION_LINE_RE = re.compile(
    rf"^(?:(?:expected|graduated|graduation|class of)\s*:?\s*)?(?:{MONTH}\s+)?((?:19|20)\d{{2}})$",
    re.IGNORECASE,
)

FIELD_OF_STUDY_IN_RE = re.compile(r"\bin\s+([A-Za-z][A-Za-z\s&/\-]*?)\s*(?:,|\(|$)", re.IGNORECASE)
FIELD_OF_STUDY_OF_RE = re.compile(
    r"\b(?:master|bachelor|doctor)\w*\s+of\s+(?:science|arts)?\s*([A-Za-z][A-Za-z\s&/\-]*?)\s*(?:,|\(|$)",
    re.IGNORECASE,
)
# "Bachelor of Science" names no field
GENERIC_DEGREE_WORDS = {"science", "arts"}
GPA_RE = re.compile(r"\bGPA\b\s*[:\-]?\s*(\d\.\d{1,2})(?:\s*/\s*\d(?:\.\d{1,2})?)?", re.IGNORECASE)


def has_degree_keyword(text: str) -> bool:
    """
    Check if text contains a degree keyword.

    Used only to decide whether an unsplittable first line names the degree or
    the school.
    """
    return bool(DEGREE_KEYWORD_RE.search(text or ""))


def extract_field_of_study(degree: str) -> str:
    """
    Field of study from the degree text.

    Examples:
        "Bachelor of Science in Computer Science" -> "Computer Science"
        "Master of Business Administration" -> "Business Administration"
        "Bachelor of Science" -> ""
    """
    m = FIELD_OF_STUDY_IN_RE.search(degree)
    if m:
        return m.group(1).strip()
    m = FIELD_OF_STUDY_OF_RE.search(degree)
    if m and m.group(1).strip().lower() not in GENERIC_DEGREE_WORDS:
        return m.group(1).strip()
    return ""


def extract_gpa(text: str) -> str:
    m = GPA_RE.search(text)
    return m.group(1) if m else ""


def _find_dates(lines: List[str]) -> Tuple[str, str, Optional[int]]:
    """(start_year, end, index of the line holding them) for the first date found."""
    for idx, line in enumerate(lines):
        m = EDUCATION_DATE_RE.search(line)
        if m:
            years = YEAR_RE.findall(m.group(0))
            start = years[0] if years else m.group(1)
            if m.group(3):
                end = m.group(3)
            elif len(years) >= 2:
                end = years[1]
            else:
                end = "Present"
            return start, end, idx

    for idx, line in enumerate(lines):
        m = GRADUATION_LINE_RE.match(line.strip())
        if m:
            return "", m.group(1), idx

    return "", "", None


def parse_education_entry(block: str) -> EducationEntry:
    lines = block.split("\n")
    first = lines[0].strip()

    degree, school = "", ""
    m = DEGREE_SCHOOL_RE.match(first)
    if m:
        degree, school = m.group(1).strip(), m.group(2).strip()
    elif has_degree_keyword(first):
        degree = first
    else:
        school = first

    rest = lines[1:]
    start_date, end_date, date_idx = _find_dates(lines)
    if date_idx is not None and date_idx > 0:
        rest = [line for i, line in enumerate(lines) if i not in (0, date_idx)]

    return EducationEntry(
        degree=degree,
        school=school,
        field_of_study=extract_field_of_study(degree),
        gpa=extract_gpa(block),
        start_date=start_date,
        end_date=end_date,
        description="\n".join(rest).strip(),
    )


def parse_education(text: str) -> List[EducationEntry]:
    """One education entry per blank-line separated block, in document order."""
    if not isinstance(text, str):
        return []

    entries = []
    for block in split_blocks(text):
        entry = parse_education_entry(block)
        logger.debug(f"  -> Found education entry: school='{entry.school}', degree='{entry.degree}'")
        entries.append(entry)
    return entries
