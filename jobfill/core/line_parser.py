import logging
import re
from typing import Dict, List, Optional, Tuple

from jobfill.core.schemas import ExperienceEntry, PersonalInfo

logger = logging.getLogger(__name__)


# Canonical section -> header lines that open it (compared after trim/lower, optional trailing colon)
SECTION_HEADERS: Dict[str, Tuple[str, ...]] = {
    "experience": (
        "experience",
        "work experience",
        "employment",
        "employment history",
        "work history",
        "professional experience",
    ),
    "education": (
        "education",
        "educational background",
        "academic background",
        "academic experience",
        "academic history",
    ),
    "skills": (
        "skills",
        "technical skills",
        "core competencies",
        "competencies",
        "expertise",
        "areas of expertise",
        "proficiencies",
        "technical proficiencies",
    ),
    "projects": ("projects", "personal projects", "professional projects"),
    "certifications": ("certifications", "certificates", "licenses", "licenses and certifications"),
    "languages": ("languages", "language proficiencies"),
    "summary": ("summary", "professional summary", "career summary", "career objective", "objective", "profile"),
}

_HEADER_LOOKUP: Dict[str, str] = {
    synonym: section
    for section, synonyms in SECTION_HEADERS.items()
    for synonym in synonyms
}


EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
# NANP: (555) 123-4567, 555-123-4567, 555.123.4567, +1 555 123 4567
PHONE_RE = re.compile(r"(?<!\d)(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[A-Za-z0-9_-]+/?", re.IGNORECASE)
URL_RE = re.compile(
    r"https?://(?:www\.)?[A-Za-z0-9-]+\.[A-Za-z0-9.-]+(?:/[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*)?",
    re.IGNORECASE,
)
# Street address on one line ending in a ZIP: "123 Main St, Springfield, IL 62704"
ADDRESS_RE = re.compile(r"\b\d+[ \t]+[A-Za-z][A-Za-z \t,.#'-]*?\b\d{5}(?:-\d{4})?\b")

MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
DATE_SEPARATOR = r"\s*(?:-|–|—|to)\s*"
# "Jan 2020 - Present", "March 2018 – Nov 2022"
DATE_RANGE_RE = re.compile(
    rf"({MONTH}\s+\d{{4}}){DATE_SEPARATOR}({MONTH}\s+\d{{4}}|Present|Current)\b",
    re.IGNORECASE,
)

# "Software Engineer at Acme", "Engineer, Acme", "Engineer | Acme"
TITLE_COMPANY_RE = re.compile(r"^(.+?)(?:\s+at\s+|\s*[,|]\s*)(.+)$", re.IGNORECASE)

BLANK_RUN_RE = re.compile(r"\n(?:[ \t]*\n)+")
BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")

SKILL_DELIMITER_RE = re.compile(r"[,•·●|*+\n]+")
BULLET_RE = re.compile(r"^[\s•●\-*>+]+")
TRAILING_PUNCTUATION = ",.;:!?"
PROSE_MIN_WORDS = 10
MIN_SKILL_LIST = 3


def normalize_text(text: str) -> str:
    """Unify line endings, collapse runs of blank lines into one, trim."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


def match_section_header(line: str) -> Optional[str]:
    """Canonical section for an exact header line, or None."""
    clean = line.strip().lower()
    if clean.endswith(":"):
        clean = clean[:-1].rstrip()
    return _HEADER_LOOKUP.get(clean)


def find_section_boundaries(lines: List[str]) -> List[Tuple[int, str]]:
    """(line index, canonical section) for every header line, sorted by index."""
    boundaries = []
    for idx, line in enumerate(lines):
        if not line.strip():
            continue
        section = match_section_header(line)
        if section:
            logger.debug(f"SECTION HEADER DETECTED at line {idx}: '{line.strip()}' -> '{section}'")
            boundaries.append((idx, section))
    return sorted(boundaries)


def split_sections(text: str) -> Dict[str, str]:
    """
    Split résumé text into canonical sections.

    Everything before the first header goes to "header" (name and contact
    details, usually). A section repeated later in the document replaces the
    earlier one.
    """
    lines = normalize_text(text).split("\n")
    boundaries = find_section_boundaries(lines)

    first = boundaries[0][0] if boundaries else len(lines)
    sections: Dict[str, str] = {"header": "\n".join(lines[:first]).strip()}

    for i, (idx, section) in enumerate(boundaries):
        end = boundaries[i + 1][0] if i + 1 < len(boundaries) else len(lines)
        if section in sections:
            logger.debug(f"Section '{section}' repeated at line {idx}; later header wins")
        sections[section] = "\n".join(lines[idx + 1:end]).strip()

    return sections


def split_blocks(text: str) -> List[str]:
    """Candidate entries: chunks separated by blank lines."""
    return [block.strip() for block in BLOCK_SPLIT_RE.split(text or "") if block.strip()]


def _first_match(pattern: re.Pattern, text: str) -> str:
    m = pattern.search(text)
    return m.group(0).strip() if m else ""


def _first_website(text: str) -> str:
    for m in URL_RE.finditer(text):
        url = m.group(0).rstrip(".,;:)")
        if "linkedin.com" not in url.lower():
            return url
    return ""


def _first_non_empty_line(text: str) -> str:
    for line in (text or "").split("\n"):
        if line.strip():
            return line.strip()
    return ""


def parse_personal_info(full_text: str, header_text: str) -> PersonalInfo:
    """
    Contact details from anywhere in the document; the name is the first
    non-empty line of the header region, taken as-is.
    """
    full_text = full_text or ""
    return PersonalInfo(
        full_name=_first_non_empty_line(header_text),
        email=_first_match(EMAIL_RE, full_text),
        phone=_first_match(PHONE_RE, full_text),
        linkedin=_first_match(LINKEDIN_RE, full_text),
        website=_first_website(full_text),
        address=_first_match(ADDRESS_RE, full_text),
    )


def split_title_company(line: str) -> Tuple[str, str]:
    """
    Split "Title at Company" / "Title, Company" / "Title | Company".
    Returns (line, "") when there is nothing to split on.
    """
    line = line.strip()
    m = TITLE_COMPANY_RE.match(line)
    if not m:
        return line, ""
    return m.group(1).strip(), m.group(2).strip()


def extract_date_range(text: str) -> Tuple[str, str]:
    """(start, end) exactly as written, or ("", "")."""
    m = DATE_RANGE_RE.search(text)
    if not m:
        return "", ""
    return m.group(1).strip(), m.group(2).strip()


def parse_experience(text: str) -> List[ExperienceEntry]:
    """
    One entry per blank-line separated block.

    Line 1: title and company. Line 2: date range, if it holds one.
    Whatever is left is the description.
    """
    if not isinstance(text, str):
        return []

    entries: List[ExperienceEntry] = []
    for block in split_blocks(text):
        lines = block.split("\n")
        title, company = split_title_company(lines[0])

        start_date, end_date = "", ""
        consumed = 1
        if len(lines) > 1:
            start_date, end_date = extract_date_range(lines[1])
            if start_date:
                consumed = 2

        entries.append(ExperienceEntry(
            title=title,
            company=company,
            start_date=start_date,
            end_date=end_date,
            description="\n".join(lines[consumed:]).strip(),
        ))
        logger.debug(f"  -> Found experience entry: company='{company}', title='{title}'")

    return entries


def _clean_skill(token: str) -> str:
    return BULLET_RE.sub("", token).strip()


def parse_skills(text: str) -> List[str]:
    """
    Skills as a list, in source order, duplicates kept.

    Lists are split on commas, bullets, pipes, asterisks, plus signs and line
    breaks. A long section that yields fewer than three items is treated as
    prose and tokenized on whitespace instead.
    """
    if not isinstance(text, str) or not text.strip():
        return []

    skills = [_clean_skill(token) for token in SKILL_DELIMITER_RE.split(text)]
    skills = [s for s in skills if s]

    if len(skills) < MIN_SKILL_LIST:
        words = text.split()
        if len(words) > PROSE_MIN_WORDS:
            tokens = [word.rstrip(TRAILING_PUNCTUATION) for word in words]
            skills = [token for token in tokens if len(token) > 2]

    return skills
