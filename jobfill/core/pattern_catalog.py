"""
Trigger phrases for form-field classification.

Catalog layout: category -> subcategory -> tuple of lower-case trigger phrases.

Iteration order matters: the classifier keeps the first (category, subcategory)
that reaches the best score, so more specific subcategories come before the
generic ones they overlap with (firstName before name, currentJob before
company and title). No phrase is listed under two subcategories.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Tuple


Catalog = Mapping[str, Mapping[str, Tuple[str, ...]]]

CATEGORIES = ("personal", "education", "experience", "skills", "other")


def _freeze(table: dict) -> Catalog:
    return MappingProxyType({
        category: MappingProxyType({sub: tuple(phrases) for sub, phrases in subs.items()})
        for category, subs in table.items()
    })


PATTERN_CATALOG: Catalog = _freeze({
    "personal": {
        "firstName": ["first name", "firstname", "first_name", "fname", "given name", "given_name"],
        "lastName": ["last name", "lastname", "last_name", "lname", "family name", "surname"],
        "middleName": ["middle name", "middlename", "middle_name", "mname", "middle initial"],
        "name": ["name", "full name", "full_name"],
        "email": ["email", "e-mail", "email address", "e-mail address"],
        "phone": ["phone", "telephone", "mobile", "cell", "phone number"],
        "address": ["address", "street", "street address", "address line", "mailing address"],
        "city": ["city", "town", "municipality"],
        "state": ["state", "province", "region"],
        "zipCode": ["zip", "zipcode", "zip code", "postal", "postal code"],
        "country": ["country", "country of residence"],
    },
    "education": {
        "school": ["school", "university", "college", "institution", "academy", "educational institution"],
        "degree": ["degree", "degree type", "diploma", "qualification"],
        "fieldOfStudy": ["field of study", "major", "specialization", "concentration", "discipline"],
        "graduationDate": ["graduation date", "graduation", "graduated", "completion date", "completion"],
        "gpa": ["gpa", "grade point average", "grade average", "academic average"],
    },
    "experience": {
        "currentJob": ["current job", "current position", "current employer", "present employer"],
        "company": ["company", "employer", "organization", "firm", "business"],
        "title": ["job title", "title", "position", "role", "designation"],
        "startDate": ["start date", "from date", "employment start", "date from"],
        "endDate": ["end date", "to date", "employment end", "date to"],
        "description": ["description", "job description", "responsibilities", "duties"],
    },
    "skills": {
        "skills": ["skills", "abilities", "competencies", "expertise", "proficiencies"],
        "languages": ["languages", "spoken languages", "programming languages"],
        "certifications": ["certifications", "certificates", "credentials", "licenses"],
    },
    "other": {
        "salary": ["salary", "compensation", "pay", "wage", "remuneration", "expected salary"],
        "startDate": ["availability", "available from", "when can you start"],
        "relocation": ["relocation", "willing to relocate", "can relocate", "relocate"],
        "citizenship": ["citizenship", "citizen", "work authorization", "authorized to work", "visa"],
        "linkedin": ["linkedin", "linkedin url", "linkedin profile"],
        "website": ["website", "personal website", "portfolio", "blog"],
        "github": ["github", "github url", "github profile", "gitlab"],
        "twitter": ["twitter", "twitter url", "twitter handle", "x.com"],
        "reference": ["reference", "references", "referrer", "referral"],
        "coverLetter": ["cover letter", "cover_letter", "coverletter", "letter of interest"],
        "resume": ["resume", "cv", "curriculum vitae", "upload resume", "upload cv"],
    },
})


def iter_catalog(catalog: Catalog = PATTERN_CATALOG) -> Iterator[Tuple[str, str, Tuple[str, ...]]]:
    """Yield (category, subcategory, phrases) in tie-break order."""
    for category, subcategories in catalog.items():
        for subcategory, phrases in subcategories.items():
            yield category, subcategory, phrases


def extend_catalog(
    catalog: Catalog,
    category: str,
    subcategory: str,
    phrases: Iterable[str],
) -> Catalog:
    """
    Return a new catalog with extra trigger phrases for one subcategory.

    The input catalog is left untouched. Phrases are lower-cased and trimmed;
    ones already present for the subcategory are skipped. New subcategories are
    appended after the existing ones of their category.
    """
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category {category!r}; expected one of {', '.join(CATEGORIES)}")

    table = {cat: {sub: list(p) for sub, p in subs.items()} for cat, subs in catalog.items()}
    existing = table.setdefault(category, {}).setdefault(subcategory, [])
    for phrase in phrases:
        phrase = phrase.strip().lower()
        if phrase and phrase not in existing:
            existing.append(phrase)
    return _freeze(table)
