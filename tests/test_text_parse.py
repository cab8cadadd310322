"""End-to-end tests for parsing plain résumé text."""

import pytest

from jobfill.core import text_parser
from jobfill.core.errors import ResumeParseError
from jobfill.core.schemas import ResumeRecord
from jobfill.main import parse


RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567
https://www.linkedin.com/in/janedoe | https://janedoe.dev
123 Main St, Springfield, IL 62704

Summary
Backend engineer who likes boring technology.

Work Experience
Software Engineer at Acme Corp
Jan 2020 - Present
Built things.

Junior Developer, Initech
Jun 2017 - Dec 2019

Education
B.S. Computer Science, State University
2013 - 2017

Technical Skills
Python, Go, PostgreSQL, Docker
"""


def test_personal_info():
    info = parse(RESUME).personal_info

    assert info.full_name == "Jane Doe"
    assert info.email == "jane.doe@example.com"
    assert info.phone == "(555) 123-4567"
    assert info.linkedin == "https://www.linkedin.com/in/janedoe"
    assert info.website == "https://janedoe.dev"
    assert info.address == "123 Main St, Springfield, IL 62704"


def test_sections():
    record = parse(RESUME)

    assert [(e.title, e.company) for e in record.experience] == [
        ("Software Engineer", "Acme Corp"),
        ("Junior Developer", "Initech"),
    ]
    assert record.education[0].school == "State University"
    assert record.skills == ["Python", "Go", "PostgreSQL", "Docker"]
    assert record.raw_text == RESUME


def test_crlf_input():
    record = parse(RESUME.replace("\n", "\r\n"))
    assert record.experience[0].description == "Built things."
    assert record.personal_info.full_name == "Jane Doe"


def test_missing_sections_are_empty():
    record = parse("John Smith\njohn@example.com")

    assert record.personal_info.full_name == "John Smith"
    assert record.personal_info.phone == ""
    assert record.experience == []
    assert record.education == []
    assert record.skills == []


def test_contact_details_found_outside_header():
    record = parse("Skills\nPython, Go, Rust\n\nContact: someone@example.org")
    assert record.personal_info.email == "someone@example.org"
    assert record.personal_info.full_name == ""


def test_phone_formats():
    for raw in ("555-123-4567", "555.123.4567", "+1 555 123 4567", "(555)123-4567"):
        assert parse(f"Jane\n{raw}").personal_info.phone == raw


def test_website_skips_linkedin():
    record = parse("Jane\nhttps://linkedin.com/in/jane, https://github.com/jane.")
    assert record.personal_info.website == "https://github.com/jane"


def test_non_string_input_gives_empty_record():
    assert parse(None) == ResumeRecord()
    assert parse(b"Jane Doe") == ResumeRecord()
    assert parse(None).raw_text == ""


def test_internal_fault_raises_with_original_text(monkeypatch):
    def boom(text):
        raise RuntimeError("broken splitter")

    monkeypatch.setattr(text_parser, "split_sections", boom)

    with pytest.raises(ResumeParseError) as excinfo:
        parse("Jane Doe\nSkills\nPython")
    assert excinfo.value.original_text == "Jane Doe\nSkills\nPython"


def test_deterministic():
    assert parse(RESUME) == parse(RESUME)
