"""Tests for résumé section splitting."""

from jobfill.core.line_parser import match_section_header, normalize_text, split_sections


RESUME = """Jane Doe
jane@example.com

Experience
Software Engineer at Acme Corp
Jan 2020 - Present

Education:
B.S. Computer Science, State University
2014 - 2018

SKILLS
Python, Go, Rust
"""


def test_split_into_canonical_sections():
    sections = split_sections(RESUME)

    assert sections == {
        "header": "Jane Doe\njane@example.com",
        "experience": "Software Engineer at Acme Corp\nJan 2020 - Present",
        "education": "B.S. Computer Science, State University\n2014 - 2018",
        "skills": "Python, Go, Rust",
    }


def test_round_trip_on_normalized_text():
    sections = split_sections(RESUME)
    rebuilt = "\n\n".join(
        [sections["header"]] + [f"{name}\n{text}" for name, text in sections.items() if name != "header"]
    )
    assert split_sections(rebuilt) == sections


def test_no_headers_means_everything_is_header():
    text = "Jane Doe\nSome text without sections"
    assert split_sections(text) == {"header": text}


def test_header_on_first_line():
    sections = split_sections("Skills\nPython, Go")
    assert sections == {"header": "", "skills": "Python, Go"}


def test_repeated_section_last_wins():
    text = "Skills\nCOBOL\n\nExperience\nEngineer at Acme\n\nTechnical Skills\nPython, Go"
    sections = split_sections(text)
    assert sections["skills"] == "Python, Go"
    assert sections["experience"] == "Engineer at Acme"


def test_empty_text():
    assert split_sections("") == {"header": ""}


class TestHeaderMatching:
    def test_synonyms(self):
        assert match_section_header("Work History") == "experience"
        assert match_section_header("Professional Experience") == "experience"
        assert match_section_header("Academic Background") == "education"
        assert match_section_header("Core Competencies") == "skills"
        assert match_section_header("Licenses") == "certifications"
        assert match_section_header("Career Objective") == "summary"
        assert match_section_header("Personal Projects") == "projects"
        assert match_section_header("Languages") == "languages"

    def test_case_whitespace_and_trailing_colon(self):
        assert match_section_header("  EDUCATION:  ") == "education"
        assert match_section_header("Skills :") == "skills"

    def test_header_must_be_the_whole_line(self):
        assert match_section_header("Experience at Acme") is None
        assert match_section_header("Skills: Python, Go") is None
        assert match_section_header("") is None


class TestNormalize:
    def test_line_endings(self):
        assert normalize_text("a\r\nb\rc") == "a\nb\nc"

    def test_blank_line_runs_collapse(self):
        assert normalize_text("a\r\n\r\n\r\n\nb") == "a\n\nb"
        assert normalize_text("a\n  \n\t\nb") == "a\n\nb"

    def test_trimmed(self):
        assert normalize_text("\n\n  Jane  \n\n") == "Jane"
