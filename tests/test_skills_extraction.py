"""Tests for skills extraction."""

from jobfill.core.line_parser import parse_skills


def test_comma_separated():
    assert parse_skills("Python, Go, Rust") == ["Python", "Go", "Rust"]


def test_bullets_one_per_line():
    assert parse_skills("• Python\n• JavaScript\n• SQL") == ["Python", "JavaScript", "SQL"]


def test_dash_bullets():
    assert parse_skills("- Python\n- JavaScript\n- PostgreSQL") == ["Python", "JavaScript", "PostgreSQL"]


def test_mixed_delimiters():
    text = "Python | Go | Rust\nDocker · Kubernetes\n* Terraform"
    assert parse_skills(text) == ["Python", "Go", "Rust", "Docker", "Kubernetes", "Terraform"]


def test_duplicates_preserved_in_order():
    assert parse_skills("Python, Go, Python") == ["Python", "Go", "Python"]


def test_short_list_kept():
    assert parse_skills("Python, Go") == ["Python", "Go"]


def test_prose_fallback():
    text = "I have extensive experience building backend services with Python and designing data pipelines."
    skills = parse_skills(text)

    assert "Python" in skills
    assert "pipelines" in skills
    assert "I" not in skills
    assert len(skills) == 12


def test_prose_fallback_drops_short_words():
    text = "I have strong skills in problem solving and communication across many teams"
    assert parse_skills(text) == [
        "have", "strong", "skills", "problem", "solving", "and", "communication", "across", "many", "teams",
    ]


def test_empty_and_invalid_input():
    assert parse_skills("") == []
    assert parse_skills("   \n ") == []
    assert parse_skills(None) == []
