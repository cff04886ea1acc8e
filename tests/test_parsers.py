from __future__ import annotations

from io import BytesIO

from roadmap.parsers import extract_skill_signals, extract_skills, skill_aliases


class BadFile:
    name = "broken.pdf"

    def read(self):
        raise ValueError("cannot read")


def test_parser_fallback_on_malformed_file():
    result = extract_skill_signals(BadFile())
    assert result["skills"] == []
    assert result["keywords"] == []


def test_parser_fallback_on_corrupt_pdf():
    payload = BytesIO(b"not really a pdf")
    payload.name = "resume.pdf"
    result = extract_skill_signals(payload)
    assert result["skills"] == []


def test_parser_handles_txt():
    payload = BytesIO(
        b"Built Python services and SQL reports. Python daily; Docker for deploys, "
        b"strong communication with stakeholders."
    )
    payload.name = "resume.txt"
    result = extract_skill_signals(payload)
    names = {s.name for s in result["skills"]}
    assert {"Python", "SQL", "Docker", "Communication"} <= names
    assert all(1 <= s.proficiency <= 3 for s in result["skills"])
    assert result["text_excerpt"].startswith("Built Python")


def test_repeated_mentions_raise_seeded_level():
    skills = {s.name: s for s in extract_skills("python python python and sql")}
    assert skills["Python"].proficiency == 3
    assert skills["SQL"].proficiency == 2


def test_aliases_split_compound_names():
    assert skill_aliases("React/Vue/Angular") == ["react/vue/angular", "react", "vue", "angular"]
    assert "bash" not in skill_aliases("Scripting (Bash/Python)")
    assert "python" in skill_aliases("Scripting (Bash/Python)")


def test_mentions_need_word_boundaries():
    names = {s.name for s in extract_skills("javascripting is not a skill; sparkling water")}
    assert "Spark" not in names
