from __future__ import annotations

import logging
import re
from io import BytesIO

import pdfplumber
from docx import Document

from roadmap.catalog import known_skills
from roadmap.models import Skill

logger = logging.getLogger("roadmap.parsers")

# Fragments too generic to count as evidence of a skill on their own.
GENERIC_FRAGMENTS = {"cloud", "unit", "integration", "ci", "cd", "ui", "ux", "bash"}
MAX_SEEDED_PROFICIENCY = 3


def _read_pdf(file_bytes: bytes) -> str:
    text = []
    with pdfplumber.open(BytesIO(file_bytes)) as pdf:
        for page in pdf.pages:
            text.append(page.extract_text() or "")
    return "\n".join(text)


def _read_docx(file_bytes: bytes) -> str:
    doc = Document(BytesIO(file_bytes))
    return "\n".join(p.text for p in doc.paragraphs if p.text)


def _read_txt(file_bytes: bytes) -> str:
    return file_bytes.decode("utf-8", errors="ignore")


def skill_aliases(name: str) -> list[str]:
    """Lower-case phrases that count as a mention of ``name``.

    "React/Vue/Angular" is mentioned by any of its parts, "Scripting (Bash/Python)"
    by "scripting" or "python".
    """
    lowered = name.lower()
    aliases = [lowered]
    for part in re.split(r"[/,()&]", lowered):
        part = part.strip()
        if len(part) >= 2 and part not in GENERIC_FRAGMENTS and part not in aliases:
            aliases.append(part)
    return aliases


def _count_mentions(text: str, alias: str) -> int:
    pattern = r"(?<![\w])" + re.escape(alias) + r"(?![\w])"
    return len(re.findall(pattern, text))


def extract_skills(text: str) -> list[Skill]:
    lowered = text.lower()
    found: list[Skill] = []
    for skill in known_skills().values():
        hits = sum(_count_mentions(lowered, alias) for alias in skill_aliases(skill.name))
        if hits == 0:
            continue
        found.append(
            Skill(
                name=skill.name,
                category=skill.category,
                proficiency=min(MAX_SEEDED_PROFICIENCY, 1 + hits),
            )
        )
    found.sort(key=lambda s: (-s.proficiency, s.name))
    return found


def extract_skill_signals(file) -> dict[str, list[Skill] | list[str] | str]:
    empty = {"skills": [], "keywords": [], "text_excerpt": ""}
    if file is None:
        return empty

    try:
        file_bytes = file.read()
    except Exception:
        logger.warning("Could not read uploaded resume", exc_info=True)
        return empty

    filename = (getattr(file, "name", "") or "").lower()
    try:
        if filename.endswith(".pdf"):
            text = _read_pdf(file_bytes)
        elif filename.endswith(".docx"):
            text = _read_docx(file_bytes)
        else:
            text = _read_txt(file_bytes)
    except Exception:
        logger.warning("Could not extract text from %s", filename or "upload", exc_info=True)
        text = ""

    if not text.strip():
        return empty

    skills = extract_skills(text)
    return {
        "skills": skills,
        "keywords": [s.name for s in skills][:15],
        "text_excerpt": text[:350],
    }
