"""
Small, focused extractors used by the section scanner.

Date ranges, contact fields, skill lines and degree/GPA lines are each
recognized by a literal regex. Every pattern's accepted shapes are pinned
down in tests/test_field_parsers.py.
"""

import re
from typing import List, NamedTuple, Optional, Sequence, Tuple

from app.core.schemas import PersonalInfo, Skill
from app.core.text_normalization import Line


# ============================================================================
# Date ranges
# ============================================================================

MONTH = (
    r"(?:january|february|march|april|may|june|july|august|september|october|november|december"
    r"|jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\.?"
)
DASH = r"\s*[-–—−]\s*"
ONGOING = r"(?:present|current)"

# Month Year - Month Year | Month Year - Present | Year - Year | Year - Present
DATE_RANGE_RE = re.compile(
    rf"\b{MONTH}\s+\d{{4}}{DASH}{MONTH}\s+\d{{4}}\b"
    rf"|\b{MONTH}\s+\d{{4}}{DASH}{ONGOING}\b"
    rf"|\b\d{{4}}{DASH}\d{{4}}\b"
    rf"|\b\d{{4}}{DASH}{ONGOING}\b",
    re.IGNORECASE,
)
DASH_SPLIT_RE = re.compile(DASH)
ONGOING_TOKENS = {"present", "current"}


class DateRange(NamedTuple):
    start_date: str
    end_date: str
    current: bool


def has_date_range(text: str) -> bool:
    return DATE_RANGE_RE.search(text) is not None


def parse_date_range(text: str) -> Optional[DateRange]:
    """
    Find the first date range in text and split it on the dash.

    Casing of both sides is preserved. An ongoing end token ("Present",
    "current") yields current=True and an empty end date.

    Examples:
      'March 2020 - Present' -> DateRange('March 2020', '', True)
      'Jan 2019 – Dec 2021'  -> DateRange('Jan 2019', 'Dec 2021', False)
    """
    m = DATE_RANGE_RE.search(text)
    if not m:
        return None

    parts = DASH_SPLIT_RE.split(m.group(0).strip(), maxsplit=1)
    if len(parts) != 2:
        return None

    start, end = parts[0].strip(), parts[1].strip()
    if end.lower() in ONGOING_TOKENS:
        return DateRange(start, "", True)
    return DateRange(start, end, False)


def strip_date_ranges(text: str) -> str:
    """Remove every date range and any separator left dangling at either end."""
    t = DATE_RANGE_RE.sub(" ", text)
    t = re.sub(r"\(\s*\)", " ", t)
    t = " ".join(t.split())
    return t.strip(" |,;:-–—−")


# ============================================================================
# Contact fields
# ============================================================================

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(
    r"(?<!\w)(?:\+?1[-.\s]?)?(?:\(\d{3}\)|\d{3})[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"
)
# "City, ST" or "City Name, ST 12345" on a single line
LOCATION_RE = re.compile(r"\b([A-Z][A-Za-z.]*(?: [A-Z][A-Za-z.]*)*, [A-Z]{2}(?: \d{5})?)\b")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[A-Za-z0-9_-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[A-Za-z0-9_-]+", re.IGNORECASE)
URL_RE = re.compile(r"(?:https?://|www\.)[^\s,;|<>()]+", re.IGNORECASE)
SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def _to_https(url: str) -> str:
    return "https://" + SCHEME_RE.sub("", url)


def _looks_like_url(text: str) -> bool:
    t = text.lower()
    return "http://" in t or "https://" in t or "www." in t or "linkedin.com/" in t or "github.com/" in t


def _first(pattern: re.Pattern, text: str) -> str:
    m = pattern.search(text)
    return m.group(0) if m else ""


def extract_personal_website(text: str) -> str:
    for m in URL_RE.finditer(text):
        url = m.group(0).rstrip(".")
        low = url.lower()
        if "linkedin.com" in low or "github.com" in low:
            continue
        return _to_https(url)
    return ""


def extract_personal_info(text: str, lines: Sequence[Line]) -> PersonalInfo:
    """
    Build the personal info record with independent regexes over the whole text.

    The name is the first line that is neither an email nor a URL.
    """
    info = PersonalInfo()

    for line in lines:
        if "@" not in line.text and not _looks_like_url(line.text):
            info.name = line.text
            break

    info.email = _first(EMAIL_RE, text)
    info.phone = _first(PHONE_RE, text).strip()

    m = LOCATION_RE.search(text)
    if m:
        info.location = m.group(1).strip()

    linkedin = _first(LINKEDIN_RE, text)
    if linkedin:
        info.linkedin = _to_https(linkedin)
    github = _first(GITHUB_RE, text)
    if github:
        info.github = _to_https(github)

    info.website = extract_personal_website(text)
    return info


# ============================================================================
# Skills
# ============================================================================

BULLET_GLYPHS = ("●", "•", "*", "-")
LEADING_BULLET_RE = re.compile(r"^[●•*\-]\s*")
UNLABELED_SKILL_SPLIT_RE = re.compile(r"[,;|•·]")
SKILL_LEVEL_RE = re.compile(r"^(.*?)\s*\((beginner|intermediate|advanced|expert)\)$", re.IGNORECASE)


def is_bullet(text: str) -> bool:
    return text.startswith(BULLET_GLYPHS)


def strip_bullet(text: str) -> str:
    return LEADING_BULLET_RE.sub("", text).strip()


def skill_category_slug(label: str) -> str:
    """'Programming Languages' -> 'programming-languages'"""
    return re.sub(r"[^a-z0-9]", "-", label.strip().lower())


def _skill_from_token(token: str, category: str, display_category: str) -> Skill:
    name, level = token, None
    m = SKILL_LEVEL_RE.match(token)
    if m and m.group(1):
        name, level = m.group(1), m.group(2).lower()
    return Skill(name=name, category=category, display_category=display_category, level=level)


def parse_skill_line(text: str) -> List[Skill]:
    """
    Turn one skills-section line into skill records, preserving token order.

    'Technical: Python, Docker, AWS' gives three skills with category
    'technical' and display category 'Technical'. Lines without a label are
    split on common delimiters and default to the 'technical' category.
    """
    t = strip_bullet(text)
    if not t:
        return []

    label, sep, payload = t.partition(":")
    if sep and label.strip():
        display = label.strip()
        category = skill_category_slug(display)
        tokens = payload.split(",")
    else:
        display = ""
        category = "technical"
        tokens = UNLABELED_SKILL_SPLIT_RE.split(payload if sep else t)

    return [
        _skill_from_token(tok.strip(), category, display)
        for tok in tokens
        if tok.strip()
    ]


# ============================================================================
# Education
# ============================================================================

DEGREE_RE = re.compile(
    r"\b(?:bachelor|master|phd|doctorate|associate|diploma|certificate|mba)\b"
    r"|(?<![A-Za-z])(?:b\.s\.|m\.s\.|b\.a\.|m\.a\.|ph\.d\.)",
    re.IGNORECASE,
)
DEGREE_FIELD_SPLIT_RE = re.compile(r"\s+in\s+", re.IGNORECASE)
GPA_RE = re.compile(r"\bGPA\s*[:\-]?\s*(\d\.\d{1,2}(?:\s*/\s*\d(?:\.\d{1,2})?)?)", re.IGNORECASE)
GRADUATION_MONTH_YEAR_RE = re.compile(rf"\b{MONTH}\s+(?:19|20)\d{{2}}\b", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
INSTITUTION_RE = re.compile(r"\b(?:university|college|institute|school|academy)\b", re.IGNORECASE)


def has_degree(text: str) -> bool:
    return DEGREE_RE.search(text) is not None


def is_institution_line(text: str) -> bool:
    return INSTITUTION_RE.search(text) is not None


def find_graduation_date(text: str) -> str:
    """Month-name + year if present, else a bare 19xx/20xx year, else ''."""
    m = GRADUATION_MONTH_YEAR_RE.search(text) or YEAR_RE.search(text)
    return m.group(0) if m else ""


def strip_graduation_dates(text: str) -> str:
    t = strip_date_ranges(text)
    t = GRADUATION_MONTH_YEAR_RE.sub(" ", t)
    t = YEAR_RE.sub(" ", t)
    t = GPA_RE.sub(" ", t)
    t = " ".join(t.split())
    return t.strip(" |,;:-–—−")


def parse_degree_line(text: str) -> Tuple[str, str]:
    """
    Split 'Bachelor of Science in Computer Science' into (degree, field).

    Lines without ' in ' are returned whole as the degree with an empty field.
    """
    t = strip_graduation_dates(strip_bullet(text))
    parts = DEGREE_FIELD_SPLIT_RE.split(t, maxsplit=1)
    if len(parts) == 2:
        return parts[0].strip(" ,"), parts[1].strip(" ,")
    return t, ""


def find_gpa(text: str) -> str:
    m = GPA_RE.search(text)
    return re.sub(r"\s+", "", m.group(1)) if m else ""
