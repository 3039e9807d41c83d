"""
Line classification for the resume section scanner.

A line is classified against the current section (and, inside EXPERIENCE,
the draft that is currently open) by walking an ordered rule table: the
first rule that returns a role wins. Section header detection always runs
first; the remaining rules depend on which section we are in.

EXPERIENCE precedence:
  1. section header / section end
  2. structured job line      "Acme Corp — Senior Developer | Jan 2019 – Dec 2021"
     inline job line          "Software Engineer at Google (2020-2023)"
  3. bullet                   "• Led team"
  4. pure date line           "March 2020 - Present"   (< 30 chars, draft has no start)
  5. company line             "Acme Technologies Inc"  (draft has no company)
  6. job title / new header   "Senior Software Engineer"
  7. plain
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from app.core.field_parsers import (
    DateRange,
    has_date_range,
    has_degree,
    find_graduation_date,
    is_bullet,
    is_institution_line,
    parse_date_range,
    strip_date_ranges,
)
from app.core.schemas import WorkExperience


class Section(str, Enum):
    NONE = "none"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    OTHER = "other"


class RoleKind(str, Enum):
    SECTION_HEADER = "section_header"
    JOB_HEADER = "job_header"
    DATE_RANGE = "date_range"
    BULLET = "bullet"
    COMPANY = "company"
    DEGREE = "degree"
    PLAIN = "plain"


@dataclass(frozen=True)
class LineRole:
    kind: RoleKind
    # SECTION_HEADER: the section being entered (NONE means "current section ends here")
    section: Optional[Section] = None
    # JOB_HEADER fields; structured=True when all three came from one job line
    company: str = ""
    position: str = ""
    dates: Optional[DateRange] = None
    structured: bool = False


PLAIN = LineRole(RoleKind.PLAIN)
BULLET = LineRole(RoleKind.BULLET)


# ============================================================================
# Section headers
# ============================================================================

def _contains_keyword(text: str, keywords: Tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


EXPERIENCE_KEYWORDS = (
    "experience", "employment", "work history", "professional experience",
    "work", "career", "professional background",
)
EDUCATION_KEYWORDS = ("education",)
SKILLS_KEYWORDS = ("skills",)
OTHER_KEYWORDS = ("projects", "certifications", "awards", "publications")

# Entry order when no section is open
SECTION_ENTRY: List[Tuple[Section, Tuple[str, ...]]] = [
    (Section.EXPERIENCE, EXPERIENCE_KEYWORDS),
    (Section.EDUCATION, EDUCATION_KEYWORDS),
    (Section.SKILLS, SKILLS_KEYWORDS),
    (Section.OTHER, OTHER_KEYWORDS),
]

# Keywords that end an open section. The loose experience words ("work",
# "career") only open a section from NONE, they never close another one.
SECTION_TERMINATORS = {
    Section.EXPERIENCE: ("education", "skills", *OTHER_KEYWORDS),
    Section.EDUCATION: ("experience", "employment", "work history", "skills", *OTHER_KEYWORDS),
    Section.SKILLS: ("experience", "employment", "work history", "education", *OTHER_KEYWORDS),
    Section.OTHER: ("experience", "employment", "work history", "education", "skills", *OTHER_KEYWORDS),
}


def detect_section_header(text: str, section: Section) -> Optional[Section]:
    """
    Return the section a header line switches to, Section.NONE when the line
    only closes the current section, or None when it is not a header at all.
    """
    if section == Section.NONE:
        for target, keywords in SECTION_ENTRY:
            if _contains_keyword(text, keywords):
                return target
        return None

    if _contains_keyword(text, SECTION_TERMINATORS[section]):
        return Section.NONE
    return None


# ============================================================================
# EXPERIENCE rules
# ============================================================================

JOB_LINE_RE = re.compile(r"^(.+?)\s*[—–-]\s*(.+?)\s*\|\s*(.+)$")
INLINE_JOB_RE = re.compile(r"^(.+?)\s+at\s+(.+?)\s*\((.+?)\)$")
COMPANY_RE = re.compile(
    r"\b(?:inc|llc|corp|corporation|ltd|limited|group|systems|solutions|technologies|consulting"
    r"|services|bank|financial|insurance|healthcare|medical|hospital|clinic"
    r"|university|college|school|institute)\b",
    re.IGNORECASE,
)
JOB_TITLE_RE = re.compile(
    r"\b(?:engineer|developer|manager|director|analyst|specialist|coordinator|assistant|lead"
    r"|senior|junior|consultant|architect|designer|programmer|administrator|supervisor"
    r"|executive|officer)\b",
    re.IGNORECASE,
)
PURE_DATE_MAX_LEN = 30


def is_pure_date_line(text: str) -> bool:
    return has_date_range(text) and len(text) < PURE_DATE_MAX_LEN


def is_company_line(text: str) -> bool:
    return COMPANY_RE.search(text) is not None


def _structured_job_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    if is_bullet(text):
        return None
    m = JOB_LINE_RE.match(text)
    if not m:
        return None

    date_text = m.group(3).strip()
    dates = parse_date_range(date_text) or DateRange(date_text, "", False)
    return LineRole(
        RoleKind.JOB_HEADER,
        company=m.group(1).strip(),
        position=m.group(2).strip(),
        dates=dates,
        structured=True,
    )


def _inline_job_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    # "Software Engineer at Google (2020-2023)"
    if is_bullet(text):
        return None
    m = INLINE_JOB_RE.match(text)
    if not m:
        return None

    date_text = m.group(3).strip()
    return LineRole(
        RoleKind.JOB_HEADER,
        company=m.group(2).strip(),
        position=m.group(1).strip(),
        dates=parse_date_range(date_text) or DateRange(date_text, "", False),
        structured=True,
    )


def _bullet_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    return BULLET if is_bullet(text) else None


def _pure_date_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    if draft is None or draft.start_date or not is_pure_date_line(text):
        return None
    return LineRole(RoleKind.DATE_RANGE, dates=parse_date_range(text))


def _company_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    if draft is None or draft.company or not is_company_line(text):
        return None
    return LineRole(RoleKind.COMPANY, company=text)


def _job_title_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    looks_like_header = (
        5 < len(text) < 80
        and "@" not in text
        and not is_bullet(text)
        and not is_pure_date_line(text)
        and not is_company_line(text)
    )
    if not (JOB_TITLE_RE.search(text) or looks_like_header):
        return None
    return LineRole(
        RoleKind.JOB_HEADER,
        position=strip_date_ranges(text),
        dates=parse_date_range(text),
    )


Rule = Callable[[str, Optional[WorkExperience]], Optional[LineRole]]

EXPERIENCE_RULES: List[Rule] = [
    _structured_job_rule,
    _inline_job_rule,
    _bullet_rule,
    _pure_date_rule,
    _company_rule,
    _job_title_rule,
]


# ============================================================================
# EDUCATION rules
# ============================================================================

def _graduation_date_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    if is_bullet(text) or not find_graduation_date(text):
        return None
    return LineRole(RoleKind.DATE_RANGE, dates=parse_date_range(text))


def _degree_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    return LineRole(RoleKind.DEGREE) if has_degree(text) else None


def _institution_rule(text: str, draft: Optional[WorkExperience]) -> Optional[LineRole]:
    return LineRole(RoleKind.COMPANY, company=text) if is_institution_line(text) else None


EDUCATION_RULES: List[Rule] = [
    _graduation_date_rule,
    _degree_rule,
    _bullet_rule,
    _institution_rule,
]

SECTION_RULES = {
    Section.EXPERIENCE: EXPERIENCE_RULES,
    Section.EDUCATION: EDUCATION_RULES,
}


def classify(text: str, section: Section, draft: Optional[WorkExperience] = None) -> LineRole:
    """
    Classify one normalized line. Never raises; anything unrecognized is PLAIN.

    `draft` is the work experience currently being assembled (EXPERIENCE only);
    the pure-date and company rules only fire while it is missing those fields.
    """
    target = detect_section_header(text, section)
    if target is not None:
        return LineRole(RoleKind.SECTION_HEADER, section=target)

    for rule in SECTION_RULES.get(section, ()):
        role = rule(text, draft)
        if role is not None:
            return role
    return PLAIN
