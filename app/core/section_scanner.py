"""
Single forward pass over resume lines.

The scanner keeps the current section, at most one open work-experience
draft, at most one open education draft (plus one pending degree and one
pending institution line seen before that draft's date line), and the
accumulated results. It never looks back.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from app.core.field_parsers import (
    DateRange,
    find_gpa,
    find_graduation_date,
    has_degree,
    is_institution_line,
    parse_degree_line,
    parse_skill_line,
    strip_bullet,
    strip_graduation_dates,
)
from app.core.line_classifier import LineRole, RoleKind, Section, classify
from app.core.schemas import Education, Skill, WorkExperience
from app.core.text_normalization import Line

logger = logging.getLogger(__name__)

HONOR_KEYWORDS = ("honors", "honours", "dean's list", "cum laude", "scholarship", "award")
COURSEWORK_PREFIXES = ("relevant coursework", "coursework")


@dataclass
class ScanResult:
    work_experience: List[WorkExperience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)


def is_valid_work_experience(exp: WorkExperience) -> bool:
    """At least one of position / company / start date must carry real content."""
    return len(exp.position) > 2 or len(exp.company) > 2 or len(exp.start_date) > 0


def _apply_dates(record, dates: Optional[DateRange]) -> None:
    if dates is None:
        return
    record.start_date = dates.start_date
    record.end_date = dates.end_date
    if isinstance(record, WorkExperience):
        record.current = dates.current


class SectionScanner:
    """Stateful line scanner. `scan()` resets all state, so an instance can be reused."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.section = Section.NONE
        self.result = ScanResult()
        self._job: Optional[WorkExperience] = None
        self._edu: Optional[Education] = None
        self._pending_degree: Optional[str] = None
        self._pending_institution: Optional[str] = None

    def scan(self, lines: Sequence[Line]) -> ScanResult:
        self._reset()
        for line in lines:
            self._consume(line)
        self._close_section()

        logger.debug(
            "Scan complete: %d experiences, %d education entries, %d skills",
            len(self.result.work_experience),
            len(self.result.education),
            len(self.result.skills),
        )
        return self.result

    # ------------------------------------------------------------------
    # dispatch
    # ------------------------------------------------------------------

    def _consume(self, line: Line) -> None:
        role = classify(line.text, self.section, self._job)

        if role.kind == RoleKind.SECTION_HEADER:
            self._switch_section(line, role)
            return

        if self.section == Section.EXPERIENCE:
            self._on_experience_line(line, role)
        elif self.section == Section.EDUCATION:
            self._on_education_line(line, role)
        elif self.section == Section.SKILLS:
            self.result.skills.extend(parse_skill_line(line.text))

    def _switch_section(self, line: Line, role: LineRole) -> None:
        self._close_section()

        if role.section == Section.NONE:
            logger.debug("Line %d: '%s' ends %s section", line.index, line.text, self.section.value)
            self.section = Section.NONE
            # the terminating line is not content; it may still open the next section
            role = classify(line.text, Section.NONE)
            if role.kind != RoleKind.SECTION_HEADER:
                return

        logger.debug("Line %d: '%s' -> %s section", line.index, line.text, role.section.value)
        self.section = role.section

        if self.section == Section.SKILLS:
            # "Skills: Python, SQL" carries its own payload
            _, sep, payload = line.text.partition(":")
            if sep and payload.strip():
                self.result.skills.extend(parse_skill_line(line.text))

    def _close_section(self) -> None:
        self._flush_job()
        self._flush_education()
        self._pending_degree = None
        self._pending_institution = None

    # ------------------------------------------------------------------
    # EXPERIENCE
    # ------------------------------------------------------------------

    def _on_experience_line(self, line: Line, role: LineRole) -> None:
        if role.kind == RoleKind.JOB_HEADER:
            self._flush_job()
            self._job = WorkExperience(company=role.company, position=role.position)
            _apply_dates(self._job, role.dates)
            logger.debug(
                "Line %d: opened %s job draft position='%s' company='%s'",
                line.index,
                "structured" if role.structured else "heuristic",
                self._job.position,
                self._job.company,
            )
            return

        if self._job is None:
            return

        if role.kind == RoleKind.BULLET:
            bullet = strip_bullet(line.text)
            if bullet:
                self._job.description.append(bullet)
        elif role.kind == RoleKind.DATE_RANGE:
            _apply_dates(self._job, role.dates)
        elif role.kind == RoleKind.COMPANY:
            self._job.company = role.company

    def _flush_job(self) -> None:
        job, self._job = self._job, None
        if job is None:
            return
        if not is_valid_work_experience(job):
            logger.debug("Discarding empty job draft: %r", job.position)
            return
        job.id = f"exp_{len(self.result.work_experience) + 1}"
        self.result.work_experience.append(job)
        logger.debug("Emitted %s: '%s' at '%s'", job.id, job.position, job.company)

    # ------------------------------------------------------------------
    # EDUCATION
    # ------------------------------------------------------------------

    def _on_education_line(self, line: Line, role: LineRole) -> None:
        text = line.text

        if role.kind == RoleKind.DATE_RANGE:
            self._open_education(text, role.dates)
            return

        edu = self._edu
        if role.kind == RoleKind.DEGREE:
            if edu is not None and not edu.degree:
                edu.degree, edu.field = parse_degree_line(text)
            else:
                self._pending_degree = text
        elif role.kind == RoleKind.COMPANY:
            if edu is not None and not edu.institution:
                edu.institution = strip_graduation_dates(text)
            else:
                self._pending_institution = text
        elif edu is not None:
            self._add_education_detail(edu, strip_bullet(text))

        if edu is not None and not edu.gpa:
            edu.gpa = find_gpa(text)

    def _open_education(self, text: str, dates: Optional[DateRange]) -> None:
        self._flush_education()

        edu = Education(gpa=find_gpa(text))
        if dates is not None:
            _apply_dates(edu, dates)
        else:
            edu.end_date = find_graduation_date(text)

        remainder = strip_graduation_dates(text)
        if remainder and has_degree(remainder) and not is_institution_line(remainder):
            edu.degree, edu.field = parse_degree_line(remainder)
            edu.institution = strip_graduation_dates(self._pending_institution or "")
        else:
            edu.institution = remainder or strip_graduation_dates(self._pending_institution or "")
            if self._pending_degree:
                edu.degree, edu.field = parse_degree_line(self._pending_degree)

        self._pending_degree = None
        self._pending_institution = None
        self._edu = edu

    def _add_education_detail(self, edu: Education, text: str) -> None:
        low = text.lower()
        for prefix in COURSEWORK_PREFIXES:
            if low.startswith(prefix):
                _, _, courses = text.partition(":")
                edu.coursework.extend(c.strip() for c in courses.split(",") if c.strip())
                return
        if any(k in low for k in HONOR_KEYWORDS):
            edu.honors.append(text)

    def _flush_education(self) -> None:
        edu, self._edu = self._edu, None
        if edu is None:
            return
        edu.id = f"edu_{len(self.result.education) + 1}"
        self.result.education.append(edu)
        logger.debug("Emitted %s: '%s' / '%s'", edu.id, edu.institution, edu.degree)


def scan_sections(lines: Sequence[Line]) -> ScanResult:
    return SectionScanner().scan(lines)
