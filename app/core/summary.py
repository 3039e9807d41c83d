"""
Professional summary derived from extracted work experience.

Three inputs feed the paragraph: total years of experience, the most
frequent technologies across position titles and bullet descriptions, and a
primary role label taken from the most recent position title.
"""

import logging
import re
from collections import Counter
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from app.core.schemas import WorkExperience

logger = logging.getLogger(__name__)

# Order matters: it is the tie-break order when frequencies are equal.
TECH_KEYWORDS = [
    "C#", ".NET", "JavaScript", "TypeScript", "React", "Angular", "Vue", "Node.js",
    "Python", "Java", "C++", "AWS", "Azure", "Docker", "Kubernetes", "SQL", "MongoDB",
    "PostgreSQL", "MySQL", "Redis", "REST", "GraphQL", "Git", "Jenkins", "CI/CD",
    "Agile", "Scrum", "T-SQL", "DynamoDB", "OpenSearch", "Kafka", "SQS", "S3",
    "Ruby", "Cucumber", "Entity Framework", "ASP.NET", "HTML", "CSS", "SASS",
    "Webpack", "Babel", "Express", "Spring", "Django", "Flask", "Laravel",
]

SPECIAL_TECH_PATTERNS = {
    "C#": r"(?<!\w)C#(?!\w)",
    "C++": r"(?<!\w)C\+\+(?!\w)",
    ".NET": r"(?<!\w)\.NET\b",
    "ASP.NET": r"\bASP\.NET\b",
    "Node.js": r"\bNode\.js\b",
    "T-SQL": r"\bT-SQL\b",
    "CI/CD": r"\bCI/CD\b",
    # plain SQL must not count the tail of T-SQL / PL-SQL
    "SQL": r"(?<![\w-])SQL\b",
}

TOP_TECHNOLOGIES = 8
SUMMARY_TECHNOLOGIES = 5


def _tech_regex(tech: str) -> re.Pattern:
    pattern = SPECIAL_TECH_PATTERNS.get(tech, rf"\b{re.escape(tech)}\b")
    return re.compile(pattern, re.IGNORECASE)


TECH_PATTERNS: List[Tuple[str, re.Pattern]] = [(t, _tech_regex(t)) for t in TECH_KEYWORDS]


def extract_technologies(experiences: Sequence[WorkExperience], limit: int = TOP_TECHNOLOGIES) -> List[str]:
    """Technologies ranked by occurrence count, ties in vocabulary order."""
    counts: Counter = Counter()
    for exp in experiences:
        text = f"{exp.position} {' '.join(exp.description)}"
        for tech, pattern in TECH_PATTERNS:
            n = len(pattern.findall(text))
            if n:
                counts[tech] += n

    order = {tech: i for i, tech in enumerate(TECH_KEYWORDS)}
    ranked = sorted(counts, key=lambda t: (-counts[t], order[t]))
    for tech in ranked:
        logger.debug("Technology frequency: %s = %d", tech, counts[tech])
    return ranked[:limit]


# ============================================================================
# Years of experience
# ============================================================================

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
MONTH_YEAR_RE = re.compile(r"^([A-Za-z]+)\.?\s+(\d{4})$")
NUMERIC_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})\s*/\s*(\d{4})$")
YEAR_ONLY_RE = re.compile(r"^(\d{4})$")


def parse_month(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse a free-form resume date to (year, month).

    Accepts 'March 2020', 'Mar 2020', 'Sept. 2020', '03/2020' and '2020'
    (January assumed). Returns None for anything else.
    """
    t = (text or "").strip()

    m = MONTH_YEAR_RE.match(t)
    if m:
        month = MONTHS.get(m.group(1)[:3].lower())
        return (int(m.group(2)), month) if month else None

    m = NUMERIC_MONTH_YEAR_RE.match(t)
    if m:
        month = int(m.group(1))
        return (int(m.group(2)), month) if 1 <= month <= 12 else None

    m = YEAR_ONLY_RE.match(t)
    if m:
        return int(m.group(1)), 1
    return None


def calculate_years_of_experience(experiences: Sequence[WorkExperience], now: Optional[datetime] = None) -> int:
    now = now or datetime.now()
    today = (now.year, now.month)

    total_months = 0
    for exp in experiences:
        start = parse_month(exp.start_date)
        if start is None:
            continue
        if exp.current or not exp.end_date:
            end = today
        else:
            end = parse_month(exp.end_date)
            if end is None:
                continue
        months = (end[0] - start[0]) * 12 + (end[1] - start[1])
        total_months += max(months, 0)

    return total_months // 12


ROLE_RULES = [
    ("senior", "Senior Software Engineer"),
    ("lead", "Lead Developer"),
    ("architect", "Software Architect"),
    ("engineer", "Software Engineer"),
    ("developer", "Software Developer"),
]
DEFAULT_ROLE = "Technology Professional"


def determine_primary_role(experiences: Sequence[WorkExperience]) -> str:
    """Role label from the most recent (first listed) position title."""
    if not experiences:
        return DEFAULT_ROLE
    title = experiences[0].position.lower()
    for keyword, role in ROLE_RULES:
        if keyword in title:
            return role
    return DEFAULT_ROLE


def build_professional_summary(experiences: Sequence[WorkExperience], now: Optional[datetime] = None) -> str:
    """
    One-paragraph summary, or '' when there is no work experience.

    e.g. 'Senior Software Engineer with 6+ years of experience specializing in
    Python, AWS and other technologies. Proven track record in ...'
    """
    if not experiences:
        return ""

    years = calculate_years_of_experience(experiences, now=now)
    technologies = extract_technologies(experiences)
    role = determine_primary_role(experiences)

    summary = f"{role} with {years}+ years of experience" if years > 0 else f"{role} with experience"
    if technologies:
        summary += f" specializing in {', '.join(technologies[:SUMMARY_TECHNOLOGIES])}"
        if len(technologies) > SUMMARY_TECHNOLOGIES:
            summary += " and other technologies"
    summary += ". Proven track record in full-stack development, system architecture, and delivering scalable solutions."

    logger.debug("Generated professional summary: %s", summary)
    return summary
