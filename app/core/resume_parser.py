"""
Extraction engine entry point: plain resume text -> ParsedResume.

Pipeline:
  normalize_lines -> SectionScanner -> personal info regexes
  -> website enrichment (companies, institutions) -> professional summary
"""

import logging
from datetime import datetime
from typing import Optional

from app.core.enrichment import CompanyEnrichmentData, EducationEnrichmentData, Enricher
from app.core.field_parsers import extract_personal_info
from app.core.schemas import ParsedResume
from app.core.section_scanner import scan_sections
from app.core.summary import build_professional_summary
from app.core.text_normalization import normalize_lines

logger = logging.getLogger(__name__)


def parse_resume_text(
    text: str,
    company_enricher: Optional[Enricher] = None,
    education_enricher: Optional[Enricher] = None,
    now: Optional[datetime] = None,
) -> ParsedResume:
    """
    Parse extracted resume text.

    Without explicit enrichers only the known-mapping tables are consulted,
    so no network call is made. Raises TypeError for non-str input; nothing
    else escapes.
    """
    lines = normalize_lines(text)
    if not lines:
        logger.debug("No non-empty lines in input; returning empty result")
        return ParsedResume()

    scanned = scan_sections(lines)
    personal_info = extract_personal_info(text, lines)

    company_enricher = company_enricher or Enricher(CompanyEnrichmentData(), entity_type="company")
    education_enricher = education_enricher or Enricher(EducationEnrichmentData(), entity_type="institution")
    work_experience = company_enricher.enrich(scanned.work_experience)
    education = education_enricher.enrich(scanned.education)

    if work_experience:
        personal_info.summary = build_professional_summary(work_experience, now=now)

    logger.info(
        "Parsed resume: %d lines, %d experiences, %d education entries, %d skills",
        len(lines),
        len(work_experience),
        len(education),
        len(scanned.skills),
    )
    return ParsedResume(
        personal_info=personal_info,
        work_experience=work_experience,
        education=education,
        skills=scanned.skills,
        projects=[],
    )
