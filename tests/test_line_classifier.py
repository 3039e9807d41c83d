"""Rule precedence of the line classifier."""

import pytest

from app.core.field_parsers import DateRange
from app.core.line_classifier import RoleKind, Section, classify, detect_section_header
from app.core.schemas import WorkExperience


class TestSectionHeaders:

    @pytest.mark.parametrize("text,section", [
        ("PROFESSIONAL EXPERIENCE", Section.EXPERIENCE),
        ("Work History", Section.EXPERIENCE),
        ("Career", Section.EXPERIENCE),
        ("Education", Section.EDUCATION),
        ("TECHNICAL SKILLS", Section.SKILLS),
        ("Projects", Section.OTHER),
        ("Certifications", Section.OTHER),
    ])
    def test_entry_from_none(self, text, section):
        assert detect_section_header(text, Section.NONE) == section

    def test_keywords_match_inside_longer_headings(self):
        assert detect_section_header("EXPERIENCES", Section.NONE) == Section.EXPERIENCE
        assert detect_section_header("Educational Background", Section.NONE) == Section.EDUCATION
        assert detect_section_header("Educational Background", Section.EXPERIENCE) == Section.NONE
        assert detect_section_header("Key Projects", Section.EDUCATION) == Section.NONE

    @pytest.mark.parametrize("text", ["EDUCATION", "Skills", "Awards", "Publications"])
    def test_terminates_experience(self, text):
        assert detect_section_header(text, Section.EXPERIENCE) == Section.NONE

    def test_loose_experience_words_do_not_retrigger(self):
        assert detect_section_header("Career", Section.EXPERIENCE) is None
        assert detect_section_header("Work", Section.EXPERIENCE) is None

    def test_experience_terminates_education(self):
        assert detect_section_header("Employment", Section.EDUCATION) == Section.NONE

    def test_classify_wraps_header(self):
        role = classify("EDUCATION", Section.EXPERIENCE)
        assert role.kind == RoleKind.SECTION_HEADER
        assert role.section == Section.NONE


class TestExperienceRules:

    def test_structured_job_line(self):
        role = classify("Acme Corp — Senior Developer | Jan 2019 – Dec 2021", Section.EXPERIENCE)
        assert role.kind == RoleKind.JOB_HEADER
        assert role.structured
        assert role.company == "Acme Corp"
        assert role.position == "Senior Developer"
        assert role.dates == DateRange("Jan 2019", "Dec 2021", False)

    @pytest.mark.parametrize("dash", ["—", "–", "-"])
    def test_structured_job_line_dashes(self, dash):
        role = classify(f"Globex {dash} Analyst | March 2020 - Present", Section.EXPERIENCE)
        assert role.structured
        assert role.dates == DateRange("March 2020", "", True)

    def test_inline_job_line(self):
        role = classify("Software Engineer at Google (2020-2023)", Section.EXPERIENCE)
        assert role.kind == RoleKind.JOB_HEADER
        assert role.position == "Software Engineer"
        assert role.company == "Google"
        assert role.dates == DateRange("2020", "2023", False)

    def test_inline_job_line_keeps_unparsed_dates(self):
        role = classify("Data Analyst at Initech (Summer 2019)", Section.EXPERIENCE)
        assert role.company == "Initech"
        assert role.dates == DateRange("Summer 2019", "", False)

    def test_inline_shape_needs_parenthesised_dates(self):
        role = classify("Senior Engineer at Google", Section.EXPERIENCE)
        assert role.company == ""
        assert role.position == "Senior Engineer at Google"
        assert classify("• Presented at PyCon (2019)", Section.EXPERIENCE).kind == RoleKind.BULLET

    def test_structured_beats_job_title(self):
        # satisfies the job-title vocabulary too
        role = classify("Initech - Lead Engineer | 2015 - 2018", Section.EXPERIENCE)
        assert role.structured
        assert role.position == "Lead Engineer"

    def test_bullet(self):
        assert classify("• Led team", Section.EXPERIENCE).kind == RoleKind.BULLET
        assert classify("- Reduced costs - by a lot | 40%", Section.EXPERIENCE).kind == RoleKind.BULLET

    def test_pure_date_needs_open_draft_without_start(self):
        draft = WorkExperience(position="Engineer")
        role = classify("March 2020 - Present", Section.EXPERIENCE, draft)
        assert role.kind == RoleKind.DATE_RANGE
        assert role.dates == DateRange("March 2020", "", True)

        dated = WorkExperience(position="Engineer", start_date="2019")
        assert classify("March 2020 - Present", Section.EXPERIENCE, dated).kind == RoleKind.PLAIN
        assert classify("March 2020 - Present", Section.EXPERIENCE, None).kind == RoleKind.PLAIN

    def test_company_needs_draft_without_company(self):
        draft = WorkExperience(position="Senior Software Engineer")
        role = classify("Acme Technologies Inc", Section.EXPERIENCE, draft)
        assert role.kind == RoleKind.COMPANY
        assert role.company == "Acme Technologies Inc"

        staffed = WorkExperience(position="Engineer", company="Acme")
        assert classify("Acme Technologies Inc", Section.EXPERIENCE, staffed).kind == RoleKind.PLAIN

    def test_job_title_vocabulary(self):
        role = classify("Senior Software Engineer", Section.EXPERIENCE)
        assert role.kind == RoleKind.JOB_HEADER
        assert not role.structured
        assert role.position == "Senior Software Engineer"
        assert role.dates is None

    def test_job_title_with_embedded_dates(self):
        role = classify("Product Owner, Jan 2018 - Present", Section.EXPERIENCE)
        assert role.kind == RoleKind.JOB_HEADER
        assert role.position == "Product Owner"
        assert role.dates == DateRange("Jan 2018", "", True)

    @pytest.mark.parametrize("text", ["Dev", "jane@example.com reachable here", "x" * 80])
    def test_plain(self, text):
        assert classify(text, Section.EXPERIENCE).kind == RoleKind.PLAIN


class TestEducationRules:

    def test_date_line(self):
        role = classify("Harvard University | 2010 - 2014", Section.EDUCATION)
        assert role.kind == RoleKind.DATE_RANGE
        assert role.dates == DateRange("2010", "2014", False)

    def test_single_graduation_date(self):
        role = classify("May 2015", Section.EDUCATION)
        assert role.kind == RoleKind.DATE_RANGE
        assert role.dates is None

    def test_degree_and_institution(self):
        assert classify("Bachelor of Science in Physics", Section.EDUCATION).kind == RoleKind.DEGREE
        assert classify("Stanford University", Section.EDUCATION).kind == RoleKind.COMPANY

    def test_dated_bullet_is_not_a_date_line(self):
        assert classify("• Dean's List 2012", Section.EDUCATION).kind == RoleKind.BULLET


def test_skills_and_none_sections_have_no_structural_rules():
    assert classify("Python, SQL", Section.SKILLS).kind == RoleKind.PLAIN
    assert classify("Senior Software Engineer", Section.NONE).kind == RoleKind.PLAIN
