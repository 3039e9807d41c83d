"""Portfolio merge and JSON persistence."""

import json
from datetime import datetime

import pytest

from app.core.errors import PortfolioStorageError, PortfolioValidationError
from app.core.portfolio_service import PortfolioService, validate_portfolio_document
from app.core.schemas import (
    Education,
    ParsedResume,
    PersonalInfo,
    Portfolio,
    Project,
    Skill,
    WorkExperience,
)


def _parsed(**personal):
    return ParsedResume(
        personal_info=PersonalInfo(**personal),
        work_experience=[
            WorkExperience(company="Acme", position="Engineer"),
            WorkExperience(id="exp_9", company="Globex", position="Analyst"),
        ],
        education=[Education(institution="MIT")],
        skills=[Skill(name="Python")],
        projects=[Project(name="Portfolio site")],
    )


def test_missing_file_means_no_portfolio(tmp_path):
    assert PortfolioService(tmp_path / "portfolio.json").get_portfolio() is None


def test_update_from_resume_fills_ids_and_timestamp(tmp_path):
    service = PortfolioService(tmp_path / "portfolio.json")
    portfolio = service.update_from_resume(_parsed(name="Jane Doe"))

    assert [e.id for e in portfolio.work_experience] == ["exp_1", "exp_9"]
    assert portfolio.education[0].id == "edu_1"
    assert portfolio.projects[0].id == "proj_1"
    stamp = datetime.fromisoformat(portfolio.last_updated)
    assert stamp.utcoffset().total_seconds() == 0


def test_personal_info_keeps_stored_values_for_empty_fields(tmp_path):
    service = PortfolioService(tmp_path / "portfolio.json")
    service.update_from_resume(_parsed(
        name="Jane Doe",
        github="https://github.com/janedoe",
        profile_photo="https://cdn.example/jane.png",
    ))

    merged = service.update_from_resume(_parsed(name="Jane Q. Doe", email="jane@example.com"))

    assert merged.personal_info.name == "Jane Q. Doe"
    assert merged.personal_info.email == "jane@example.com"
    assert merged.personal_info.github == "https://github.com/janedoe"
    assert merged.personal_info.profile_photo == "https://cdn.example/jane.png"


def test_record_lists_are_replaced(tmp_path):
    service = PortfolioService(tmp_path / "portfolio.json")
    service.update_from_resume(_parsed())

    merged = service.update_from_resume(ParsedResume())
    assert merged.work_experience == []
    assert merged.skills == []
    assert service.get_portfolio().education == []


def test_saved_file_is_pretty_camel_case_json(tmp_path):
    path = tmp_path / "nested" / "dir" / "portfolio.json"
    PortfolioService(path).update_from_resume(_parsed(name="Jane Doe"))

    raw = path.read_text(encoding="utf-8")
    assert raw.startswith('{\n  "personalInfo": {')
    doc = json.loads(raw)
    assert set(doc) == {"personalInfo", "workExperience", "education", "skills", "projects", "lastUpdated"}
    assert doc["workExperience"][0]["startDate"] == ""
    assert "displayCategory" in doc["skills"][0]


def test_round_trip(tmp_path):
    service = PortfolioService(tmp_path / "portfolio.json")
    saved = service.update_from_resume(_parsed(name="Jane Doe"))
    assert service.get_portfolio() == saved


def test_corrupt_json_raises_storage_error(tmp_path):
    path = tmp_path / "portfolio.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PortfolioStorageError) as exc:
        PortfolioService(path).get_portfolio()
    assert str(path) in str(exc.value)


def test_structurally_invalid_document_raises_storage_error(tmp_path):
    path = tmp_path / "portfolio.json"
    path.write_text(json.dumps({"personalInfo": {}, "workExperience": []}), encoding="utf-8")

    with pytest.raises(PortfolioStorageError) as exc:
        PortfolioService(path).get_portfolio()
    assert "education" in str(exc.value)


@pytest.mark.parametrize("doc,message", [
    ([], "must be an object"),
    ({"workExperience": []}, "personalInfo"),
    ({"personalInfo": {}, "workExperience": {}, "education": [], "skills": [], "projects": []}, "workExperience"),
])
def test_validate_portfolio_document(doc, message):
    with pytest.raises(PortfolioValidationError) as exc:
        validate_portfolio_document(doc)
    assert message in str(exc.value)


def test_validate_requires_last_updated():
    doc = {"personalInfo": {}, "workExperience": [], "education": [], "skills": [], "projects": []}
    with pytest.raises(PortfolioValidationError):
        validate_portfolio_document(doc)

    doc["lastUpdated"] = "2024-01-01T00:00:00+00:00"
    assert isinstance(validate_portfolio_document(doc), Portfolio)
