from fastapi.testclient import TestClient
from app.core.settings import get_settings
from app.main import app

client = TestClient(app)

RESUME = b"""Jane Doe
jane.doe@example.com | (555) 123-4567
Lafayette, LA
https://github.com/janedoe

PROFESSIONAL EXPERIENCE
Google \xe2\x80\x94 Senior Software Engineer | Jan 2019 \xe2\x80\x93 Present
\xe2\x80\xa2 Built Python services on AWS
Initech \xe2\x80\x94 Developer | 2015 - 2018
\xe2\x80\xa2 Maintained Java batch jobs

EDUCATION
Stanford University | 2011 - 2015
Bachelor of Science in Computer Science

SKILLS
Technical: Python, Docker, AWS
"""


def test_parse_txt_returns_camel_case_resume():
    files = {"file": ("resume.txt", RESUME, "text/plain")}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    assert set(data) == {"personalInfo", "workExperience", "education", "skills", "projects"}
    info = data["personalInfo"]
    assert info["name"] == "Jane Doe"
    assert info["email"] == "jane.doe@example.com"
    assert info["github"] == "https://github.com/janedoe"
    assert info["summary"].startswith("Senior Software Engineer with ")

    first = data["workExperience"][0]
    assert first["id"] == "exp_1"
    assert first["company"] == "Google"
    assert first["startDate"] == "Jan 2019"
    assert first["current"] is True
    assert first["website"] == "https://www.google.com"
    assert data["workExperience"][1]["endDate"] == "2018"

    assert data["education"][0]["institution"] == "Stanford University"
    assert data["education"][0]["website"] == "https://www.stanford.edu"
    assert [s["name"] for s in data["skills"]] == ["Python", "Docker", "AWS"]
    assert data["projects"] == []


def test_empty_upload_is_400():
    r = client.post("/parse", files={"file": ("resume.txt", b"", "text/plain")})
    assert r.status_code == 400


def test_unsupported_type_is_415():
    r = client.post("/parse", files={"file": ("resume.zip", b"PK\x03\x04", "application/zip")})
    assert r.status_code == 415
    assert "application/zip" in r.json()["detail"]


def test_whitespace_only_text_is_422():
    r = client.post("/parse", files={"file": ("resume.txt", b"  \n\t\n", "text/plain")})
    assert r.status_code == 422


def test_oversized_upload_is_413(monkeypatch):
    monkeypatch.setenv("PORTFOLIO_MAX_UPLOAD_BYTES", "16")
    get_settings.cache_clear()

    r = client.post("/parse", files={"file": ("resume.txt", RESUME, "text/plain")})
    assert r.status_code == 413


def test_health_routes():
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "running"
