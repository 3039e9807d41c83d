"""GET /portfolio and POST /portfolio/resume against a temporary data file."""

import json

from fastapi.testclient import TestClient

from app.api.routes.portfolio import get_portfolio_service
from app.core.portfolio_service import PortfolioService
from app.main import app

client = TestClient(app)

RESUME = (
    "Jane Doe\n"
    "jane.doe@example.com\n"
    "EXPERIENCE\n"
    "Netflix - Engineer | 2019 - Present\n"
    "- Streamed things\n"
).encode("utf-8")


def test_portfolio_missing_is_404():
    r = client.get("/portfolio")
    assert r.status_code == 404


def test_upload_resume_creates_and_persists_portfolio(portfolio_data_path):
    r = client.post("/portfolio/resume", files={"file": ("resume.txt", RESUME, "text/plain")})
    assert r.status_code == 200
    data = r.json()
    assert data["personalInfo"]["name"] == "Jane Doe"
    assert data["workExperience"][0]["website"] == "https://www.netflix.com"
    assert data["lastUpdated"]

    stored = json.loads(portfolio_data_path.read_text(encoding="utf-8"))
    assert stored["workExperience"][0]["company"] == "Netflix"

    r = client.get("/portfolio")
    assert r.status_code == 200
    assert r.json() == data


def test_second_upload_keeps_missing_personal_fields(portfolio_data_path):
    client.post("/portfolio/resume", files={"file": ("resume.txt", RESUME, "text/plain")})

    second = b"Jane Doe\nEXPERIENCE\nSpotify - Developer | 2021 - Present\n"
    r = client.post("/portfolio/resume", files={"file": ("resume.txt", second, "text/plain")})
    assert r.status_code == 200
    data = r.json()
    assert data["personalInfo"]["email"] == "jane.doe@example.com"
    assert [e["company"] for e in data["workExperience"]] == ["Spotify"]


def test_corrupt_store_is_500(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[]", encoding="utf-8")
    app.dependency_overrides[get_portfolio_service] = lambda: PortfolioService(path)
    try:
        assert client.get("/portfolio").status_code == 500
    finally:
        app.dependency_overrides.clear()


def test_upload_errors_match_parse_route():
    r = client.post("/portfolio/resume", files={"file": ("resume.txt", b"", "text/plain")})
    assert r.status_code == 400
