import os

import pytest

# No test may touch the network, and the app must not write into the repo's data/ directory.
os.environ["PORTFOLIO_WEBSITE_LOOKUP_ENABLED"] = "false"


@pytest.fixture(autouse=True)
def portfolio_data_path(tmp_path, monkeypatch):
    from app.core.settings import get_settings

    path = tmp_path / "portfolio.json"
    monkeypatch.setenv("PORTFOLIO_DATA_PATH", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()
