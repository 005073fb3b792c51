"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _reset_app_state_between_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    # App-level history and logo cache are process-wide; keep tests independent.
    from app.main import app

    app.state.analysis_history.clear()
    app.state.logo_service.clear_cache()

    for key in (
        "GITHUB_API_BASE_URL",
        "GITHUB_USER_AGENT",
        "GITHUB_TIMEOUT_SECONDS",
        "ENRICH_PAUSE_MS",
        "PERSONAL_EMAIL_DOMAINS",
        "COMPANY_DOMAIN_OVERRIDES",
    ):
        monkeypatch.delenv(key, raising=False)


def make_contributor_rows(count: int, start: int = 0, prefix: str = "user") -> list[dict]:
    return [
        {
            "id": i + 1,
            "login": f"{prefix}{i}",
            "avatar_url": f"https://avatars.githubusercontent.com/u/{i + 1}",
            "html_url": f"https://github.com/{prefix}{i}",
            "contributions": 10_000 - i,
        }
        for i in range(start, start + count)
    ]


def make_profile(
    login: str,
    company: Optional[str] = None,
    email: Optional[str] = None,
    name: Optional[str] = None,
    location: Optional[str] = None,
) -> dict:
    return {
        "login": login,
        "name": name,
        "email": email,
        "company": company,
        "blog": "",
        "location": location,
    }


@pytest.fixture
def contributor_rows():
    return make_contributor_rows


@pytest.fixture
def profile():
    return make_profile
