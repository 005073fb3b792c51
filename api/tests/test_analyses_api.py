from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.models.analysis import AnalysisResult, CompanyGroup
from app.models.contributor import Contributor
from app.services import analysis_service
from app.services.github_client import NotFoundError, RateLimitedError, TransportError


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _fake_result(owner: str, repo: str) -> AnalysisResult:
    alice = Contributor(id=1, login="alice", contributions=12, company="Acme")
    bob = Contributor(id=2, login="bob", contributions=3)
    return AnalysisResult(
        repository=f"{owner}/{repo}",
        total_contributors=2,
        companies=[CompanyGroup.from_members("Acme", [alice])],
        unknown_contributors=[bob],
    )


@pytest.fixture
def fake_analysis(monkeypatch):
    calls: list[tuple[str, str]] = []

    def _analyze(owner, repo, on_progress=None, **kwargs):
        calls.append((owner, repo))
        if on_progress:
            on_progress(100, "Analysis complete!")
        return _fake_result(owner, repo)

    monkeypatch.setattr(analysis_service, "analyze_repository", _analyze)
    return calls


@pytest.mark.asyncio
async def test_create_analysis_and_history(client: AsyncClient, fake_analysis):
    resp = await client.post("/api/analyses", json={"repository": "https://github.com/octo/widgets.git/"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["repository"] == "octo/widgets"
    assert body["total_contributors"] == 2
    assert body["companies"][0]["name"] == "Acme"
    assert body["companies"][0]["total_contributions"] == 12
    assert body["unknown_contributors"][0]["login"] == "bob"
    assert fake_analysis == [("octo", "widgets")]

    await client.post("/api/analyses", json={"repository": "octo/gadgets"})

    listed = await client.get("/api/analyses")
    assert listed.status_code == 200
    assert [r["repository"] for r in listed.json()] == ["octo/gadgets", "octo/widgets"]

    limited = await client.get("/api/analyses", params={"limit": 1})
    assert len(limited.json()) == 1

    one = await client.get("/api/analyses/octo/widgets")
    assert one.status_code == 200
    assert one.json()["repository"] == "octo/widgets"


@pytest.mark.asyncio
async def test_create_analysis_rejects_unparseable_reference(client: AsyncClient, fake_analysis):
    resp = await client.post("/api/analyses", json={"repository": "not a url"})

    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid GitHub repository URL. Try: https://github.com/owner/repo"}
    assert fake_analysis == []


@pytest.mark.asyncio
async def test_create_analysis_empty_body_is_422(client: AsyncClient):
    resp = await client.post("/api/analyses", json={"repository": ""})

    assert resp.status_code == 422
    assert isinstance(resp.json()["detail"], list)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status",
    [
        (NotFoundError("Repository not found", status_code=404), 404),
        (RateLimitedError("Rate limit exceeded. Please try again later.", status_code=403), 429),
        (TransportError("GitHub API error: Bad Gateway", status_code=502), 502),
    ],
)
async def test_create_analysis_maps_forge_errors(client: AsyncClient, monkeypatch, error, status):
    def _analyze(owner, repo, on_progress=None, **kwargs):
        raise error

    monkeypatch.setattr(analysis_service, "analyze_repository", _analyze)

    resp = await client.post("/api/analyses", json={"repository": "octo/widgets"})

    assert resp.status_code == status
    assert resp.json() == {"detail": str(error)}
    assert len(app.state.analysis_history) == 0


@pytest.mark.asyncio
async def test_get_missing_analysis_is_404(client: AsyncClient):
    resp = await client.get("/api/analyses/nobody/nothing")

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Analysis not found"}

    export = await client.get("/api/analyses/nobody/nothing/export")
    assert export.status_code == 404


@pytest.mark.asyncio
async def test_export_analysis(client: AsyncClient, fake_analysis):
    await client.post("/api/analyses", json={"repository": "octo/widgets"})

    resp = await client.get("/api/analyses/octo/widgets/export")

    assert resp.status_code == 200
    assert 'filename="octo-widgets-company-analysis.json"' in resp.headers["content-disposition"]
    body = resp.json()
    assert body["summary"]["companies_found"] == 1
    assert body["summary"]["individual_contributors"] == 1
    assert body["companies"][0]["contributors"][0]["github_username"] == "alice"


@pytest.mark.asyncio
async def test_company_logo_endpoint(client: AsyncClient, monkeypatch):
    seen: list[str] = []

    def _fetch(name):
        seen.append(name)
        return "https://logo.clearbit.com/acme.com"

    monkeypatch.setattr(app.state.logo_service, "fetch_company_logo", _fetch)

    resp = await client.get("/api/companies/Acme Corp/logo")

    assert resp.status_code == 200
    assert resp.json() == {
        "company": "Acme Corp",
        "domain": "acme.com",
        "logo_url": "https://logo.clearbit.com/acme.com",
    }
    assert seen == ["Acme Corp"]
