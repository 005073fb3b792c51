"""GitHub API client.

REST wrapper with:
- anonymous requests with a fixed identifying User-Agent
- error taxonomy: NotFoundError (404), RateLimitedError (403), TransportError (other)
- redirects followed, so renamed or transferred repositories resolve

No retries happen here; callers decide whether an error aborts the run.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import httpx

from app.models.analysis import RepositoryInfo

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "GitHub-Company-Analyzer"


class ForgeError(RuntimeError):
    """Base class for GitHub API failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ForgeError):
    pass


class RateLimitedError(ForgeError):
    pass


class TransportError(ForgeError):
    pass


def _env_timeout(default: float = 20.0) -> float:
    raw = os.getenv("GITHUB_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return default
    try:
        return max(1.0, float(raw))
    except ValueError:
        return default


class GitHubClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        base = base_url or os.getenv("GITHUB_API_BASE_URL") or DEFAULT_BASE_URL
        self._base_url = base.rstrip("/")
        self._timeout = timeout if timeout is not None else _env_timeout()
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent or os.getenv("GITHUB_USER_AGENT") or DEFAULT_USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _request(self, method: str, url: str) -> httpx.Response:
        """Send one request; redirects (renamed/transferred repos) are followed to the final response."""
        try:
            with httpx.Client(timeout=self._timeout, headers=self._headers, follow_redirects=True) as client:
                return client.request(method, url)
        except httpx.HTTPError as exc:
            raise TransportError(f"GitHub API error: {exc}") from exc

    @staticmethod
    def _raise_for_status(r: httpx.Response) -> None:
        if r.status_code == 404:
            raise NotFoundError("Repository not found", status_code=404)
        if r.status_code == 403:
            raise RateLimitedError("Rate limit exceeded. Please try again later.", status_code=403)
        if r.status_code >= 300:
            raise TransportError(f"GitHub API error: {r.reason_phrase}", status_code=r.status_code)

    def get_json(self, path: str) -> Any:
        """GET JSON for a path or full URL."""
        url = path if path.startswith("http") else f"{self._base_url}{path}"
        r = self._request("GET", url)
        self._raise_for_status(r)
        try:
            return r.json()
        except ValueError as exc:
            raise TransportError("GitHub API error: invalid JSON body", status_code=r.status_code) from exc

    def get_repo(self, owner: str, repo: str) -> dict:
        return self.get_json(f"/repos/{owner}/{repo}")

    def get_user(self, login: str) -> dict:
        return self.get_json(f"/users/{login}")

    def get_repository_info(self, owner: str, repo: str) -> RepositoryInfo:
        data = self.get_repo(owner, repo)
        if not isinstance(data, dict):
            raise TransportError("GitHub API error: unexpected repository payload")
        owner_info = data.get("owner") or {}
        return RepositoryInfo(
            owner=owner_info.get("login") or owner,
            repo=data.get("name") or repo,
            full_name=data.get("full_name") or f"{owner}/{repo}",
            description=data.get("description"),
            stars=int(data.get("stargazers_count") or 0),
            forks=int(data.get("forks_count") or 0),
        )
