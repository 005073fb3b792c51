"""Paginated collection of a repository's contributors."""

from __future__ import annotations

import logging

from app.models.contributor import Contributor
from app.services.github_client import GitHubClient

log = logging.getLogger(__name__)

PER_PAGE = 100
MAX_PAGES = 10


def collect_contributors(
    client: GitHubClient,
    owner: str,
    repo: str,
    per_page: int = PER_PAGE,
    max_pages: int = MAX_PAGES,
) -> list[Contributor]:
    """List contributors in forge order. Caps pages to avoid runaway API usage.

    Stops on an empty or non-list page, on a short page, or after ``max_pages``.
    Request errors propagate; there is no partial result.
    """
    out: list[Contributor] = []
    for page in range(1, max_pages + 1):
        data = client.get_json(f"/repos/{owner}/{repo}/contributors?page={page}&per_page={per_page}")
        if not isinstance(data, list) or not data:
            break
        out.extend(Contributor.from_api(row) for row in data if isinstance(row, dict))
        log.debug("contributors page=%d rows=%d total=%d", page, len(data), len(out))
        if len(data) < per_page:
            break
    return out
