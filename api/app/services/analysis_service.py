"""Repository company analysis pipeline.

repository info -> contributors (paginated) -> per-contributor profile
enrichment (sequential) -> company resolution + grouping -> AnalysisResult.

Repository-info and collection errors propagate and abort the run.
Enrichment errors are absorbed per contributor.
"""

from __future__ import annotations

import logging
import math
import os
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from app.models.analysis import AnalysisResult
from app.models.contributor import Contributor
from app.services.company_aggregator import aggregate_contributors
from app.services.contributor_collector import collect_contributors
from app.services.github_client import GitHubClient
from app.services.profile_enricher import enrich_contributor

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

PAUSE_EVERY = 10


def _pause_seconds_from_env(default_ms: float = 100.0) -> float:
    raw = os.getenv("ENRICH_PAUSE_MS", "").strip()
    try:
        ms = float(raw) if raw else default_ms
    except ValueError:
        ms = default_ms
    return max(0.0, ms) / 1000.0


def enrichment_progress(index: int, total: int) -> int:
    """Overall percent after enriching item ``index`` (0-based): spans 40..80."""
    if total <= 0:
        return 40
    return 40 + math.floor(index / total * 40)


def enrich_all(
    client: GitHubClient,
    contributors: list[Contributor],
    on_progress: Optional[ProgressCallback] = None,
    pause_seconds: float = 0.1,
) -> list[Contributor]:
    """Enrich contributors one at a time, in collection order."""
    total = len(contributors)
    enriched: list[Contributor] = []
    for i, contributor in enumerate(contributors):
        enriched.append(enrich_contributor(client, contributor))
        if on_progress:
            on_progress(enrichment_progress(i, total), f"Analyzing contributor {i + 1}/{total}...")
        # Pause after items 0, 10, 20, ...
        if i % PAUSE_EVERY == 0 and pause_seconds > 0:
            time.sleep(pause_seconds)
    return enriched


def analyze_repository(
    owner: str,
    repo: str,
    on_progress: Optional[ProgressCallback] = None,
    client: Optional[GitHubClient] = None,
    pause_seconds: Optional[float] = None,
) -> AnalysisResult:
    gh = client or GitHubClient()
    pause = _pause_seconds_from_env() if pause_seconds is None else pause_seconds

    def report(percent: int, status: str) -> None:
        log.debug("analysis %s/%s progress=%d status=%s", owner, repo, percent, status)
        if on_progress:
            on_progress(percent, status)

    report(10, "Fetching repository information...")
    repo_info = gh.get_repository_info(owner, repo)

    report(20, "Getting contributors...")
    contributors = collect_contributors(gh, owner, repo)
    log.info("analysis %s: collected %d contributors", repo_info.full_name, len(contributors))

    report(40, f"Enriching contributor data ({len(contributors)} contributors)...")
    enriched = enrich_all(gh, contributors, on_progress=report, pause_seconds=pause)

    report(85, "Grouping by companies...")
    companies, unknown = aggregate_contributors(enriched)

    report(100, "Analysis complete!")
    log.info(
        "analysis %s complete: companies=%d unknown=%d",
        repo_info.full_name,
        len(companies),
        len(unknown),
    )
    return AnalysisResult(
        repository=repo_info.full_name,
        total_contributors=len(enriched),
        companies=companies,
        unknown_contributors=unknown,
        last_updated=datetime.now(timezone.utc),
    )
