#!/usr/bin/env python3
"""Group a GitHub repository's contributors by company.

Usage:
  python scripts/analyze_repository.py <owner/repo | URL> [--output PATH] [--pause-ms N] [-v]

Notes:
- Uses anonymous GitHub API limits (60 requests/hour); large repositories need patience
- Profiles are fetched one at a time; failures leave the contributor unenriched
- --output writes the JSON export (same shape as GET /api/analyses/{owner}/{repo}/export)
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

_api_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _api_dir)

from app.services.analysis_export import build_export_payload, export_filename
from app.services.analysis_service import analyze_repository
from app.services.github_client import ForgeError
from app.services.repository_reference import INVALID_REFERENCE_MESSAGE, parse_repository_reference

log = logging.getLogger(__name__)


def _print_summary(payload: dict, top: int) -> None:
    summary = payload["summary"]
    print(f"Repository: {payload['repository']}")
    print(
        f"Contributors: {summary['total_contributors']} "
        f"(company: {summary['company_contributors']}, individual: {summary['individual_contributors']})"
    )
    print(f"Companies found: {summary['companies_found']}")
    for company in payload["companies"][:top]:
        print(
            f"  {company['name']}: {company['employee_count']} contributors, "
            f"{company['total_contributions']} contributions"
        )


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Group GitHub repository contributors by company")
    ap.add_argument("repository", help="GitHub URL, github.com/owner/repo, or owner/repo")
    ap.add_argument(
        "--output",
        default=None,
        help="Write the JSON export here ('-' for <owner>-<repo>-company-analysis.json in cwd)",
    )
    ap.add_argument(
        "--pause-ms",
        type=float,
        default=None,
        help="Pause after every 10th profile fetch (default: ENRICH_PAUSE_MS or 100).",
    )
    ap.add_argument("--top", type=int, default=20, help="Companies to print (default 20).")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    ref = parse_repository_reference(args.repository)
    if ref is None:
        print(INVALID_REFERENCE_MESSAGE, file=sys.stderr)
        return 2

    def on_progress(percent: int, status: str) -> None:
        log.info("[%3d%%] %s", percent, status)

    pause = None if args.pause_ms is None else max(0.0, args.pause_ms) / 1000.0
    try:
        result = analyze_repository(ref.owner, ref.repo, on_progress=on_progress, pause_seconds=pause)
    except ForgeError as e:
        print(f"Analysis failed: {e}", file=sys.stderr)
        return 1

    payload = build_export_payload(result)
    _print_summary(payload, max(0, args.top))

    if args.output:
        path = export_filename(result) if args.output == "-" else args.output
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        log.info("Export written to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
