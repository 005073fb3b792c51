from __future__ import annotations

import re
from typing import Optional

from app.models.analysis import RepositoryReference

INVALID_REFERENCE_MESSAGE = "Invalid GitHub repository URL. Try: https://github.com/owner/repo"

_PATTERNS = (
    re.compile(r"^https?://github\.com/([^/]+)/([^/]+)"),
    re.compile(r"^github\.com/([^/]+)/([^/]+)"),
    re.compile(r"^([^/]+)/([^/]+)$"),
)


def parse_repository_reference(text: str | None) -> Optional[RepositoryReference]:
    """Parse a GitHub URL, ``github.com/owner/repo`` or ``owner/repo``. Returns None when unparseable."""
    if not text:
        return None
    cleaned = text.strip().rstrip("/")
    for pattern in _PATTERNS:
        m = pattern.match(cleaned)
        if not m:
            continue
        owner, repo = m.group(1), m.group(2)
        if repo.endswith(".git"):
            repo = repo[:-4]
        if not owner or not repo:
            return None
        return RepositoryReference(owner=owner, repo=repo)
    return None
