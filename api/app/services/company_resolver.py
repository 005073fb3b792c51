"""Heuristic company attribution for contributors.

Priority order:
1. profile ``company`` field, normalized
2. email domain, unless the address is anonymized (noreply) or a personal provider
3. no company
"""

from __future__ import annotations

import os
import re
from typing import Optional

from app.models.contributor import Contributor

DEFAULT_PERSONAL_EMAIL_DOMAINS = {
    "gmail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "icloud.com",
    "protonmail.com",
    "tutanota.com",
}

_PARENTHETICAL_RE = re.compile(r"\s*\(.*?\)\s*")
_AFTER_COMMA_RE = re.compile(r",.*$", re.DOTALL)


def _configured_personal_domains() -> set[str]:
    raw = os.getenv("PERSONAL_EMAIL_DOMAINS", "").strip()
    if not raw:
        return set(DEFAULT_PERSONAL_EMAIL_DOMAINS)
    domains = {chunk.strip().lower() for chunk in raw.split(",") if chunk.strip()}
    return domains or set(DEFAULT_PERSONAL_EMAIL_DOMAINS)


def _title_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def normalize_company_name(company: str | None) -> str:
    """Normalize a free-text profile company value.

    Steps run in sequence: drop one leading ``@``, drop the first parenthetical
    span with its surrounding whitespace, truncate at the first comma, trim,
    then title-case each space-separated word.
    """
    if not company:
        return ""
    value = company[1:] if company.startswith("@") else company
    value = _PARENTHETICAL_RE.sub("", value, count=1)
    value = _AFTER_COMMA_RE.sub("", value)
    value = value.strip()
    return " ".join(_title_word(word) for word in value.split(" "))


def company_from_email(email: str | None) -> Optional[str]:
    """Derive a company name from an email domain's first label."""
    if not email or "noreply" in email:
        return None
    parts = email.split("@")
    if len(parts) < 2:
        return None
    domain = parts[1].lower()
    if not domain or domain in _configured_personal_domains():
        return None
    label = domain.split(".")[0]
    name = " ".join(segment[:1].upper() + segment[1:] for segment in label.split("-"))
    return name or None


def resolve_company(contributor: Contributor) -> Optional[str]:
    if contributor.company:
        normalized = normalize_company_name(contributor.company)
        if len(normalized) > 1:
            return normalized

    if contributor.email:
        return company_from_email(contributor.email)

    return None
