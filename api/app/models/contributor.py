"""GitHub contributor model.

A contributor is created from one entry of the repository contributors list
and enriched at most once with public-profile fields. Records are frozen;
enrichment produces a new record.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

PROFILE_FIELDS = ("name", "email", "company", "blog", "location")


class Contributor(BaseModel):
    """Repository contributor with optional profile enrichment."""

    model_config = ConfigDict(frozen=True)

    id: int
    login: str
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None
    contributions: int = Field(default=0, ge=0)

    # Profile fields (GET /users/{login})
    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Contributor":
        return cls(
            id=int(data.get("id") or 0),
            login=str(data.get("login") or ""),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
            contributions=max(0, int(data.get("contributions") or 0)),
        )

    def with_profile(self, profile: dict) -> "Contributor":
        """Return a copy with profile fields merged in. Non-string values are ignored."""
        update: dict[str, Optional[str]] = {}
        for field in PROFILE_FIELDS:
            value = profile.get(field)
            update[field] = value if isinstance(value, str) else None
        return self.model_copy(update=update)
