"""Analysis result models: repository info, company groups, results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from app.models.contributor import Contributor


class RepositoryReference(BaseModel):
    """Owner/repo pair parsed from user input."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class RepositoryInfo(BaseModel):
    """Repository metadata (GET /repos/{owner}/{repo})."""

    owner: str
    repo: str
    full_name: str
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0


class CompanyGroup(BaseModel):
    """Contributors attributed to one company. Totals are computed once by the aggregator."""

    name: str = Field(min_length=1)
    contributors: list[Contributor] = Field(default_factory=list)
    total_contributions: int = 0
    employee_count: int = 0

    @classmethod
    def from_members(cls, name: str, members: list[Contributor]) -> "CompanyGroup":
        ordered = sorted(members, key=lambda c: c.contributions, reverse=True)
        return cls(
            name=name,
            contributors=ordered,
            total_contributions=sum(c.contributions for c in ordered),
            employee_count=len(ordered),
        )


class AnalysisResult(BaseModel):
    """Full output of one repository analysis."""

    repository: str
    total_contributors: int
    companies: list[CompanyGroup] = Field(default_factory=list)
    unknown_contributors: list[Contributor] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AnalysisRequest(BaseModel):
    """POST /api/analyses body."""

    repository: Annotated[
        str,
        Field(min_length=1, description="GitHub URL, github.com/owner/repo, or owner/repo"),
    ]


class CompanyLogo(BaseModel):
    """GET /api/companies/{name}/logo response."""

    company: str
    domain: Optional[str] = None
    logo_url: Optional[str] = None
