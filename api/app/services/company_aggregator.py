"""Group enriched contributors by resolved company."""

from __future__ import annotations

from app.models.analysis import CompanyGroup
from app.models.contributor import Contributor
from app.services.company_resolver import resolve_company


def aggregate_contributors(
    contributors: list[Contributor],
) -> tuple[list[CompanyGroup], list[Contributor]]:
    """Return (companies, unknown contributors), both ordered by contributions descending.

    Buckets are keyed by exact normalized name. Sorting is stable, so ties keep
    collection order.
    """
    buckets: dict[str, list[Contributor]] = {}
    unknown: list[Contributor] = []

    for contributor in contributors:
        company = resolve_company(contributor)
        if company:
            buckets.setdefault(company, []).append(contributor)
        else:
            unknown.append(contributor)

    companies = [CompanyGroup.from_members(name, members) for name, members in buckets.items()]
    companies.sort(key=lambda group: group.total_contributions, reverse=True)
    unknown.sort(key=lambda c: c.contributions, reverse=True)
    return companies, unknown
