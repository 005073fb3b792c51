"""JSON export of an analysis result."""

from __future__ import annotations

from typing import Any

from app.models.analysis import AnalysisResult


def export_filename(result: AnalysisResult) -> str:
    return f"{result.repository.replace('/', '-', 1)}-company-analysis.json"


def build_export_payload(result: AnalysisResult) -> dict[str, Any]:
    company_contributors = sum(company.employee_count for company in result.companies)
    return {
        "repository": result.repository,
        "analyzed_at": result.last_updated.isoformat(),
        "summary": {
            "total_contributors": result.total_contributors,
            "company_contributors": company_contributors,
            "individual_contributors": len(result.unknown_contributors),
            "companies_found": len(result.companies),
        },
        "companies": [
            {
                "name": company.name,
                "employee_count": company.employee_count,
                "total_contributions": company.total_contributions,
                "contributors": [
                    {
                        "github_username": c.login,
                        "name": c.name,
                        "contributions": c.contributions,
                        "location": c.location,
                    }
                    for c in company.contributors
                ],
            }
            for company in result.companies
        ],
    }
