from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.models.analysis import CompanyLogo
from app.services.logo_service import LogoService, extract_domain

router = APIRouter()


def get_logo_service(request: Request) -> LogoService:
    return request.app.state.logo_service


@router.get("/companies/{name}/logo", response_model=CompanyLogo)
def get_company_logo(name: str, logos: LogoService = Depends(get_logo_service)) -> CompanyLogo:
    """Best-effort logo URL for a company name (cached for 24h)."""
    if not name.strip():
        return CompanyLogo(company=name)
    return CompanyLogo(
        company=name,
        domain=extract_domain(name),
        logo_url=logos.fetch_company_logo(name),
    )
