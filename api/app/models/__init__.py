"""Pydantic models."""

from app.models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    CompanyGroup,
    CompanyLogo,
    RepositoryInfo,
    RepositoryReference,
)
from app.models.contributor import Contributor
from app.models.error import ErrorDetail

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "CompanyGroup",
    "CompanyLogo",
    "Contributor",
    "ErrorDetail",
    "RepositoryInfo",
    "RepositoryReference",
]
