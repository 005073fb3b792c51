from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from app.models.analysis import AnalysisRequest, AnalysisResult
from app.models.error import ErrorDetail
from app.services import analysis_service
from app.services.analysis_export import build_export_payload, export_filename
from app.services.analysis_history import AnalysisHistory
from app.services.github_client import ForgeError, NotFoundError, RateLimitedError
from app.services.repository_reference import INVALID_REFERENCE_MESSAGE, parse_repository_reference

router = APIRouter()
log = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorDetail},
    404: {"model": ErrorDetail},
    429: {"model": ErrorDetail},
    502: {"model": ErrorDetail},
}


def get_history(request: Request) -> AnalysisHistory:
    return request.app.state.analysis_history


def _status_for(exc: ForgeError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, RateLimitedError):
        return 429
    return 502


@router.post("/analyses", response_model=AnalysisResult, status_code=201, responses=_ERROR_RESPONSES)
def create_analysis(body: AnalysisRequest, history: AnalysisHistory = Depends(get_history)) -> AnalysisResult:
    """Analyze a repository's contributors by company and record the result in history."""
    ref = parse_repository_reference(body.repository)
    if ref is None:
        raise HTTPException(status_code=400, detail=INVALID_REFERENCE_MESSAGE)

    def on_progress(percent: int, status: str) -> None:
        log.info("analysis %s %d%% %s", ref.full_name, percent, status)

    try:
        result = analysis_service.analyze_repository(ref.owner, ref.repo, on_progress=on_progress)
    except ForgeError as exc:
        log.info("analysis %s failed: %s", ref.full_name, exc)
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc

    history.add(result)
    return result


@router.get("/analyses", response_model=list[AnalysisResult])
def list_analyses(
    limit: int = Query(10, ge=0, le=100),
    history: AnalysisHistory = Depends(get_history),
) -> list[AnalysisResult]:
    """List recent analyses, newest first."""
    return history.recent(limit=limit)


def _find(history: AnalysisHistory, owner: str, repo: str) -> AnalysisResult:
    result = history.latest_for(f"{owner}/{repo}")
    if result is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return result


@router.get(
    "/analyses/{owner}/{repo}",
    response_model=AnalysisResult,
    responses={404: {"model": ErrorDetail}},
)
def get_analysis(owner: str, repo: str, history: AnalysisHistory = Depends(get_history)) -> AnalysisResult:
    """Most recent analysis of a repository."""
    return _find(history, owner, repo)


@router.get("/analyses/{owner}/{repo}/export", responses={404: {"model": ErrorDetail}})
def export_analysis(owner: str, repo: str, history: AnalysisHistory = Depends(get_history)) -> JSONResponse:
    """Download the most recent analysis as a JSON attachment."""
    result = _find(history, owner, repo)
    return JSONResponse(
        content=build_export_payload(result),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(result)}"'},
    )
