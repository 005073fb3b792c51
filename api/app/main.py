from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.routers import analyses, companies, health
from app.services.analysis_history import AnalysisHistory
from app.services.logo_service import LogoService

app = FastAPI(title="GitHub Company Analyzer API", version=health.HEALTH_VERSION)
logger = logging.getLogger("company_analyzer.api")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
logger.propagate = False
logger.setLevel(logging.INFO)


def _slow_request_ms_threshold() -> float:
    raw = os.getenv("API_SLOW_REQUEST_MS", "30000").strip()
    try:
        return max(25.0, float(raw))
    except ValueError:
        return 30000.0


# Configure CORS
allowed_origins_str = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000")
allowed_origins = [origin.strip() for origin in allowed_origins_str.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.analysis_history = AnalysisHistory()
app.state.logo_service = LogoService()


@app.get("/", include_in_schema=False)
async def root():
    """Landing info for API discovery."""
    return {
        "name": app.title,
        "version": health.HEALTH_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }


app.include_router(analyses.router, prefix="/api", tags=["analyses"])
app.include_router(companies.router, prefix="/api", tags=["companies"])
app.include_router(health.router, prefix="/api", tags=["health"])


@app.middleware("http")
async def log_slow_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    if elapsed_ms >= _slow_request_ms_threshold():
        logger.warning(
            "slow_api_request method=%s path=%s status=%s elapsed_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
    return response
