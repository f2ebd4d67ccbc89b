"""FastAPI application factory for the dashboard.

Routes:
  GET /           : the grouped patch table (``?refresh=1`` forces a refetch)
  GET /stats      : verification x review cross-tab as HTML
  GET /api/stats  : the same cross-tab as JSON
  GET /health     : liveness probe

Handlers are async and run on one event loop. The only await per request is
the Gerrit fetch inside Dashboard.report(); grid building never yields, so
concurrent requests cannot observe a half-built report.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from patchboard_core.dashboard import Dashboard
from patchboard_core.errors import GerritFetchError, ReportUnavailableError
from patchboard_core.grid import REVIEW_LABELS

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def create_app(dashboard: Dashboard) -> FastAPI:
    app = FastAPI(title="patchboard", docs_url=None, redoc_url=None)
    app.state.dashboard = dashboard

    @app.exception_handler(ReportUnavailableError)
    async def report_unavailable(request: Request, exc: ReportUnavailableError) -> HTMLResponse:
        logger.error("Report unavailable: %s", exc)
        return HTMLResponse(f"Report unavailable: {exc}", status_code=503)

    @app.exception_handler(GerritFetchError)
    async def fetch_failed(request: Request, exc: GerritFetchError) -> HTMLResponse:
        return HTMLResponse(f"Could not fetch changes from Gerrit: {exc}", status_code=502)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request, refresh: bool = False) -> HTMLResponse:
        report = await dashboard.report(force_refresh=refresh)
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "title": dashboard.title,
                "built_at": report.built_at,
                "body": report.body,
                "patch_count": report.patch_count,
                "unlisted_count": report.unlisted_count,
            },
        )

    @app.get("/stats", response_class=HTMLResponse)
    async def stats(request: Request, refresh: bool = False) -> HTMLResponse:
        grid_summary = await dashboard.summary(force_refresh=refresh)
        return templates.TemplateResponse(
            request,
            "stats.html",
            {
                "title": f"{dashboard.title}: statistics",
                "columns": REVIEW_LABELS,
                "summary": grid_summary,
            },
        )

    @app.get("/api/stats")
    async def stats_json(refresh: bool = False) -> JSONResponse:
        grid_summary = await dashboard.summary(force_refresh=refresh)
        return JSONResponse(grid_summary.to_dict())

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app
