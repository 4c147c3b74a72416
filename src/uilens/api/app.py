"""FastAPI application factory for uilens."""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..core.config import config
from ..core.errors import ElementNotFoundError, NoScreenCapturedError, StaleElementIndexError, UILensError
from ..core.logger import log
from .routes import get_session, session_router, ui_router

# Status codes for typed errors; anything else is a bad request
ERROR_STATUS = (
    (StaleElementIndexError, 409),
    (ElementNotFoundError, 404),
    (NoScreenCapturedError, 404),
)


def status_for(error: UILensError) -> int:
    """HTTP status for a uilens error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 400


def create_app() -> FastAPI:
    """Create the uilens API.

    Stateless analysis lives under ``/api/v1/ui``; the capture cache used
    for index-based lookups lives under ``/api/v1/session``.
    """
    config.validate_config()

    app = FastAPI(
        title="uilens API",
        description="UI hierarchy analysis for LLM-driven device automation",
        version=__version__,
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def time_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        log.debug(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response

    @app.exception_handler(UILensError)
    async def uilens_error_handler(request: Request, error: UILensError) -> JSONResponse:
        status_code = status_for(error)
        log.warning(f"{request.url.path}: {error.code} ({status_code})")
        return JSONResponse(status_code=status_code, content={"detail": error.to_dict()})

    app.include_router(ui_router, prefix="/api/v1/ui", tags=["ui"])
    app.include_router(session_router, prefix="/api/v1/session", tags=["session"])

    @app.get("/health")
    async def health_check():
        """Liveness plus the capture generation the session is on."""
        return {
            "status": "healthy",
            "version": __version__,
            "generation": get_session().generation,
        }

    @app.get("/")
    async def index():
        """List the analysis and session endpoints."""
        return {
            "service": "uilens",
            "version": __version__,
            "endpoints": sorted({route.path for route in app.routes if route.path.startswith("/api/")}),
        }

    return app


def main() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    log.info(f"uilens API listening on {config.api_host}:{config.api_port}")
    uvicorn.run(create_app(), host=config.api_host, port=config.api_port)


if __name__ == "__main__":
    main()
