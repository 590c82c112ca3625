"""FastAPI app factory for the Ibadat Connect deed API."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ibadat import __version__
from ibadat.api.deeds import router as deeds_router
from ibadat.normalization import get_canonicalizer
from ibadat.observability import configure_logging
from ibadat.settings import Settings, get_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app from; defaults to the cached settings.

    Returns:
        Configured FastAPI instance.
    """
    resolved = settings or get_settings()
    configure_logging(settings=resolved)

    app = FastAPI(title=resolved.api.title, version=__version__)
    if resolved.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=resolved.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.include_router(deeds_router)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok", "rule_table_version": get_canonicalizer().version}

    return app


# For uvicorn, expose `app` at module level
app = create_app()
