"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from riseup_site.config import STATIC_DIR
from riseup_site.routers import admin, chat_api, pages
from riseup_site.services.auth import LoginRequired, login_redirect

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        from riseup_site.scheduler import scheduler
        scheduler.start()
        logger.info("Scheduler started — purging expired drafts every hour")
    except Exception as e:
        logger.warning("Scheduler failed to start: %s", e)

    yield

    try:
        from riseup_site.scheduler import scheduler
        if scheduler.running:
            scheduler.shutdown(wait=False)
    except Exception as e:
        logger.warning("Scheduler failed to stop: %s", e)


def create_app() -> FastAPI:
    app = FastAPI(
        title="RiseUp Youth Football",
        description="Public site and AI-assisted content management for the RiseUp league.",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.add_exception_handler(LoginRequired, login_redirect)

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    # Admin JSON API first so /admin/api/* never falls through to page routes
    app.include_router(chat_api.router)
    app.include_router(admin.router, include_in_schema=False)
    app.include_router(pages.router, include_in_schema=False)

    return app
